"""HTTP retrieval of the two upstream documents, with a TTL cache."""

from __future__ import annotations

import httpx

from release_spine.core.cache import CacheBackend, InMemoryCache
from release_spine.core.errors import (
    NetworkError,
    SourceError,
    SourceNotFoundError,
    SourceUnavailableError,
    TimeoutError,
)
from release_spine.core.logging import get_logger
from release_spine.core.settings import ReleaseSpineSettings, get_settings

logger = get_logger(__name__)

RELEASE_INFO_CACHE_KEY = "azure-local-release-info"
SOLUTION_UPDATES_CACHE_KEY = "azure-local-solution-updates"


class DocumentSource:
    """
    Fetch the release information page and the offline updates table.

    Bodies are cached per document for the TTL configured in settings.
    A passed-in ``client`` is used as-is and never closed here, so tests
    can hand over an ``httpx.Client`` built on a ``MockTransport``.
    """

    def __init__(
        self,
        settings: ReleaseSpineSettings | None = None,
        *,
        client: httpx.Client | None = None,
        cache: CacheBackend | None = None,
    ):
        self.settings = settings or get_settings()
        self._client = client
        self.cache = cache if cache is not None else InMemoryCache(max_size=8)

    def fetch_release_info(self) -> str:
        """Return the HTML release information page."""
        return self._fetch(
            "release-info",
            self.settings.release_info_url,
            RELEASE_INFO_CACHE_KEY,
            self.settings.release_info_ttl_seconds,
        )

    def fetch_solution_updates(self) -> str:
        """Return the Markdown offline updates page."""
        return self._fetch(
            "solution-updates",
            self.settings.solution_updates_url,
            SOLUTION_UPDATES_CACHE_KEY,
            self.settings.solution_updates_ttl_seconds,
        )

    def fetch_all(self) -> tuple[str, str]:
        """Return ``(html, markdown)``."""
        return self.fetch_release_info(), self.fetch_solution_updates()

    def invalidate(self) -> None:
        """Drop both cached documents."""
        for key in (RELEASE_INFO_CACHE_KEY, SOLUTION_UPDATES_CACHE_KEY):
            self.cache.delete(key)

    # ------------------------------------------------------------------ #

    def _fetch(self, source_name: str, url: str, cache_key: str, ttl_seconds: int) -> str:
        cached = self._cache_get(cache_key)
        if cached is not None:
            logger.debug("document_cache_hit", source=source_name, key=cache_key)
            return cached

        body = self._download(source_name, url)
        self._cache_set(cache_key, body, ttl_seconds)
        logger.info("document_fetched", source=source_name, url=url, bytes=len(body))
        return body

    def _download(self, source_name: str, url: str) -> str:
        headers = {"User-Agent": self.settings.user_agent}
        try:
            if self._client is not None:
                response = self._client.get(url, headers=headers)
            else:
                with httpx.Client(
                    timeout=self.settings.fetch_timeout_seconds,
                    follow_redirects=True,
                ) as client:
                    response = client.get(url, headers=headers)
        except httpx.TimeoutException as e:
            raise TimeoutError(f"Timed out fetching {source_name}", cause=e).with_context(
                source_name=source_name, url=url
            ) from e
        except httpx.TransportError as e:
            raise NetworkError(f"Failed to reach {source_name}", cause=e).with_context(
                source_name=source_name, url=url
            ) from e

        if response.is_success:
            return response.text

        status = response.status_code
        if status == 404:
            error_cls: type[SourceError] = SourceNotFoundError
        elif status >= 500:
            error_cls = SourceUnavailableError
        else:
            error_cls = SourceError
        raise error_cls(f"Failed to fetch {source_name}: {status} {response.reason_phrase}").with_context(
            source_name=source_name, url=url, http_status=status
        )

    def _cache_get(self, key: str) -> str | None:
        try:
            return self.cache.get(key)
        except Exception as e:
            logger.warning("document_cache_read_failed", key=key, error=str(e))
            return None

    def _cache_set(self, key: str, value: str, ttl_seconds: int) -> None:
        # A zero TTL disables caching for that document
        if ttl_seconds <= 0:
            return
        try:
            self.cache.set(key, value, ttl_seconds=ttl_seconds)
        except Exception as e:
            logger.warning("document_cache_write_failed", key=key, error=str(e))
