"""
Azure Local document connector - parsing the release HTML and update Markdown.

This module turns the two upstream documents into raw records. Parsing is
structural: it finds rows, pulls cell text and links, and matches the few
literal markers each row carries. Classification happens downstream in
the transformer.

Release information page (HTML):
    Two tab panels ("existing deployments", "new deployments"), each with
    zero or more tables, plus an "Older versions" heading followed by one
    table. Each row reads:

        | 11.2505.1001.22 <br><br> Availability date: <br><br> 2025-05-28 |
        | 25398.1611 | <a href=...>security</a> | <a>what's new</a> | <a>known issues</a> |

Offline solution updates page (Markdown):
    One pipe table whose header starts with "OS Build":

        | OS Build | Download URI | SHA256 |
        |---|---|---|
        | 25398.1611 | [11.2505.1001.22](https://...) <br><br> Availability date: <br><br> 2025-05-28 | 6F1B... |

Rows that fail their pattern are dropped, never partially emitted, and a
document without the expected structure yields an empty list.
"""

import re
from dataclasses import dataclass
from datetime import date

from bs4 import BeautifulSoup
from bs4.element import Tag

from release_spine.core.logging import get_logger
from release_spine.domains.azure_local.schema import (
    AVAILABILITY_MARKER,
    DOCS_BASE_PATH,
    DOCS_ORIGIN,
    EXISTING_DEPLOYMENTS,
    MIN_RELEASE_CELLS,
    MIN_SOLUTION_COLUMNS,
    NEW_DEPLOYMENTS,
    OLDER_VERSIONS_ID,
    OLDER_VERSIONS_TEXT,
    SOLUTION_TABLE_HEADER,
)

logger = get_logger(__name__)

_VERSION_TOKEN_RE = re.compile(r"^(\S+)")
_HTML_DATE_RE = re.compile(re.escape(AVAILABILITY_MARKER) + r"\s*(\d{4}-\d{2}-\d{2})")
_MD_LINK_RE = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")
_MD_DATE_RE = re.compile(
    re.escape(AVAILABILITY_MARKER) + r"\s*(?:<br\s*/?>\s*)*(\d{4}-\d{2}-\d{2})",
    re.IGNORECASE,
)
_MD_HEADER_RE = re.compile(r"^\|?\s*" + re.escape(SOLUTION_TABLE_HEADER) + r"\b")
_WHITESPACE_RE = re.compile(r"\s+")
_HEADING_TAGS = ["h1", "h2", "h3", "h4", "h5", "h6"]


@dataclass(frozen=True)
class RawRelease:
    """
    A release row as parsed from the release information page.

    Minimal processing - text is trimmed, the date is typed, and the
    advisory links are made absolute.
    """

    version: str
    os_build: str
    availability_date: date
    security_update_url: str = ""
    whats_new_url: str = ""
    known_issues_url: str = ""
    new_deployments: bool = False


@dataclass(frozen=True)
class RawSolutionUpdate:
    """A downloadable offline update bundle as parsed from the Markdown table."""

    os_build: str
    download_uri: str
    sha256: str
    availability_date: date


# =============================================================================
# URL NORMALIZATION
# =============================================================================


def normalize_url(
    url: str,
    *,
    origin: str = DOCS_ORIGIN,
    base_path: str = DOCS_BASE_PATH,
) -> str:
    """
    Make a documentation link absolute.

    - ``https://...`` / ``http://...``  unchanged
    - ``//host/path``                    scheme added
    - ``/en-us/...``                     prefixed with the docs origin
    - ``known-issues``                   prefixed with the docs base path
    - ``""``                             unchanged
    """
    url = url.strip()
    if not url:
        return ""
    if url.startswith(("http://", "https://")):
        return url
    if url.startswith("//"):
        return f"https:{url}"
    if url.startswith("/"):
        return f"{origin.rstrip('/')}{url}"
    return f"{base_path.rstrip('/')}/{url}"


# =============================================================================
# HTML: RELEASE INFORMATION
# =============================================================================


def parse_release_info(
    html: str,
    *,
    origin: str = DOCS_ORIGIN,
    base_path: str = DOCS_BASE_PATH,
) -> list[RawRelease]:
    """
    Parse the release information page into raw release records.

    Args:
        html: Full HTML document text
        origin: Origin for root-relative links
        base_path: Base path for bare relative links

    Returns:
        RawRelease per valid row, in document order
    """
    if html is None:
        raise TypeError("html document must be a string, got None")

    soup = BeautifulSoup(html, "html.parser")
    releases: list[RawRelease] = []
    discarded = 0

    for table, new_deployments in _iter_section_tables(soup):
        for row in table.find_all("tr"):
            # Rows of a nested table are read when that table is visited
            if row.find_parent("table") is not table:
                continue
            cells = row.find_all("td", recursive=False)
            if len(cells) < MIN_RELEASE_CELLS:
                continue

            record = _parse_release_row(cells, new_deployments, origin, base_path)
            if record is None:
                discarded += 1
                continue
            releases.append(record)

    logger.debug("release_rows_parsed", parsed=len(releases), discarded=discarded)
    return releases


def _iter_section_tables(soup: BeautifulSoup) -> list[tuple[Tag, bool]]:
    """
    Collect (table, new_deployments) pairs in document order.

    Falls back to reading every table as "existing deployments" when the
    page carries none of the section markers.
    """
    seen: set[int] = set()
    found: list[tuple[Tag, bool]] = []

    def _add(table: Tag, new_deployments: bool) -> None:
        if id(table) in seen:
            return
        seen.add(id(table))
        found.append((table, new_deployments))

    sections = [
        (el, _section_kind(el) == NEW_DEPLOYMENTS)
        for el in soup.find_all(_is_deployment_section)
    ]
    for section, new_deployments in sections:
        for table in section.find_all("table"):
            _add(table, new_deployments)

    heading = soup.find(_is_older_versions_heading)
    if heading is not None:
        table = heading.find_next("table")
        if table is not None:
            _add(table, False)

    if not sections and heading is None:
        for table in soup.find_all("table"):
            _add(table, False)

    # Sections may be nested inside each other's containers; keep page order
    order = {id(t): i for i, t in enumerate(soup.find_all("table"))}
    found.sort(key=lambda pair: order.get(id(pair[0]), len(order)))
    return found


def _section_kind(tag: Tag) -> str | None:
    for attr in ("data-tab", "id"):
        value = tag.get(attr)
        if not isinstance(value, str):
            continue
        value = value.strip().lower()
        if value.endswith(NEW_DEPLOYMENTS):
            return NEW_DEPLOYMENTS
        if value.endswith(EXISTING_DEPLOYMENTS):
            return EXISTING_DEPLOYMENTS
    return None


def _is_deployment_section(tag: Tag) -> bool:
    # Tab links (<a href="#...">) carry no tables; only containers count
    return tag.name not in ("a", "li", "button") and _section_kind(tag) is not None


def _is_older_versions_heading(tag: Tag) -> bool:
    if tag.name not in _HEADING_TAGS:
        return False
    if (tag.get("id") or "").lower() == OLDER_VERSIONS_ID:
        return True
    return OLDER_VERSIONS_TEXT in tag.get_text(" ", strip=True).lower()


def _parse_release_row(
    cells: list[Tag],
    new_deployments: bool,
    origin: str,
    base_path: str,
) -> RawRelease | None:
    """Parse a single table row; None if version or date cannot be matched."""
    version_text = cells[0].get_text(" ", strip=True)

    version_match = _VERSION_TOKEN_RE.match(version_text)
    date_match = _HTML_DATE_RE.search(version_text)
    if not version_match or not date_match:
        return None

    availability_date = _parse_date(date_match.group(1))
    if availability_date is None:
        return None

    def _href(index: int) -> str:
        if index >= len(cells):
            return ""
        anchor = cells[index].find("a")
        href = anchor.get("href") if anchor is not None else None
        return normalize_url(href if isinstance(href, str) else "", origin=origin, base_path=base_path)

    return RawRelease(
        version=version_match.group(1),
        os_build=cells[1].get_text(strip=True),
        availability_date=availability_date,
        security_update_url=_href(2),
        whats_new_url=_href(3),
        known_issues_url=_href(4),
        new_deployments=new_deployments,
    )


# =============================================================================
# MARKDOWN: SOLUTION UPDATES
# =============================================================================


def parse_solution_updates(markdown: str) -> list[RawSolutionUpdate]:
    """
    Parse the offline updates page into raw solution update records.

    Only the first table whose header starts with "OS Build" is read.

    Returns:
        RawSolutionUpdate per valid row; empty if the table is absent
    """
    if markdown is None:
        raise TypeError("markdown document must be a string, got None")

    lines = _find_table_block(markdown.splitlines())
    if not lines:
        logger.debug("solution_table_not_found")
        return []

    updates: list[RawSolutionUpdate] = []
    discarded = 0

    # Header and separator
    for line in lines[2:]:
        line = line.strip()
        if not line or "|" not in line:
            continue

        record = _parse_solution_row(line)
        if record is None:
            discarded += 1
            continue
        updates.append(record)

    logger.debug("solution_rows_parsed", parsed=len(updates), discarded=discarded)
    return updates


def _find_table_block(lines: list[str]) -> list[str]:
    """Return lines from the "OS Build" header to the next blank or quote line."""
    start = next(
        (i for i, line in enumerate(lines) if _MD_HEADER_RE.match(line.strip())),
        None,
    )
    if start is None:
        return []

    block = [lines[start]]
    for line in lines[start + 1:]:
        stripped = line.strip()
        if not stripped or stripped.startswith(">"):
            break
        block.append(line)
    return block


def _split_row(line: str) -> list[str]:
    cells = [cell.strip() for cell in line.split("|")]
    if line.startswith("|"):
        cells = cells[1:]
    if line.endswith("|"):
        cells = cells[:-1]
    return cells


def _parse_solution_row(line: str) -> RawSolutionUpdate | None:
    """Parse a single table line; None if any required piece is missing."""
    cells = _split_row(line)
    if len(cells) < MIN_SOLUTION_COLUMNS:
        return None

    os_build, download_cell, sha256 = cells[0], cells[1], cells[2]
    if not os_build or not download_cell or not sha256:
        return None

    link_match = _MD_LINK_RE.search(download_cell)
    date_match = _MD_DATE_RE.search(download_cell)
    if not link_match or not date_match:
        return None

    availability_date = _parse_date(date_match.group(1))
    if availability_date is None:
        return None

    return RawSolutionUpdate(
        os_build=os_build,
        download_uri=link_match.group(2).strip(),
        sha256=_WHITESPACE_RE.sub("", sha256),
        availability_date=availability_date,
    )


def _parse_date(value: str) -> date | None:
    """Parse an ISO date, None for impossible calendar dates."""
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        return None
