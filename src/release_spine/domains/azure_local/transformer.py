"""
Release transformation (raw -> canonical).

Joins raw release rows with raw solution updates on OS build, derives the
version-grammar fields, computes the support window, and classifies each
release as the Feature build of its train or a Cumulative follow-up.

Build classification is a swappable policy:

    classify_build(group: Sequence[RawRelease]) -> list[BuildType]

The policy receives every raw release of one train, in extractor order,
and returns one BuildType per member. The default, earliest_in_train,
marks the earliest-dated row as Feature and prefers the new-deployments
copy when the same build is listed in both tabs. Earlier revisions keyed
Feature builds per OS major version, and before that by build-number
thresholds; those rules are retired.

Clock:
    ``supported`` depends on evaluation time. transform_releases() reads
    the clock once per call (or takes ``now``) and never caches it.
"""

from collections import defaultdict
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta

from release_spine.core.errors import ConfigError
from release_spine.core.logging import get_logger
from release_spine.core.timestamps import ensure_utc, start_of_day_utc, utc_now
from release_spine.domains.azure_local.connector import RawRelease, RawSolutionUpdate
from release_spine.domains.azure_local.schema import SUPPORT_WINDOW_DAYS, BuildType
from release_spine.domains.azure_local.versioning import (
    extract_release,
    extract_shortened,
    extract_train,
    is_baseline,
)

logger = get_logger(__name__)


@dataclass(frozen=True)
class SolutionUpdate:
    """
    Offline update bundle attached to a release.

    ``SolutionUpdate()`` (both fields None) is the explicit
    "no update available" value and serializes to ``{}``.
    """

    uri: str | None = None
    file_hash: str | None = None

    @property
    def available(self) -> bool:
        return bool(self.uri) and bool(self.file_hash)

    @property
    def empty(self) -> bool:
        return not self.uri and not self.file_hash


@dataclass(frozen=True)
class ReleaseUrls:
    """Advisory links for a release."""

    security: str = ""
    news: str = ""
    issues: str = ""


@dataclass(frozen=True)
class Release:
    """
    A canonical Azure Local release.

    Built once per transform from one RawRelease plus at most one matching
    RawSolutionUpdate; immutable afterwards.
    """

    version: str
    availability_date: date
    new_deployments: bool
    os_build: str
    release_train: str
    release: str
    release_shortened: str
    baseline_release: bool
    build_type: BuildType
    supported: bool
    end_of_support_date: date | None = None
    solution_update: SolutionUpdate = field(default_factory=SolutionUpdate)
    urls: ReleaseUrls = field(default_factory=ReleaseUrls)


BuildPolicy = Callable[[Sequence[RawRelease]], list[BuildType]]


# =============================================================================
# BUILD CLASSIFICATION POLICIES
# =============================================================================


def earliest_in_train(group: Sequence[RawRelease]) -> list[BuildType]:
    """
    Mark the earliest build of a train as Feature, the rest Cumulative.

    Ties on availability date prefer the new-deployments row, then the
    first row in extractor order.
    """
    if not group:
        return []

    feature_index = min(
        range(len(group)),
        key=lambda i: (group[i].availability_date, not group[i].new_deployments, i),
    )
    return [
        BuildType.FEATURE if i == feature_index else BuildType.CUMULATIVE
        for i in range(len(group))
    ]


BUILD_POLICIES: dict[str, BuildPolicy] = {
    "earliest-in-train": earliest_in_train,
}


def resolve_build_policy(name: str) -> BuildPolicy:
    """Look up a registered build policy by name."""
    try:
        return BUILD_POLICIES[name]
    except KeyError:
        raise ConfigError(
            f"Unknown build policy {name!r}; expected one of {sorted(BUILD_POLICIES)}"
        ).with_context(build_policy=name) from None


# =============================================================================
# SUPPORT WINDOW
# =============================================================================


def compute_support_window(
    availability_date: date,
    now: datetime,
    window_days: int = SUPPORT_WINDOW_DAYS,
) -> tuple[bool, date | None]:
    """
    Compute (supported, end_of_support_date).

    The window is ``window_days`` calendar days. A release is supported
    while ``now`` is at or before midnight UTC on its end-of-support date.
    When the end of support falls past ``date.max`` the release is
    supported and the end date is None.
    """
    try:
        end_of_support = availability_date + timedelta(days=window_days)
    except OverflowError:
        return True, None
    supported = ensure_utc(now) <= start_of_day_utc(end_of_support)
    return supported, end_of_support


# =============================================================================
# TRANSFORM
# =============================================================================


def transform_releases(
    raw_releases: Sequence[RawRelease],
    solution_updates: Sequence[RawSolutionUpdate],
    *,
    now: datetime | None = None,
    classify_build: BuildPolicy = earliest_in_train,
    support_window_days: int = SUPPORT_WINDOW_DAYS,
) -> list[Release]:
    """
    Transform raw releases into canonical releases.

    Args:
        raw_releases: Output of parse_release_info()
        solution_updates: Output of parse_solution_updates()
        now: Evaluation time for ``supported`` (defaults to the wall clock)
        classify_build: Feature/Cumulative policy applied per train
        support_window_days: Length of the support window

    Returns:
        Releases sorted by availability date, most recent first; equal
        dates keep extractor order
    """
    now = now if now is not None else utc_now()

    updates_by_build: dict[str, RawSolutionUpdate] = {}
    for update in solution_updates:
        updates_by_build.setdefault(update.os_build, update)

    build_types = _classify(raw_releases, classify_build)

    releases: list[Release] = []
    for raw, build_type in zip(raw_releases, build_types):
        supported, end_of_support = compute_support_window(
            raw.availability_date, now, support_window_days
        )
        match = updates_by_build.get(raw.os_build)
        solution_update = (
            SolutionUpdate(uri=match.download_uri, file_hash=match.sha256)
            if match is not None
            else SolutionUpdate()
        )

        releases.append(
            Release(
                version=raw.version,
                availability_date=raw.availability_date,
                new_deployments=raw.new_deployments,
                os_build=raw.os_build,
                release_train=extract_train(raw.version),
                release=extract_release(raw.version),
                release_shortened=extract_shortened(raw.version),
                baseline_release=is_baseline(raw.version),
                build_type=build_type,
                supported=supported,
                end_of_support_date=end_of_support,
                solution_update=solution_update,
                urls=ReleaseUrls(
                    security=raw.security_update_url,
                    news=raw.whats_new_url,
                    issues=raw.known_issues_url,
                ),
            )
        )

    releases.sort(key=lambda r: r.availability_date, reverse=True)

    logger.debug(
        "releases_transformed",
        releases=len(releases),
        with_solution_update=sum(1 for r in releases if r.solution_update.available),
    )
    return releases


def _classify(raw_releases: Sequence[RawRelease], policy: BuildPolicy) -> list[BuildType]:
    """Apply the build policy per train; unclassifiable rows are Cumulative."""
    result = [BuildType.CUMULATIVE] * len(raw_releases)

    groups: dict[str, list[int]] = defaultdict(list)
    for index, raw in enumerate(raw_releases):
        train = extract_train(raw.version)
        if train:
            groups[train].append(index)

    for indices in groups.values():
        types = policy([raw_releases[i] for i in indices])
        for index, build_type in zip(indices, types):
            result[index] = build_type

    return result


# =============================================================================
# SELECTORS
# =============================================================================


def latest_releases_by_train(releases: Sequence[Release]) -> list[Release]:
    """Most recent release of each train, in first-seen train order."""
    latest: dict[str, Release] = {}
    for release in releases:
        existing = latest.get(release.release_train)
        if existing is None or release.availability_date > existing.availability_date:
            latest[release.release_train] = release
    return list(latest.values())
