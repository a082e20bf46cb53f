"""
Query predicates over releases and release trains.

Two concerns live here:

1. Parsing - flat external parameters (a query string, CLI options) into
   a sparse predicate object. Absent keys stay None; nothing is defaulted.
2. Application - filtering a collection by every present predicate,
   preserving order and never mutating the input.

Parameter rules (kept for client compatibility):
    - Boolean keys: "true" in any case -> True, any other value -> False
    - buildType: must be exactly "Feature" or "Cumulative"; anything else
      is dropped, so an invalid filter behaves as no filter
    - String keys with an empty value count as unset
    - A repeated key takes its first value

Solution update presence:
    solutionUpdate=true  keeps releases with both uri and hash
    solutionUpdate=false keeps releases with neither
    A release with only one of the two matches neither.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from release_spine.domains.azure_local.calculations import ReleaseTrain, train_sort_key
from release_spine.domains.azure_local.schema import BuildType
from release_spine.domains.azure_local.transformer import Release


@dataclass(frozen=True)
class ReleasesQuery:
    """Sparse predicate set for releases; None means no constraint."""

    supported: bool | None = None
    release_train: str | None = None
    baseline_release: bool | None = None
    build_type: BuildType | None = None
    version: str | None = None
    os_build: str | None = None
    new_deployments: bool | None = None
    solution_update: bool | None = None
    latest: bool | None = None


@dataclass(frozen=True)
class ReleaseTrainsQuery:
    """Sparse predicate set for release trains; None means no constraint."""

    supported: bool | None = None
    release_train: str | None = None
    latest: bool | None = None


# Exact-match predicates: (query attribute, release attribute)
_RELEASE_EQUALITY_FIELDS = (
    "supported",
    "release_train",
    "baseline_release",
    "build_type",
    "version",
    "os_build",
    "new_deployments",
)


# =============================================================================
# APPLICATION
# =============================================================================


def filter_releases(releases: Sequence[Release], query: ReleasesQuery) -> list[Release]:
    """
    Return the releases matching every present predicate.

    ``latest`` is evaluated last and reduces the result to at most one
    release: the most recent in ``release_train`` when that is set,
    otherwise the most recent overall.
    """
    filtered = list(releases)

    for name in _RELEASE_EQUALITY_FIELDS:
        expected = getattr(query, name)
        if expected is not None:
            filtered = [r for r in filtered if getattr(r, name) == expected]

    if query.solution_update is True:
        filtered = [r for r in filtered if r.solution_update.available]
    elif query.solution_update is False:
        filtered = [r for r in filtered if r.solution_update.empty]

    if query.latest:
        if query.release_train is not None:
            filtered = [r for r in filtered if r.release_train == query.release_train]
        filtered = _most_recent(filtered)

    return filtered


def filter_release_trains(
    release_trains: Sequence[ReleaseTrain],
    query: ReleaseTrainsQuery,
) -> list[ReleaseTrain]:
    """
    Return the release trains matching every present predicate.

    ``latest`` keeps only the highest-numbered remaining train.
    """
    filtered = list(release_trains)

    if query.supported is not None:
        filtered = [t for t in filtered if t.supported == query.supported]

    if query.release_train is not None:
        filtered = [t for t in filtered if t.release_train == query.release_train]

    if query.latest and filtered:
        filtered = [max(filtered, key=lambda t: train_sort_key(t.release_train))]

    return filtered


def _most_recent(releases: list[Release]) -> list[Release]:
    if not releases:
        return []
    return [max(releases, key=lambda r: r.availability_date)]


# =============================================================================
# PARSING
# =============================================================================


def parse_releases_query(params: Mapping[str, str]) -> ReleasesQuery:
    """
    Build a ReleasesQuery from external parameters.

    Recognized keys: supported, releaseTrain, baselineRelease, buildType,
    version, osBuild, newDeployments, solutionUpdate, latest.
    """
    return ReleasesQuery(
        supported=_parse_bool(params, "supported"),
        release_train=_parse_str(params, "releaseTrain"),
        baseline_release=_parse_bool(params, "baselineRelease"),
        build_type=BuildType.from_param(_parse_str(params, "buildType")),
        version=_parse_str(params, "version"),
        os_build=_parse_str(params, "osBuild"),
        new_deployments=_parse_bool(params, "newDeployments"),
        solution_update=_parse_bool(params, "solutionUpdate"),
        latest=_parse_bool(params, "latest"),
    )


def parse_release_trains_query(params: Mapping[str, str]) -> ReleaseTrainsQuery:
    """Build a ReleaseTrainsQuery from external parameters (supported, releaseTrain, latest)."""
    return ReleaseTrainsQuery(
        supported=_parse_bool(params, "supported"),
        release_train=_parse_str(params, "releaseTrain"),
        latest=_parse_bool(params, "latest"),
    )


def _first(params: Mapping[str, str], key: str) -> str | None:
    # MultiDict.get returns the last value
    getlist = getattr(params, "getlist", None)
    if getlist is not None:
        values = getlist(key)
        return values[0] if values else None
    return params.get(key)


def _parse_bool(params: Mapping[str, str], key: str) -> bool | None:
    value = _first(params, key)
    if value is None:
        return None
    return value.lower() == "true"


def _parse_str(params: Mapping[str, str], key: str) -> str | None:
    value = _first(params, key)
    return value if value else None
