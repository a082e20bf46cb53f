"""
Azure Local Release Domain.

A thin domain built on release_spine.core primitives:
- schema: Build types, section markers, constants
- versioning: Version-string grammar
- connector: Parse the release HTML and the update Markdown
- transformer: Join, derive fields, classify builds
- calculations: Pure aggregation into release trains
- filters: Query predicates
- sources: HTTP retrieval with caching
- pipeline: Documents in, releases out
"""

from release_spine.domains.azure_local.calculations import (
    ReleaseTrain,
    transform_release_trains,
)
from release_spine.domains.azure_local.connector import (
    RawRelease,
    RawSolutionUpdate,
    parse_release_info,
    parse_solution_updates,
)
from release_spine.domains.azure_local.filters import (
    ReleasesQuery,
    ReleaseTrainsQuery,
    filter_release_trains,
    filter_releases,
    parse_release_trains_query,
    parse_releases_query,
)
from release_spine.domains.azure_local.pipeline import build_release_trains, build_releases
from release_spine.domains.azure_local.schema import BuildType
from release_spine.domains.azure_local.transformer import (
    Release,
    ReleaseUrls,
    SolutionUpdate,
    transform_releases,
)

__all__ = [
    "BuildType",
    "RawRelease",
    "RawSolutionUpdate",
    "Release",
    "ReleaseTrain",
    "ReleaseUrls",
    "ReleasesQuery",
    "ReleaseTrainsQuery",
    "SolutionUpdate",
    "build_release_trains",
    "build_releases",
    "filter_release_trains",
    "filter_releases",
    "parse_release_info",
    "parse_release_trains_query",
    "parse_releases_query",
    "parse_solution_updates",
    "transform_release_trains",
    "transform_releases",
]
