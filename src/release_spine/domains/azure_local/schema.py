"""
Azure Local release domain schema - enums, section markers, and constants.

This is the only place that defines Azure Local-specific constants.
All other modules in this domain import from here.
"""

from enum import Enum

DOMAIN = "azure_local"


class BuildType(str, Enum):
    """
    Build classification within a release train.

    FEATURE: The first build published for a train
    CUMULATIVE: Every later build in the same train
    """

    FEATURE = "Feature"
    CUMULATIVE = "Cumulative"

    @classmethod
    def from_param(cls, value: str | None) -> "BuildType | None":
        """
        Parse an external filter value.

        Matching is exact and case-sensitive; unknown values yield None
        rather than an error so an invalid filter behaves like no filter.
        """
        for member in cls:
            if member.value == value:
                return member
        return None


# =============================================================================
# DOCUMENTATION URLS
# =============================================================================

DOCS_ORIGIN = "https://learn.microsoft.com"
DOCS_BASE_PATH = "https://learn.microsoft.com/en-us/azure/azure-local/"


# =============================================================================
# HTML SECTION MARKERS
# =============================================================================

# Tab panels on the release information page carry these as data-tab / id suffixes
EXISTING_DEPLOYMENTS = "existing-deployments"
NEW_DEPLOYMENTS = "new-deployments"

OLDER_VERSIONS_ID = "older-versions"
OLDER_VERSIONS_TEXT = "older versions"

AVAILABILITY_MARKER = "Availability date:"

# Minimum <td> count for a release row
MIN_RELEASE_CELLS = 4


# =============================================================================
# MARKDOWN TABLE MARKERS
# =============================================================================

SOLUTION_TABLE_HEADER = "OS Build"

# osBuild | download + date | sha256
MIN_SOLUTION_COLUMNS = 3


# =============================================================================
# SUPPORT POLICY
# =============================================================================

SUPPORT_WINDOW_DAYS = 180
