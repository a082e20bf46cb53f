# tests/domains/azure_local/test_filters.py

"""Tests for query parsing and filtering of releases and release trains."""

from dataclasses import replace

import pytest
from starlette.datastructures import QueryParams

from release_spine.domains.azure_local.calculations import ReleaseTrain
from release_spine.domains.azure_local.filters import (
    ReleasesQuery,
    ReleaseTrainsQuery,
    filter_release_trains,
    filter_releases,
    parse_release_trains_query,
    parse_releases_query,
)
from release_spine.domains.azure_local.schema import BuildType
from release_spine.domains.azure_local.transformer import SolutionUpdate


def _versions(releases):
    return [r.version for r in releases]


class TestFilterReleases:
    """Predicates combine with AND; order is preserved."""

    def test_empty_query_returns_copy(self, releases):
        result = filter_releases(releases, ReleasesQuery())
        assert result == releases
        assert result is not releases

    def test_supported_false(self, releases):
        assert _versions(filter_releases(releases, ReleasesQuery(supported=False))) == ["10.2411.0.24"]

    def test_build_type(self, releases):
        result = filter_releases(releases, ReleasesQuery(build_type=BuildType.FEATURE))
        assert _versions(result) == ["11.2505.1001.22", "11.2504.1001.19", "11.2503.1002.4", "10.2411.0.24"]
        assert all(r.build_type is BuildType.FEATURE for r in result)

    @pytest.mark.parametrize(
        "query,expected",
        [
            (ReleasesQuery(baseline_release=False), ["11.2503.1002.4"]),
            (ReleasesQuery(os_build="25398.1551"), ["11.2504.1001.19"]),
            (ReleasesQuery(version="10.2411.0.24"), ["10.2411.0.24"]),
            (ReleasesQuery(release_train="2411"), ["10.2411.3.2", "10.2411.0.24"]),
            (ReleasesQuery(release_train="1999"), []),
        ],
    )
    def test_scalar_predicates(self, releases, query, expected):
        assert _versions(filter_releases(releases, query)) == expected

    def test_new_deployments(self, releases):
        [release] = filter_releases(releases, ReleasesQuery(new_deployments=True))
        assert release.new_deployments is True

    def test_conjunction(self, releases):
        """Every returned release satisfies every predicate."""
        query = ReleasesQuery(supported=True, build_type=BuildType.FEATURE, solution_update=True)
        result = filter_releases(releases, query)

        assert [(r.version, r.new_deployments) for r in result] == [
            ("11.2505.1001.22", True),
            ("11.2504.1001.19", False),
        ]
        for r in result:
            assert r.supported and r.build_type is BuildType.FEATURE and r.solution_update.available

    def test_solution_update_false(self, releases):
        result = filter_releases(releases, ReleasesQuery(solution_update=False))
        assert _versions(result) == ["11.2503.1002.4", "10.2411.3.2", "10.2411.0.24"]

    def test_partial_solution_update_matches_neither(self, releases):
        partial = [replace(releases[0], solution_update=SolutionUpdate(uri="https://example.com/x"))]
        assert filter_releases(partial, ReleasesQuery(solution_update=True)) == []
        assert filter_releases(partial, ReleasesQuery(solution_update=False)) == []

    def test_does_not_mutate_input(self, releases):
        before = list(releases)
        filter_releases(releases, ReleasesQuery(supported=False, latest=True))
        assert releases == before


class TestLatestFilter:
    """``latest`` reduces the result to the single most recent release."""

    def test_latest_overall(self, releases):
        result = filter_releases(releases, ReleasesQuery(latest=True))
        assert len(result) == 1
        assert result[0].availability_date == max(r.availability_date for r in releases)

    def test_latest_within_train(self, releases):
        assert _versions(filter_releases(releases, ReleasesQuery(release_train="2411", latest=True))) == [
            "10.2411.3.2"
        ]

    def test_latest_after_other_predicates(self, releases):
        assert _versions(filter_releases(releases, ReleasesQuery(supported=False, latest=True))) == [
            "10.2411.0.24"
        ]

    def test_latest_with_nothing_left(self, releases):
        assert filter_releases(releases, ReleasesQuery(release_train="1999", latest=True)) == []

    def test_latest_false_is_no_constraint(self, releases):
        assert filter_releases(releases, ReleasesQuery(latest=False)) == releases


class TestFilterReleaseTrains:
    TRAINS = [
        ReleaseTrain("2505", True),
        ReleaseTrain("2504", True),
        ReleaseTrain("2411", False),
        ReleaseTrain("2408", False),
    ]

    def test_no_predicates(self):
        assert filter_release_trains(self.TRAINS, ReleaseTrainsQuery()) == self.TRAINS

    def test_supported(self):
        result = filter_release_trains(self.TRAINS, ReleaseTrainsQuery(supported=False))
        assert [t.release_train for t in result] == ["2411", "2408"]

    def test_release_train(self):
        assert filter_release_trains(self.TRAINS, ReleaseTrainsQuery(release_train="2504")) == [
            ReleaseTrain("2504", True)
        ]

    def test_latest_is_highest_numbered(self):
        assert filter_release_trains(list(reversed(self.TRAINS)), ReleaseTrainsQuery(latest=True)) == [
            ReleaseTrain("2505", True)
        ]

    def test_latest_after_supported(self):
        assert filter_release_trains(self.TRAINS, ReleaseTrainsQuery(supported=False, latest=True)) == [
            ReleaseTrain("2411", False)
        ]

    def test_latest_on_empty(self):
        assert filter_release_trains([], ReleaseTrainsQuery(latest=True)) == []


class TestParseQuery:
    """External parameters into sparse predicates."""

    def test_absent_keys_stay_none(self):
        assert parse_releases_query({}) == ReleasesQuery()
        assert parse_release_trains_query({}) == ReleaseTrainsQuery()

    @pytest.mark.parametrize(
        "value,expected",
        [("true", True), ("TRUE", True), ("True", True), ("false", False), ("yes", False), ("1", False), ("", False)],
    )
    def test_boolean_values(self, value, expected):
        assert parse_releases_query({"supported": value}).supported is expected
        assert parse_release_trains_query({"latest": value}).latest is expected

    def test_camel_case_keys(self):
        query = parse_releases_query(
            {
                "releaseTrain": "2505",
                "baselineRelease": "true",
                "buildType": "Cumulative",
                "version": "11.2505.1001.22",
                "osBuild": "25398.1611",
                "newDeployments": "false",
                "solutionUpdate": "true",
                "latest": "true",
            }
        )
        assert query == ReleasesQuery(
            release_train="2505",
            baseline_release=True,
            build_type=BuildType.CUMULATIVE,
            version="11.2505.1001.22",
            os_build="25398.1611",
            new_deployments=False,
            solution_update=True,
            latest=True,
        )

    @pytest.mark.parametrize("value", ["feature", "FEATURE", "Hotfix", ""])
    def test_invalid_build_type_is_dropped(self, value):
        assert parse_releases_query({"buildType": value}).build_type is None

    def test_empty_string_keys_are_unset(self):
        query = parse_releases_query({"releaseTrain": "", "version": "", "osBuild": ""})
        assert query == ReleasesQuery()

    def test_unknown_keys_are_ignored(self):
        assert parse_releases_query({"release_train": "2505", "foo": "bar"}) == ReleasesQuery()

    def test_repeated_key_takes_first_value(self):
        params = QueryParams("supported=true&supported=false&releaseTrain=2505&releaseTrain=2411")
        query = parse_releases_query(params)
        assert query.supported is True
        assert query.release_train == "2505"
        assert parse_release_trains_query(params).supported is True
