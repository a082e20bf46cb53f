# tests/domains/azure_local/test_calculations.py

"""Tests for release train aggregation."""

from datetime import UTC, date, datetime

import pytest

from release_spine.domains.azure_local.calculations import (
    ReleaseTrain,
    train_sort_key,
    transform_release_trains,
)
from release_spine.domains.azure_local.connector import RawRelease
from release_spine.domains.azure_local.pipeline import build_releases
from release_spine.domains.azure_local.transformer import transform_releases


class TestTrainSortKey:
    @pytest.mark.parametrize(
        "trains,expected",
        [
            (["2411", "2505", "2503"], ["2505", "2503", "2411"]),
            (["", "2505", "preview", "2411"], ["2505", "2411", "", "preview"]),
        ],
    )
    def test_descending_numeric_then_non_numeric(self, trains, expected):
        """Non-numeric trains keep their first-seen order after the numeric ones."""
        assert sorted(trains, key=train_sort_key, reverse=True) == expected

    def test_non_numeric_ranks_below_numeric(self):
        assert train_sort_key("") < train_sort_key("0001")


class TestTransformReleaseTrains:
    """One ReleaseTrain per distinct train; support from the latest release."""

    def test_single_release_scenario(self):
        releases = transform_releases(
            [RawRelease("11.2505.1001.22", "25398.1611", date(2025, 5, 28))],
            [],
            now=datetime(2025, 6, 1, tzinfo=UTC),
        )
        assert transform_release_trains(releases) == [ReleaseTrain(release_train="2505", supported=True)]

    def test_fixture_trains_sorted_descending(self, releases):
        assert [t.release_train for t in transform_release_trains(releases)] == ["2505", "2504", "2503", "2411"]

    def test_support_comes_from_latest_release(self, release_info_html, solution_updates_markdown):
        """At 2025-08-01 the newest 2411 build (2025-01-22) is past its window."""
        releases = build_releases(
            release_info_html,
            solution_updates_markdown,
            now=datetime(2025, 8, 1, tzinfo=UTC),
        )
        trains = {t.release_train: t.supported for t in transform_release_trains(releases)}
        assert trains == {"2505": True, "2504": True, "2503": True, "2411": False}

    def test_latest_release_wins_over_older_unsupported_one(self, releases):
        """2411.0.24 is out of support but 2411.3.2 is newer and supported."""
        trains = {t.release_train: t.supported for t in transform_release_trains(releases)}
        assert trains["2411"] is True

    def test_input_order_does_not_matter(self, releases):
        assert transform_release_trains(list(reversed(releases))) == transform_release_trains(releases)

    def test_unparseable_versions_form_trailing_empty_train(self):
        releases = transform_releases(
            [
                RawRelease("preview", "25398.1", date(2025, 5, 1)),
                RawRelease("11.2505.1001.22", "25398.1611", date(2025, 5, 28)),
            ],
            [],
            now=datetime(2025, 6, 1, tzinfo=UTC),
        )
        assert [t.release_train for t in transform_release_trains(releases)] == ["2505", ""]

    def test_empty(self):
        assert transform_release_trains([]) == []
