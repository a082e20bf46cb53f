"""
Pure aggregation functions (releases -> release trains).

These functions fold canonical releases into one record per release
train. They operate on in-memory sequences only.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from release_spine.domains.azure_local.transformer import Release, latest_releases_by_train


@dataclass(frozen=True)
class ReleaseTrain:
    """
    One release train (e.g. "2505").

    ``supported`` is taken from the chronologically latest release in the
    train.
    """

    release_train: str
    supported: bool


def train_sort_key(release_train: str) -> tuple[int, int]:
    """
    Sort key for descending presentation order.

    Numeric trains compare as integers; anything else ranks below every
    numeric train.
    """
    if release_train.isdigit():
        return (1, int(release_train))
    return (0, 0)


def transform_release_trains(releases: Sequence[Release]) -> list[ReleaseTrain]:
    """
    Aggregate releases into release trains.

    For each distinct train, ``supported`` comes from the release with the
    latest availability date (first one wins on ties). Output is sorted by
    train number, highest first.
    """
    trains = [
        ReleaseTrain(release_train=release.release_train, supported=release.supported)
        for release in latest_releases_by_train(releases)
    ]
    trains.sort(key=lambda t: train_sort_key(t.release_train), reverse=True)
    return trains
