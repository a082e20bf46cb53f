"""
Version-string grammar for Azure Local builds.

Versions look like ``<major>.<train>.<minorA>.<minorB>``:

    10.2411.3.2       -> train 2411, release 2411.3.2,    shortened 2411.3
    11.2505.1001.22   -> train 2505, release 2505.1001.22, shortened 2505.1001
    12.2504.1001.20   -> train 2504, release 2504.1001.20, shortened 2504.1001

Every function here is total over ``str``: a version that does not fit the
grammar yields ``""`` (or ``False``) instead of raising, so one malformed
row cannot abort a batch.
"""

import re

_TRAIN_RE = re.compile(r"\d+\.(\d{4})\.")
_RELEASE_RE = re.compile(r"\d+\.(.+)")
_SHORTENED_RE = re.compile(r"\d+\.(\d{4}\.\d+)")


# Dot-delimited segments that mark a baseline build
_BASELINE_MARKERS = (".1001.", ".0.", ".1.", ".2.", ".3.")


def extract_train(version: str) -> str:
    """Return the 4-digit release train, e.g. ``"11.2505.1001.22" -> "2505"``."""
    match = _TRAIN_RE.search(version)
    return match.group(1) if match else ""


def extract_release(version: str) -> str:
    """Return the version without its major component."""
    match = _RELEASE_RE.search(version)
    return match.group(1) if match else ""


def extract_shortened(version: str) -> str:
    """Return train plus the next segment, e.g. ``"10.2411.3.2" -> "2411.3"``."""
    match = _SHORTENED_RE.search(version)
    return match.group(1) if match else ""


def is_baseline(version: str) -> bool:
    """
    Heuristic baseline (fresh-deployment) classification.

    True when the version contains ``.1001.`` or one of the single-digit
    segments ``.0.`` ``.1.`` ``.2.`` ``.3.``. The rule is kept verbatim for
    output compatibility; it is not derived from anything in the source
    documents.
    """
    return any(marker in version for marker in _BASELINE_MARKERS)
