# series.py
#
# Purpose:
# Build the canonical daily series both scorers read from.
#
#   raw activity map -> (day instant, value) pairs -> sorted, one point per day
#
# Input values come from outside (API payloads, JSON/CSV files), so they are
# coerced and filtered here. After this step every point has an integer
# UTC-midnight instant and a finite, non-negative float value.

import math
from collections import namedtuple
from collections.abc import Mapping

from date_utils import normalize_date_key

NEGATIVE_POLICIES = ("clamp", "ignore")

# One calendar day of activity.
#   day_ms: int milliseconds since epoch at UTC midnight
#   value:  float >= 0
DailyPoint = namedtuple("DailyPoint", ["day_ms", "value"])


def coerce_value(raw):
    """
    Turn a raw count into a finite float, or None if that is not possible.

    Accepted: ints, floats, bools (0/1), numeric strings like "3" or " 2.5 ".
    Missing counts (None, "" or a blank string) mean "no contributions": 0.0.
    Rejected: "abc", "1_000", NaN, +/-inf, and anything float() refuses.
    """
    if raw is None:
        return 0.0

    if isinstance(raw, str):
        raw = raw.strip()
        if raw == "":
            return 0.0
        # float() reads "1_000" as 1000; a count with underscores is not a number here
        if "_" in raw:
            return None

    try:
        value = float(raw)
    except (TypeError, ValueError, OverflowError):
        return None

    if not math.isfinite(value):
        return None

    return value


def build_daily_series(pairs, negative_policy="clamp"):
    """
    Merge (day_ms, raw_value) pairs into the canonical daily series.

    Steps:
      1) coerce each value, dropping non-finite ones
      2) negative values: "clamp" turns them into 0, "ignore" drops them
      3) sum values that share the same day instant
      4) sort by day

    Returns:
      (series, sufficient)
        - series: list[DailyPoint], ascending, distinct day_ms
        - sufficient: True when there are at least 2 days to analyze
    """
    if negative_policy not in NEGATIVE_POLICIES:
        raise ValueError(
            f"negative_policy must be one of {NEGATIVE_POLICIES}, got {negative_policy!r}"
        )

    totals = {}

    for day_ms, raw in pairs:
        value = coerce_value(raw)
        if value is None:
            continue

        if value < 0:
            if negative_policy == "ignore":
                continue
            value = 0.0

        # Same calendar day twice -> one point with the summed value
        if day_ms not in totals:
            totals[day_ms] = 0.0
        totals[day_ms] += value

    # Summing two huge counts can overflow to inf; such a day has no usable value
    series = [
        DailyPoint(day_ms, totals[day_ms])
        for day_ms in sorted(totals)
        if math.isfinite(totals[day_ms])
    ]

    return series, len(series) >= 2


def valid_date_pairs(activity_map):
    """
    Yield (day_ms, raw_value) for every key that is a real calendar date.

    Anything that is not a mapping (None, a list, a number...) behaves like an
    empty map, so the scorers stay defined for every input.
    """
    if not isinstance(activity_map, Mapping):
        return

    for key, raw in activity_map.items():
        day_ms = normalize_date_key(key)
        if day_ms is None:
            continue
        yield day_ms, raw


def series_from_activity_map(activity_map, negative_policy="clamp"):
    """Date Normalizer + Daily Series Builder in one call."""
    return build_daily_series(valid_date_pairs(activity_map), negative_policy)
