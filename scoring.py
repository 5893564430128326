# scoring.py
#
# What this file is:
# The public entry point for activity scoring. Callers import from here:
#
#   from scoring import compute_trend_score, compute_consistency_score
#
# Both scores are pure functions of one activity map ("YYYY-MM-DD" -> count).
# This file also builds the per-subject snapshot used by the console program
# and the exports.

from consistency import compute_consistency_score, consistency_breakdown
from date_utils import day_ms_to_date
from options import ConsistencyOptions, TrendOptions
from trend import compute_trend_score, trend_breakdown

__all__ = [
    "compute_trend_score",
    "compute_consistency_score",
    "trend_breakdown",
    "consistency_breakdown",
    "activity_scores",
    "TrendOptions",
    "ConsistencyOptions",
]


def activity_scores(activity_map, trend_options=None, consistency_options=None):
    """
    Score one subject's activity map and return a display-ready snapshot.

    Inputs:
      activity_map (dict)
        {"2024-01-01": 3, "2024-01-02": 0, ...}
      trend_options / consistency_options
        options objects, dicts of overrides, or None for defaults

    Output dict:
      trend_score           float, 1 decimal
      consistency_score     int
      active_days           distinct valid days (consistency options' negative policy)
      span_days             inclusive calendar span, 0 with fewer than 2 days
      first_day / last_day  "YYYY-MM-DD", or None for an empty series
    """
    consistency = consistency_breakdown(activity_map, consistency_options)
    trend = trend_breakdown(activity_map, trend_options)

    first_ms = consistency["first_day_ms"]
    last_ms = consistency["last_day_ms"]

    return {
        "trend_score": round(trend["score"], 1),
        "consistency_score": consistency["score"],
        "active_days": consistency["active_days"],
        "span_days": consistency["span_days"] or 0,
        "first_day": day_ms_to_date(first_ms) if first_ms is not None else None,
        "last_day": day_ms_to_date(last_ms) if last_ms is not None else None,
    }
