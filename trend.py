# trend.py
#
# Purpose:
# Trend score (0-100, neutral = 50): is daily activity rising or falling?
#
# Big picture:
#   daily series -> log1p(values) -> least-squares slope over time scaled to [0, 1]
#   -> slope relative to the typical daily value -> confidence weighting
#   -> tanh -> 50 +/- max_impact
#
# Working in log space keeps one huge day from dominating the slope. The
# confidence factor keeps two or three days of data from producing an
# extreme score. tanh bounds the result to neutral_score +/- max_impact.

import math

import numpy as np

from date_utils import MS_PER_DAY
from math_helpers import clamp, saturating_ratio, round_half_up
from options import TrendOptions, resolve_options
from series import series_from_activity_map


def _neutral_breakdown(opts, status, days, span_days=None):
    return {
        "score": _finish(opts.neutral_score, opts),
        "status": status,
        "days": days,
        "span_days": span_days,
        "slope": 0.0,
        "linear_mean": None,
        "normalized_slope": 0.0,
        "span_confidence": None,
        "count_confidence": None,
        "confidence": None,
        "impact": 0.0,
    }


def _finish(score, opts):
    score = clamp(score, 0.0, 100.0)
    if opts.round_result:
        return round_half_up(score)
    return float(score)


def trend_breakdown(activity_map, options=None):
    """
    Compute the trend score and the intermediate values behind it.

    Inputs:
      activity_map: {"YYYY-MM-DD": count, ...}; invalid keys/values are skipped
      options: TrendOptions, dict of overrides, or None

    Output dict:
      score              final score in [0, 100]
      status             "ok", "insufficient_data", "flat_series" or "degenerate_time"
      days               number of distinct valid days
      span_days          calendar span in whole days (rounded up)
      slope              least-squares slope of log1p(value) over normalized time
      linear_mean        expm1(mean log value), the typical daily value
      normalized_slope   slope / max(linear_mean, floor)
      span_confidence, count_confidence, confidence
      impact             signed distance from neutral_score
    """
    opts = resolve_options(options, TrendOptions)
    series, sufficient = series_from_activity_map(
        activity_map, opts.negative_value_policy
    )
    n = len(series)

    if not sufficient:
        return _neutral_breakdown(opts, "insufficient_data", n)

    times = np.array([p.day_ms for p in series], dtype=np.int64)
    y = np.log1p(np.array([p.value for p in series], dtype=float))

    if np.all(np.abs(y - y[0]) < opts.epsilon):
        return _neutral_breakdown(opts, "flat_series", n)

    first_ms = int(times[0])
    span_ms = max(int(times[-1]) - first_ms, opts.min_span_days * MS_PER_DAY)
    span_days = max(1, math.ceil(span_ms / MS_PER_DAY))

    x = (times - first_ms) / span_ms

    dx = x - x.mean()
    mean_y = float(y.mean())
    denominator = float(np.sum(dx * dx))

    if abs(denominator) < opts.epsilon:
        return _neutral_breakdown(opts, "degenerate_time", n, span_days)

    slope = float(np.sum(dx * (y - mean_y))) / denominator

    # Typical daily value back in count units; np.expm1 overflows to inf, not an error
    linear_mean = float(np.expm1(mean_y))

    if opts.normalization_floor is not None:
        floor = opts.normalization_floor
    else:
        floor = max(
            opts.min_normalization_floor,
            linear_mean * opts.normalization_floor_ratio,
        )
    norm_denom = max(linear_mean, floor)

    normalized_slope = slope / norm_denom

    span_confidence = saturating_ratio(span_days, opts.span_saturation_days)
    count_confidence = saturating_ratio(n, opts.count_saturation)

    if opts.confidence_mode == "max":
        confidence = max(span_confidence, count_confidence)
    else:
        confidence = span_confidence * count_confidence

    adjusted_slope = normalized_slope * confidence
    impact = math.tanh(adjusted_slope * opts.tanh_sensitivity) * opts.max_impact

    return {
        "score": _finish(opts.neutral_score + impact, opts),
        "status": "ok",
        "days": n,
        "span_days": span_days,
        "slope": slope,
        "linear_mean": linear_mean,
        "normalized_slope": normalized_slope,
        "span_confidence": span_confidence,
        "count_confidence": count_confidence,
        "confidence": confidence,
        "impact": impact,
    }


def compute_trend_score(activity_map, options=None):
    """
    Trend score in [0, 100]. 50 means no detectable trend.

    Fewer than 2 valid days, a flat series, or no spread in time all give
    neutral_score (50 by default). Never raises for bad activity data.
    """
    return trend_breakdown(activity_map, options)["score"]
