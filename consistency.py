# consistency.py
#
# Purpose:
# Consistency score (0-100): is activity regular and sustained, or bursty?
#
# Three additive parts (default caps):
#   frequency  (50)  share of days in the span that were active, confidence-weighted
#   gaps       (25)  starts full, loses points for gaps longer than the grace period
#   stability  (25)  starts full, loses points as daily values vary more
#
# Stability zero-fills inactive days ("densification") so long silent
# stretches count against it. That allocation is bounded by
# max_dense_span_days; longer spans fall back to the active days only.

import math

import numpy as np

from date_utils import MS_PER_DAY
from math_helpers import clamp, saturating_ratio, round_half_up
from options import ConsistencyOptions, resolve_options
from series import series_from_activity_map


def frequency_component(active_days, span_days, opts):
    """
    Returns (frequency_score, frequency_ratio, confidence).

    ratio = active_days / span_days, dampened by how long the span is and
    how many active days were seen, then passed through tanh.
    """
    span_confidence = saturating_ratio(span_days, opts.min_observation_days)
    count_confidence = saturating_ratio(
        active_days, opts.min_activity_days_for_full_confidence
    )
    confidence = span_confidence * count_confidence
    ratio = (active_days / span_days) * confidence
    score = math.tanh(ratio * opts.frequency_sensitivity) * opts.frequency_weight
    return score, ratio, confidence


def gap_penalty(day_instants, opts):
    """
    Penalty in [0, gap_weight) for gaps longer than gap_grace_days.

    Each transition between active days contributes tanh(excess / grace),
    the contributions are averaged over the transitions, and the average
    goes through tanh once more.
    """
    gaps = np.diff(day_instants) // MS_PER_DAY
    excess = np.maximum(0, gaps - opts.gap_grace_days)
    total_gap_weight = float(np.sum(np.tanh(excess / opts.gap_grace_days)))

    transitions = max(1, len(day_instants) - 1)
    avg_gap_penalty = total_gap_weight / transitions

    return math.tanh(avg_gap_penalty) * opts.gap_weight


def dense_values(day_instants, values, span_days):
    """One value per calendar day across the span, 0 for inactive days."""
    dense = np.zeros(span_days, dtype=float)
    offsets = (day_instants - day_instants[0]) // MS_PER_DAY
    dense[offsets] = values
    return dense


def stability_component(day_instants, values, span_days, opts):
    """
    Returns (stability_score, coefficient_of_variation, densified).

    CV of log1p(daily value); when the mean is ~0 the plain standard
    deviation is used instead.
    """
    densified = span_days <= opts.max_dense_span_days
    if densified:
        raw = dense_values(day_instants, values, span_days)
    else:
        raw = values

    logs = np.log1p(raw)
    mean = float(np.mean(logs))
    std_dev = math.sqrt(float(np.var(logs)))

    if mean > opts.epsilon:
        cv = std_dev / mean
    else:
        cv = std_dev

    penalty = math.tanh(cv * opts.stability_sensitivity) * opts.stability_weight
    score = opts.stability_weight - penalty
    return score, cv, densified


def consistency_breakdown(activity_map, options=None):
    """
    Compute the consistency score and its components.

    Output dict:
      score                     int in [0, 100]
      status                    "ok" or "insufficient_data"
      active_days               distinct valid days
      span_days                 inclusive calendar span, first to last active day
      first_day_ms, last_day_ms first and last active day instants (None if no days)
      frequency_ratio           confidence-weighted active_days / span_days
      confidence                frequency confidence factor
      frequency_score           0..frequency_weight
      gap_penalty               0..gap_weight (subtracted from gap_weight)
      stability_score           0..stability_weight
      densified                 True when inactive days were zero-filled
      coefficient_of_variation  dispersion used for stability
    """
    opts = resolve_options(options, ConsistencyOptions)
    series, sufficient = series_from_activity_map(
        activity_map, opts.negative_value_policy
    )
    active_days = len(series)

    if not sufficient:
        return {
            "score": opts.insufficient_score,
            "status": "insufficient_data",
            "active_days": active_days,
            "first_day_ms": series[0].day_ms if series else None,
            "last_day_ms": series[-1].day_ms if series else None,
            "span_days": None,
            "frequency_ratio": None,
            "confidence": None,
            "frequency_score": None,
            "gap_penalty": None,
            "stability_score": None,
            "densified": None,
            "coefficient_of_variation": None,
        }

    day_instants = np.array([p.day_ms for p in series], dtype=np.int64)
    values = np.array([p.value for p in series], dtype=float)

    span_days = int((day_instants[-1] - day_instants[0]) // MS_PER_DAY) + 1

    frequency_score, frequency_ratio, confidence = frequency_component(
        active_days, span_days, opts
    )
    penalty = gap_penalty(day_instants, opts)
    stability_score, cv, densified = stability_component(
        day_instants, values, span_days, opts
    )

    total = frequency_score + (opts.gap_weight - penalty) + stability_score

    return {
        "score": clamp(round_half_up(total), 0, 100),
        "status": "ok",
        "active_days": active_days,
        "first_day_ms": series[0].day_ms,
        "last_day_ms": series[-1].day_ms,
        "span_days": span_days,
        "frequency_ratio": frequency_ratio,
        "confidence": confidence,
        "frequency_score": frequency_score,
        "gap_penalty": penalty,
        "stability_score": stability_score,
        "densified": densified,
        "coefficient_of_variation": cv,
    }


def compute_consistency_score(activity_map, options=None):
    """
    Consistency score, an int in [0, 100].

    Fewer than 2 valid days gives insufficient_score (0 by default).
    Never raises for bad activity data.
    """
    return consistency_breakdown(activity_map, options)["score"]
