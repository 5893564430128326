# options.py
#
# Purpose:
# Every tunable number used by the two scorers lives here, with its default.
# Scoring code never hard-codes a threshold: it reads it from one of these
# option objects, so changing behavior means changing a field, not an algorithm.
#
# Callers can pass:
#   - nothing (defaults)
#   - an options object: TrendOptions(max_impact=30)
#   - a plain dict of overrides: {"max_impact": 30}

from dataclasses import dataclass, fields
from typing import Optional
from collections.abc import Mapping

from series import NEGATIVE_POLICIES

CONFIDENCE_MODES = ("multiply", "max")


def _require_positive(name, value):
    if value <= 0:
        raise ValueError(f"{name} must be > 0")


def _require_non_negative(name, value):
    if value < 0:
        raise ValueError(f"{name} must be >= 0")


def _require_score(name, value):
    if value < 0 or value > 100:
        raise ValueError(f"{name} must be between 0 and 100")


def _require_choice(name, value, choices):
    if value not in choices:
        raise ValueError(f"{name} must be one of {choices}, got {value!r}")


@dataclass(frozen=True)
class TrendOptions:
    """
    Settings for the trend scorer.

      max_impact                 largest possible distance from neutral_score
      tanh_sensitivity           steepness of the tanh applied to the slope
      span_saturation_days       span (days) at which span confidence reaches 1
      count_saturation           number of active days at which count confidence reaches 1
      confidence_mode            "multiply" (both must be high) or "max" (either is enough)
      negative_value_policy      "clamp" negatives to 0, or "ignore" those days
      normalization_floor        fixed slope denominator floor; None derives one from the data
      round_result               round the final score to a whole number
      neutral_score              score for "no detectable trend" and for too little data
      epsilon                    tolerance for flat values and a zero time spread
      min_span_days              smallest time span (days) used to normalize time
      min_normalization_floor    lower bound of the derived floor
      normalization_floor_ratio  derived floor as a fraction of the typical daily value
    """

    max_impact: float = 25.0
    tanh_sensitivity: float = 3.0
    span_saturation_days: float = 7.0
    count_saturation: float = 10.0
    confidence_mode: str = "multiply"
    negative_value_policy: str = "clamp"
    normalization_floor: Optional[float] = None
    round_result: bool = False
    neutral_score: float = 50.0
    epsilon: float = 1e-10
    min_span_days: float = 0.01
    min_normalization_floor: float = 0.1
    normalization_floor_ratio: float = 0.01

    def __post_init__(self):
        _require_non_negative("max_impact", self.max_impact)
        _require_positive("tanh_sensitivity", self.tanh_sensitivity)
        _require_positive("span_saturation_days", self.span_saturation_days)
        _require_positive("count_saturation", self.count_saturation)
        _require_choice("confidence_mode", self.confidence_mode, CONFIDENCE_MODES)
        _require_choice(
            "negative_value_policy", self.negative_value_policy, NEGATIVE_POLICIES
        )
        if self.normalization_floor is not None:
            _require_positive("normalization_floor", self.normalization_floor)
        _require_score("neutral_score", self.neutral_score)
        _require_positive("epsilon", self.epsilon)
        _require_positive("min_span_days", self.min_span_days)
        _require_positive("min_normalization_floor", self.min_normalization_floor)
        _require_non_negative("normalization_floor_ratio", self.normalization_floor_ratio)


@dataclass(frozen=True)
class ConsistencyOptions:
    """
    Settings for the consistency scorer.

      min_observation_days                   span (days) needed for full frequency confidence
      min_activity_days_for_full_confidence  active days needed for full frequency confidence
      gap_grace_days                         gaps up to this many days cost nothing
      max_dense_span_days                    longest span that is zero-filled day by day
      epsilon                                "mean is zero" tolerance for the CV
      negative_value_policy                  "clamp" negatives to 0, or "ignore" those days
      frequency_weight                       cap of the frequency component
      frequency_sensitivity                  tanh steepness for the frequency ratio
      gap_weight                             budget of the gap component
      stability_weight                       cap of the stability component
      stability_sensitivity                  tanh steepness for the coefficient of variation
      insufficient_score                     score when fewer than 2 days are usable
    """

    min_observation_days: float = 14.0
    min_activity_days_for_full_confidence: float = 10.0
    gap_grace_days: float = 7.0
    max_dense_span_days: int = 3 * 365
    epsilon: float = 1e-10
    negative_value_policy: str = "clamp"
    frequency_weight: float = 50.0
    frequency_sensitivity: float = 3.0
    gap_weight: float = 25.0
    stability_weight: float = 25.0
    stability_sensitivity: float = 2.0
    insufficient_score: int = 0

    def __post_init__(self):
        _require_positive("min_observation_days", self.min_observation_days)
        _require_positive(
            "min_activity_days_for_full_confidence",
            self.min_activity_days_for_full_confidence,
        )
        _require_positive("gap_grace_days", self.gap_grace_days)
        _require_non_negative("max_dense_span_days", self.max_dense_span_days)
        _require_positive("epsilon", self.epsilon)
        _require_choice(
            "negative_value_policy", self.negative_value_policy, NEGATIVE_POLICIES
        )
        _require_non_negative("frequency_weight", self.frequency_weight)
        _require_positive("frequency_sensitivity", self.frequency_sensitivity)
        _require_non_negative("gap_weight", self.gap_weight)
        _require_non_negative("stability_weight", self.stability_weight)
        _require_positive("stability_sensitivity", self.stability_sensitivity)
        _require_score("insufficient_score", self.insufficient_score)


def resolve_options(options, options_cls):
    """
    Normalize the options argument into an options_cls instance.

      None          -> options_cls() with every default
      options_cls   -> returned unchanged
      dict          -> options_cls(**dict); unknown keys raise ValueError
    """
    if options is None:
        return options_cls()

    if isinstance(options, options_cls):
        return options

    if isinstance(options, Mapping):
        known = {f.name for f in fields(options_cls)}
        unknown = sorted(str(k) for k in options if k not in known)
        if unknown:
            raise ValueError(
                f"Unknown {options_cls.__name__} field(s): {', '.join(unknown)}"
            )
        return options_cls(**options)

    raise ValueError(
        f"options must be None, a dict, or {options_cls.__name__}, got {type(options).__name__}"
    )
