# math_helpers.py
#
# Small numeric helpers shared by the trend and consistency scorers.

import math


def clamp(x, lo=0, hi=100):
    """
    Clamp a number into a bounded range.

    Every public score passes through this so it always lands inside [0, 100].
    """
    if x < lo:
        return lo
    if x > hi:
        return hi
    return x


def saturating_ratio(amount, saturation):
    """
    Evidence ratio capped at 1: amount / saturation, never above 1.

    Used for confidence weighting, e.g. 3 observed days with a saturation of
    7 days gives 3/7, while 30 days gives exactly 1.
    """
    return min(amount / saturation, 1.0)


def round_half_up(x):
    """
    Round to the nearest whole number, halves going up (2.5 -> 3, 62.5 -> 63).

    Unlike round(), which sends halves to the even neighbour.
    """
    return int(math.floor(x + 0.5))
