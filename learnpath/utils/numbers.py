"""Rounding helpers shared by progress and quiz scoring."""

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounding up (2.5 -> 3, 12.5 -> 13)."""
    return int(math.floor(value + 0.5))


def round_percent(part: float, whole: float) -> int:
    """
    Whole-number percentage of part/whole.

    Returns 0 when whole is 0, never raises on an empty denominator.
    """
    if whole <= 0:
        return 0
    return round_half_up(part / whole * 100)
