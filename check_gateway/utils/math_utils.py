"""Numeric helpers"""

import math


def round_half_away(value: float) -> int:
    """Round to the nearest integer, ties away from zero (2.5 -> 3, -2.5 -> -3)"""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def safe_ratio(numerator: float, denominator: float) -> float:
    """numerator / denominator, or 0.0 when the denominator is zero"""
    return numerator / denominator if denominator else 0.0
