"""Small numeric helpers shared by the estimator and scoring layers."""

from __future__ import annotations

import math


def clamp(value: float, low: float, high: float) -> float:
    return min(high, max(low, value))


def round_tenth(value: float) -> float:
    """Round to one decimal place, halves away from zero."""

    scaled = math.floor(abs(value) * 10 + 0.5)
    return math.copysign(scaled, value) / 10 if scaled else 0.0
