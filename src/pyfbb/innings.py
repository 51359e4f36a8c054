"""Baseball innings-pitched notation helpers."""

from __future__ import annotations

import math
from dataclasses import dataclass

_FRACTION_EPSILON = 1e-6


@dataclass(frozen=True)
class NormalizedIp:
    outs: int
    innings: float
    valid: bool


_INVALID = NormalizedIp(outs=0, innings=0.0, valid=False)


def normalize_ip(ip: float) -> NormalizedIp:
    """Convert an IP value like ``10.2`` (ten innings, two outs) to outs.

    Only ``.0``, ``.1`` and ``.2`` fractions are valid; anything else (and
    negative or non-finite input) yields an invalid result with zero outputs.
    """

    try:
        value = float(ip)
    except (TypeError, ValueError):
        return _INVALID
    if not math.isfinite(value) or value < 0:
        return _INVALID

    whole = math.floor(value)
    fraction = value - whole
    if abs(fraction) < _FRACTION_EPSILON:
        extra_outs = 0
    elif abs(fraction - 0.1) < _FRACTION_EPSILON:
        extra_outs = 1
    elif abs(fraction - 0.2) < _FRACTION_EPSILON:
        extra_outs = 2
    else:
        return _INVALID

    outs = int(whole) * 3 + extra_outs
    return NormalizedIp(outs=outs, innings=outs / 3, valid=True)


def is_valid_baseball_ip(ip: float) -> bool:
    return normalize_ip(ip).valid


def innings_value(ip: float, *, use_baseball_ip: bool) -> float:
    """Return the innings figure used for arithmetic under the selected IP mode."""

    if not use_baseball_ip:
        return float(ip)
    normalized = normalize_ip(ip)
    return normalized.innings if normalized.valid else 0.0


__all__ = ["NormalizedIp", "innings_value", "is_valid_baseball_ip", "normalize_ip"]
