"""Numeric guards

Resolve loosely-typed indicator fields into finite floats once, so the
scoring code never compares against NaN / Infinity / None.
"""

import math


def finite_or_none(value: object) -> float | None:
    """Return value as float when it is a finite real number, else None"""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    number = float(value)
    return number if math.isfinite(number) else None


def clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))


def dedupe(items: list[str]) -> list[str]:
    """Remove duplicates, preserving first occurrence order"""
    return list(dict.fromkeys(items))
