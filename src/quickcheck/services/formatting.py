# src/quickcheck/services/formatting.py
"""
Display helpers. Every helper renders a non-finite value (NaN / inf) as
UNDEFINED instead of raising or printing "nan".
"""
from __future__ import annotations

import math

UNDEFINED = "—"  # em-dash


def _is_number(x: float) -> bool:
    return isinstance(x, (int, float)) and not isinstance(x, bool) and math.isfinite(x)


def money(x: float) -> str:
    """Whole dollars: 500000 -> "$500,000"."""
    if not _is_number(x):
        return UNDEFINED
    s = f"{abs(x):,.0f}"
    sign = "-" if x < 0 and s != "0" else ""
    return f"{sign}${s}"


def money2(x: float) -> str:
    """
    Dollars and cents: 2432.53 -> "$2,432.53", 660 -> "$660.00",
    -12.53 -> "-$12.53".
    """
    if not _is_number(x):
        return UNDEFINED
    s = f"{abs(x):,.2f}"
    sign = "-" if x < 0 and s != "0.00" else ""
    return f"{sign}${s}"


def pct(x: float) -> str:
    """Fraction to percent with two decimals: 0.0581 -> "5.81%"."""
    if not _is_number(x):
        return UNDEFINED
    return f"{x * 100:.2f}%"


def ratio(x: float) -> str:
    """Two-decimal ratio (DSCR): 0.9948 -> "0.99"."""
    if not _is_number(x):
        return UNDEFINED
    return f"{x:.2f}"
