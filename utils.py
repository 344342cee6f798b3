"""
Utility functions for ShareMoney
"""
from __future__ import annotations
import os
from decimal import Decimal, ROUND_HALF_UP

CENT = Decimal("0.01")


def round2(x: float) -> float:
    """Round to 2 decimals, halves away from zero (12.345 -> 12.35, -12.345 -> -12.35)"""
    return float(Decimal(str(x)).quantize(CENT, rounding=ROUND_HALF_UP))


def safe_float(x, default=0.0):
    """Convert value to float safely, returning default on error"""
    try:
        return float(x)
    except (TypeError, ValueError):
        return default


def format_money(amount: float, symbol: str = "") -> str:
    """Format amount with currency symbol, e.g. '$12.50' or '-$3.00'"""
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):.2f}"


def app_dir() -> str:
    """
    Get application data directory: $SHAREMONEY_HOME or ~/.sharemoney
    Creates directory if it doesn't exist.
    """
    path = os.environ.get("SHAREMONEY_HOME") or os.path.join(os.path.expanduser("~"), ".sharemoney")
    os.makedirs(path, exist_ok=True)
    return path
