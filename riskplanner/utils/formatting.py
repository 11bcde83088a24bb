"""Display helpers for report text."""

from __future__ import annotations


def format_currency(value: float, symbol: str = "$") -> str:
    """Format an amount as ``$1,234.56`` (negative amounts as ``-$1,234.56``)."""
    sign = "-" if value < 0 else ""
    return f"{sign}{symbol}{abs(value):,.2f}"


def format_percentage(value: float) -> str:
    return f"{value:.2f}%"
