"""Compact number formatting for terminal output."""

from __future__ import annotations

import math


def format_number(x: float) -> str:
    if not math.isfinite(x):
        return "-"
    ax = abs(x)
    if ax >= 1e9:
        return f"{x / 1e9:.2f}B"
    if ax >= 1e6:
        return f"{x / 1e6:.2f}M"
    if ax >= 1e3:
        return f"{x:.1f}"
    text = f"{x:.3f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text == "-0":
        text = "0"
    return text
