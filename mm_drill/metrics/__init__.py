"""Valuation and session summaries."""

from __future__ import annotations

from mm_drill.metrics.pnl import PnlSnapshot, break_even, mark_to_market

__all__ = [
    "PnlSnapshot",
    "break_even",
    "mark_to_market",
]
