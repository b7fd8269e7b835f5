"""Quote generation."""

from __future__ import annotations

from mm_drill.strategy.quoting import base_half_spread, default_quote

__all__ = [
    "base_half_spread",
    "default_quote",
]
