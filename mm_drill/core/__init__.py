"""Core primitives for the drill engine."""

from __future__ import annotations

from mm_drill.core.config import Settings, SpreadMode
from mm_drill.core.errors import (
    ConfigError,
    DrillError,
    InvalidEstimate,
    InvalidQuote,
    SchemaError,
    SessionClosed,
)
from mm_drill.core.fmt import format_number
from mm_drill.core.log import configure_logging
from mm_drill.core.rng import RandomSource, daily_seed, derive_rng, make_rng
from mm_drill.core.types import Quote, Side, TsNs, side_name

__all__ = [
    "ConfigError",
    "DrillError",
    "InvalidEstimate",
    "InvalidQuote",
    "Quote",
    "RandomSource",
    "SchemaError",
    "SessionClosed",
    "Settings",
    "Side",
    "SpreadMode",
    "TsNs",
    "configure_logging",
    "daily_seed",
    "derive_rng",
    "format_number",
    "make_rng",
    "side_name",
]
