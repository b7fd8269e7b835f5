"""Session settings."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import math

from mm_drill.core.errors import ConfigError


class SpreadMode(str, Enum):
    PREDEFINED = "predefined"
    PERCENT = "percent"


def _require_positive(value: float, field: str) -> None:
    if not math.isfinite(value) or value <= 0:
        raise ConfigError(f"{field} must be positive")


def _require_non_negative(value: float, field: str) -> None:
    if not math.isfinite(value) or value < 0:
        raise ConfigError(f"{field} must be non-negative")


@dataclass(frozen=True, slots=True)
class Settings:
    """Immutable configuration for one drill session.

    ``predefined_spread`` is an absolute full width in the scenario unit,
    ``percent_spread`` a fraction of the estimate (0.05 = 5%). Which one
    applies is chosen by ``spread_mode``.
    """

    duration_sec: float = 600
    spread_mode: SpreadMode = SpreadMode.PREDEFINED
    predefined_spread: float = 10.0
    percent_spread: float = 0.05
    inventory_limit: int = 10
    risk_aversion: float = 1.0
    inv_skew: float = 0.5
    spread_widen: float = 1.0
    seed: int | None = None

    def __post_init__(self) -> None:
        try:
            mode = SpreadMode(self.spread_mode)
        except ValueError as exc:
            raise ConfigError(f"invalid spread mode: {self.spread_mode!r}") from exc
        object.__setattr__(self, "spread_mode", mode)

        _require_positive(self.duration_sec, "duration_sec")
        _require_positive(self.predefined_spread, "predefined_spread")
        _require_positive(self.percent_spread, "percent_spread")
        if isinstance(self.inventory_limit, bool) or not isinstance(
            self.inventory_limit, int
        ):
            raise ConfigError("inventory_limit must be int")
        if self.inventory_limit <= 0:
            raise ConfigError("inventory_limit must be positive")
        _require_non_negative(self.risk_aversion, "risk_aversion")
        _require_non_negative(self.inv_skew, "inv_skew")
        _require_non_negative(self.spread_widen, "spread_widen")
        if self.seed is not None and (
            isinstance(self.seed, bool) or not isinstance(self.seed, int)
        ):
            raise ConfigError("seed must be int or None")
