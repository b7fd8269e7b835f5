"""Unattended quoting for scripted sessions."""

from __future__ import annotations

import math

from mm_drill.core.errors import ConfigError
from mm_drill.core.rng import derive_rng
from mm_drill.core.types import Quote
from mm_drill.scenarios.catalog import Scenario
from mm_drill.sim.engine import MarketMakingEngine


class AutoQuoter:
    """Noisy estimate of the true value, quoted with the engine's default."""

    def __init__(self, *, seed: int | None, estimate_noise: float = 0.25) -> None:
        if not math.isfinite(estimate_noise) or estimate_noise < 0:
            raise ConfigError("estimate_noise must be non-negative")
        self._rng = derive_rng(seed, "auto")
        self._noise = estimate_noise

    def estimate(self, scenario: Scenario) -> float:
        if self._noise == 0:
            return scenario.true_value
        return scenario.true_value * math.exp(self._noise * self._rng.gauss(0.0, 1.0))

    def quote(
        self, engine: MarketMakingEngine, scenario: Scenario
    ) -> tuple[float, Quote]:
        est = self.estimate(scenario)
        return est, engine.default_quote(est)
