"""Counterparty fair-value sampler."""

from __future__ import annotations

import math

from mm_drill.core.rng import RandomSource

FAIR_SIGMA = 0.18
_U_FLOOR = 1e-12


def standard_normal(rng: RandomSource) -> float:
    """Box-Muller transform; consumes exactly two uniform draws."""
    u1 = rng.random()
    u2 = rng.random()
    return math.sqrt(-2.0 * math.log(max(_U_FLOOR, u1))) * math.cos(
        2.0 * math.pi * u2
    )


def sample_fair(
    true_value: float, rng: RandomSource, *, sigma: float = FAIR_SIGMA
) -> float:
    """Log-normal perturbation of ``true_value``."""
    z = standard_normal(rng)
    return true_value * math.exp(sigma * z)
