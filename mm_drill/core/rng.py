"""Random sources for the engine."""

from __future__ import annotations

from datetime import date
import random
from typing import Protocol


class RandomSource(Protocol):
    def random(self) -> float:
        """Return the next uniform draw in [0, 1)."""


def make_rng(seed: int | None) -> random.Random:
    """Seeded generator when ``seed`` is given, OS-entropy seeded otherwise."""
    if seed is None:
        return random.Random()
    return random.Random(seed)


def daily_seed(today: date | None = None) -> int:
    d = today if today is not None else date.today()
    return d.year * 10000 + d.month * 100 + d.day


def derive_rng(seed: int | None, label: str) -> random.Random:
    """Independent stream for a named consumer, reproducible from ``seed``."""
    if seed is None:
        return random.Random()
    return random.Random(f"{label}:{seed}")
