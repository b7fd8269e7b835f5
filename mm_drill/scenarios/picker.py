"""Scenario rotation."""

from __future__ import annotations

from typing import Sequence

from mm_drill.core.errors import SchemaError
from mm_drill.core.rng import RandomSource
from mm_drill.scenarios.catalog import Scenario


class ScenarioPicker:
    """Uniform scenario draws that avoid the most recently played ids."""

    def __init__(
        self,
        scenarios: Sequence[Scenario],
        rng: RandomSource,
        *,
        avoid_recent: int = 3,
    ) -> None:
        if not scenarios:
            raise SchemaError("no scenarios to pick from")
        if avoid_recent < 0:
            raise SchemaError("avoid_recent must be non-negative")
        self._scenarios = tuple(scenarios)
        self._rng = rng
        self._avoid_recent = avoid_recent

    @property
    def scenarios(self) -> tuple[Scenario, ...]:
        return self._scenarios

    def pick(self, recent_ids: Sequence[str] = ()) -> Scenario:
        used = set(recent_ids[-self._avoid_recent:]) if self._avoid_recent else set()
        pool = [s for s in self._scenarios if s.id not in used]
        candidates = pool if pool else list(self._scenarios)
        idx = int(self._rng.random() * len(candidates))
        return candidates[min(idx, len(candidates) - 1)]
