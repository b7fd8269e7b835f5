"""End-of-session summary."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence

from mm_drill.core.types import Side
from mm_drill.metrics.pnl import PnlSnapshot

if TYPE_CHECKING:
    from mm_drill.sim.ledger import Fill

TOP_SCENARIOS = 12


@dataclass(frozen=True, slots=True)
class ScenarioStats:
    scenario_id: str
    trades: int
    buys: int
    sells: int


@dataclass(frozen=True, slots=True)
class SessionSummary:
    rounds: int
    trades: int
    mark: float
    pnl: PnlSnapshot
    realized_pnl: float
    break_even: float | None
    top_scenarios: tuple[ScenarioStats, ...]


def scenario_stats(
    fills: Sequence[Fill], *, limit: int = TOP_SCENARIOS
) -> tuple[ScenarioStats, ...]:
    """Per-scenario trade counts, most traded first.

    Ties are ordered by scenario id, not by which scenario traded first, so
    the ranking does not depend on fill order.
    """
    counts: dict[str, list[int]] = {}
    for fill in fills:
        c = counts.setdefault(fill.scenario.id, [0, 0])
        if fill.side == Side.BUY:
            c[0] += 1
        else:
            c[1] += 1
    stats = [
        ScenarioStats(scenario_id=k, trades=b + s, buys=b, sells=s)
        for k, (b, s) in counts.items()
    ]
    stats.sort(key=lambda st: (-st.trades, st.scenario_id))
    return tuple(stats[:limit])
