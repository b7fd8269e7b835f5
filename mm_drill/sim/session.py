"""Timed drill session: scenario rotation, rounds and the end summary."""

from __future__ import annotations

from dataclasses import dataclass
import logging
import math
import time
from typing import Callable, Sequence

from mm_drill.core.config import Settings
from mm_drill.core.errors import InvalidEstimate, SessionClosed
from mm_drill.core.rng import RandomSource, derive_rng
from mm_drill.core.types import Quote, TsNs
from mm_drill.metrics.pnl import PnlSnapshot
from mm_drill.metrics.summary import SessionSummary, scenario_stats
from mm_drill.scenarios.catalog import Scenario
from mm_drill.scenarios.picker import ScenarioPicker
from mm_drill.sim.engine import MarketMakingEngine
from mm_drill.sim.ledger import Fill
from mm_drill.sim.tape import TapeWriter

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Round:
    scenario: Scenario
    estimate: float
    quote: Quote
    fill: Fill | None
    mark: float
    ts_ns: TsNs


class Session:
    """One timed run of the drill.

    The session owns a fresh :class:`MarketMakingEngine`; the timer is a
    deadline checked on each call, nothing runs in the background.
    """

    def __init__(
        self,
        settings: Settings,
        scenarios: Sequence[Scenario],
        *,
        rng: RandomSource | None = None,
        picker_rng: RandomSource | None = None,
        clock: Callable[[], float] | None = None,
        wall_clock: Callable[[], int] | None = None,
        tape: TapeWriter | None = None,
    ) -> None:
        self.settings = settings
        self._rng = rng
        self._clock = clock if clock is not None else time.monotonic
        self._wall_clock = wall_clock if wall_clock is not None else time.time_ns
        self._picker = ScenarioPicker(
            scenarios,
            picker_rng if picker_rng is not None else derive_rng(settings.seed, "picker"),
        )
        self._tape = tape
        self.reset()

    def reset(self) -> None:
        """Discard all state and restart the timer."""
        self.engine = MarketMakingEngine(
            self.settings, rng=self._rng, clock=self._wall_clock
        )
        self._rounds: list[Round] = []
        self._deadline = self._clock() + self.settings.duration_sec
        self._closed = False
        self.current = self._picker.pick()
        logger.info(
            "session started: duration=%ss inventory_limit=%d seed=%s",
            self.settings.duration_sec,
            self.settings.inventory_limit,
            self.settings.seed,
        )

    @property
    def rounds(self) -> tuple[Round, ...]:
        return tuple(self._rounds)

    def remaining_sec(self) -> float:
        if self._closed:
            return 0.0
        return max(0.0, self._deadline - self._clock())

    @property
    def expired(self) -> bool:
        return self.remaining_sec() <= 0.0

    def end(self) -> None:
        if not self._closed:
            self._closed = True
            logger.info(
                "session ended: rounds=%d trades=%d",
                len(self._rounds),
                len(self.engine.fills),
            )

    def _require_open(self) -> None:
        if self.expired:
            self.end()
            raise SessionClosed("session is over")

    def _advance(self) -> None:
        recent = [r.scenario.id for r in self._rounds]
        self.current = self._picker.pick(recent)

    def skip(self) -> Scenario:
        self._require_open()
        self._advance()
        return self.current

    def submit(self, estimate: float, quote: Quote, qty: int = 1) -> Round:
        """Quote the current scenario; InvalidQuote leaves the round unplayed."""
        self._require_open()
        if not math.isfinite(estimate) or estimate <= 0:
            raise InvalidEstimate("estimate must be > 0")
        scenario = self.current
        fill = self.engine.submit_quote(quote, scenario, qty)
        rnd = Round(
            scenario=scenario,
            estimate=estimate,
            quote=quote,
            fill=fill,
            mark=scenario.true_value,
            ts_ns=TsNs(self._wall_clock()),
        )
        self._rounds.append(rnd)
        if self._tape is not None:
            self._record(rnd, qty)
        self._advance()
        return rnd

    def _record(self, rnd: Round, qty: int) -> None:
        round_id = len(self._rounds)
        self._tape.record_quote(
            ts_ns=rnd.ts_ns,
            round_id=round_id,
            scenario_id=rnd.scenario.id,
            estimate=rnd.estimate,
            bid=rnd.quote.bid,
            ask=rnd.quote.ask,
            qty=qty,
        )
        if rnd.fill is not None:
            self._tape.record_fill(
                ts_ns=rnd.fill.ts_ns,
                round_id=round_id,
                side=rnd.fill.side,
                price=rnd.fill.price,
                qty=rnd.fill.qty,
                fair=rnd.fill.fair,
            )
        snap = self.engine.pnl(rnd.mark)
        self._tape.record_pnl(
            ts_ns=rnd.ts_ns,
            mark=rnd.mark,
            cash=snap.cash,
            inventory=snap.inventory,
            mtm=snap.mtm,
            risk_adj=snap.risk_adj,
        )

    def live_pnl(self) -> PnlSnapshot:
        """Valuation against the scenario currently on offer."""
        return self.engine.pnl(self.current.true_value)

    def summary(self) -> SessionSummary:
        mark = self._rounds[-1].scenario.true_value if self._rounds else 0.0
        fills = self.engine.fills
        return SessionSummary(
            rounds=len(self._rounds),
            trades=len(fills),
            mark=mark,
            pnl=self.engine.pnl(mark),
            realized_pnl=self.engine.ledger.realized_pnl,
            break_even=self.engine.break_even(),
            top_scenarios=scenario_stats(fills),
        )
