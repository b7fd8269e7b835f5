"""Market-making engine: quote in, fill or no fill out."""

from __future__ import annotations

import logging
import math
import time
from typing import Callable

from mm_drill.core.config import Settings
from mm_drill.core.errors import InvalidQuote
from mm_drill.core.rng import RandomSource, make_rng
from mm_drill.core.types import Quote, Side, TsNs
from mm_drill.metrics.pnl import PnlSnapshot, break_even, mark_to_market
from mm_drill.scenarios.catalog import Scenario
from mm_drill.sim.fair import sample_fair
from mm_drill.sim.ledger import Fill, Ledger
from mm_drill.strategy.quoting import default_quote

logger = logging.getLogger(__name__)

LOGISTIC_SCALE_FRAC = 0.06
ACTIVATION = 0.60
DAMP_SENSITIVITY = 0.35
DAMP_FLOOR = 0.35
FLOW_RATE = 0.06


def check_quote(quote: Quote) -> None:
    if not math.isfinite(quote.bid) or not math.isfinite(quote.ask):
        raise InvalidQuote("bid/ask must be finite")
    if quote.bid <= 0 or quote.ask <= 0:
        raise InvalidQuote("bid/ask must be > 0")
    if quote.bid >= quote.ask:
        raise InvalidQuote("bid must be < ask")


def _check_qty(qty: int) -> None:
    if isinstance(qty, bool) or not isinstance(qty, int):
        raise InvalidQuote("qty must be int")
    if qty <= 0:
        raise InvalidQuote("qty must be positive")


def _logistic(x: float) -> float:
    if x >= 0:
        return 1.0 / (1.0 + math.exp(-x))
    e = math.exp(x)
    return e / (1.0 + e)


def trade_probability(edge: float, true_value: float) -> float:
    """Map a price edge to a probability; the scale grows with the value."""
    scale = max(1.0, LOGISTIC_SCALE_FRAC * true_value)
    return _logistic(edge / scale)


def inventory_damping(inventory: int, inventory_limit: int) -> float:
    pressure = abs(inventory) / max(1, inventory_limit)
    return min(1.0, max(DAMP_FLOOR, 1.0 - DAMP_SENSITIVITY * pressure))


class MarketMakingEngine:
    """Single-session engine.

    All randomness comes from ``rng``, consumed in a fixed order per
    :meth:`submit_quote` call: two draws for the fair value, one directional
    draw, then (only without a directional trade) one flow draw and (only
    when flow fires) one side draw.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        rng: RandomSource | None = None,
        clock: Callable[[], int] | None = None,
    ) -> None:
        self.settings = settings
        self._rng = rng if rng is not None else make_rng(settings.seed)
        self._clock = clock if clock is not None else time.time_ns
        self._ledger = Ledger()

    @property
    def ledger(self) -> Ledger:
        return self._ledger

    @property
    def fills(self) -> tuple[Fill, ...]:
        return self._ledger.fills

    def _make_fill(
        self, side: Side, quote: Quote, qty: int, scenario: Scenario, fair: float
    ) -> Fill:
        price = quote.bid if side == Side.BUY else quote.ask
        return Fill(
            side=side,
            price=price,
            qty=qty,
            scenario=scenario,
            fair=fair,
            ts_ns=TsNs(self._clock()),
        )

    def submit_quote(
        self, quote: Quote, scenario: Scenario, qty: int = 1
    ) -> Fill | None:
        check_quote(quote)
        _check_qty(qty)

        fair = sample_fair(scenario.true_value, self._rng)
        p_buy = trade_probability(fair - quote.ask, scenario.true_value)
        p_sell = trade_probability(quote.bid - fair, scenario.true_value)
        damp = inventory_damping(self._ledger.inventory, self.settings.inventory_limit)

        side: Side | None = None
        r = self._rng.random()
        if p_buy * damp > ACTIVATION and r < p_buy * damp:
            # customer lifts the ask
            side = Side.SELL
        elif p_sell * damp > ACTIVATION and r < p_sell * damp:
            # customer hits the bid
            side = Side.BUY

        if side is None:
            flow = self._rng.random()
            if flow < FLOW_RATE * damp:
                side = Side.BUY if self._rng.random() < 0.5 else Side.SELL
                logger.debug("random flow: side=%s", side.name)

        if side is None:
            logger.debug(
                "no trade: scenario=%s fair=%.6g p_buy=%.4f p_sell=%.4f damp=%.3f",
                scenario.id,
                fair,
                p_buy,
                p_sell,
                damp,
            )
            return None

        next_inventory = self._ledger.projected_inventory(side, qty)
        if abs(next_inventory) > self.settings.inventory_limit:
            logger.debug(
                "fill rejected: side=%s inventory=%d limit=%d",
                side.name,
                next_inventory,
                self.settings.inventory_limit,
            )
            return None

        fill = self._make_fill(side, quote, qty, scenario, fair)
        self._ledger.apply_fill(fill)
        logger.debug(
            "fill: scenario=%s side=%s price=%.6g qty=%d inventory=%d",
            scenario.id,
            side.name,
            fill.price,
            qty,
            self._ledger.inventory,
        )
        return fill

    def pnl(self, mark: float) -> PnlSnapshot:
        return mark_to_market(
            cash=self._ledger.cash,
            inventory=self._ledger.inventory,
            mark=mark,
            risk_aversion=self.settings.risk_aversion,
        )

    def break_even(self) -> float | None:
        return break_even(cash=self._ledger.cash, inventory=self._ledger.inventory)

    def default_quote(self, estimate: float) -> Quote:
        return default_quote(estimate, self._ledger.inventory, self.settings)
