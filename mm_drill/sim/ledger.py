"""Cash/inventory ledger and fill records."""

from __future__ import annotations

from dataclasses import dataclass

from mm_drill.core.errors import SchemaError
from mm_drill.core.types import Side, TsNs
from mm_drill.scenarios.catalog import Scenario


@dataclass(frozen=True, slots=True)
class Fill:
    side: Side
    price: float
    qty: int
    scenario: Scenario
    fair: float
    ts_ns: TsNs

    @property
    def notional(self) -> float:
        return self.price * self.qty


def signed_qty(side: Side, qty: int) -> int:
    if side == Side.BUY:
        return qty
    if side == Side.SELL:
        return -qty
    raise SchemaError(f"invalid side: {side}")


class Ledger:
    """Session state; mutated only through :meth:`apply_fill`.

    ``realized_pnl`` books closed round-trips against the average entry
    cost of the open position. It is reported alongside, not inside, the
    mark-to-market value.
    """

    def __init__(self) -> None:
        self._cash = 0.0
        self._inventory = 0
        self._realized_pnl = 0.0
        self._avg_cost = 0.0
        self._last_mark: float | None = None
        self._fills: list[Fill] = []

    def __repr__(self) -> str:
        return (
            f"Ledger(cash={self._cash!r}, inventory={self._inventory!r}, "
            f"realized_pnl={self._realized_pnl!r}, fills={len(self._fills)})"
        )

    @property
    def cash(self) -> float:
        return self._cash

    @property
    def inventory(self) -> int:
        return self._inventory

    @property
    def realized_pnl(self) -> float:
        return self._realized_pnl

    @property
    def avg_cost(self) -> float:
        return self._avg_cost

    @property
    def last_mark(self) -> float | None:
        return self._last_mark

    @property
    def fills(self) -> tuple[Fill, ...]:
        return tuple(self._fills)

    def projected_inventory(self, side: Side, qty: int) -> int:
        return self.inventory + signed_qty(side, qty)

    def apply_fill(self, fill: Fill) -> None:
        if fill.qty <= 0:
            raise SchemaError("qty must be positive")
        if fill.price <= 0:
            raise SchemaError("price must be positive")
        delta = signed_qty(fill.side, fill.qty)

        position = self.inventory
        avg_cost = self.avg_cost
        realized = self.realized_pnl
        new_position = position + delta
        if position == 0 or (position > 0) == (delta > 0):
            avg_cost = (avg_cost * abs(position) + fill.price * fill.qty) / abs(
                new_position
            )
        else:
            closed = min(abs(position), fill.qty)
            direction = 1 if position > 0 else -1
            realized += closed * (fill.price - avg_cost) * direction
            if new_position == 0:
                avg_cost = 0.0
            elif (new_position > 0) != (position > 0):
                avg_cost = fill.price

        cash = self.cash - fill.notional if fill.side == Side.BUY else self.cash + fill.notional

        self._cash = cash
        self._inventory = new_position
        self._avg_cost = avg_cost
        self._realized_pnl = realized
        self._last_mark = fill.scenario.true_value
        self._fills.append(fill)
