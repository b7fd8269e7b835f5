"""Mark-to-market and risk-adjusted valuation."""

from __future__ import annotations

from dataclasses import dataclass
import math

from mm_drill.core.errors import SchemaError

RISK_PENALTY_RATE = 0.01


@dataclass(frozen=True, slots=True)
class PnlSnapshot:
    cash: float
    inventory: int
    mtm: float
    risk_adj: float


def mark_to_market(
    *, cash: float, inventory: int, mark: float, risk_aversion: float
) -> PnlSnapshot:
    """Value the position at ``mark`` and charge a linear inventory penalty.

    The penalty is ``risk_aversion * |inventory| * 1% * mark``, so a flat
    book always has ``risk_adj == mtm``.
    """
    if not math.isfinite(mark):
        raise SchemaError("mark must be finite")
    raw = cash + inventory * mark
    penalty = risk_aversion * abs(inventory) * RISK_PENALTY_RATE * mark
    return PnlSnapshot(cash=cash, inventory=inventory, mtm=raw, risk_adj=raw - penalty)


def break_even(*, cash: float, inventory: int) -> float | None:
    """Mark at which the open inventory exactly offsets cash; None when flat."""
    if inventory == 0:
        return None
    return -cash / inventory
