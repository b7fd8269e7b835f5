"""Inventory-aware default quote."""

from __future__ import annotations

import math

from mm_drill.core.config import Settings, SpreadMode
from mm_drill.core.errors import InvalidEstimate
from mm_drill.core.types import Quote

PRICE_EPS = 1e-6


def _clamp(x: float, lo: float, hi: float) -> float:
    return min(hi, max(lo, x))


def base_half_spread(estimate: float, settings: Settings) -> float:
    if settings.spread_mode == SpreadMode.PERCENT:
        half = estimate * settings.percent_spread * 0.5
    else:
        half = settings.predefined_spread * 0.5
    return max(half, PRICE_EPS)


def default_quote(estimate: float, inventory: int, settings: Settings) -> Quote:
    """Suggest a bid/ask around ``estimate`` that leans against inventory.

    Long inventory moves the mid down (encourage selling), short moves it up,
    and the spread widens with ``|inventory| / inventory_limit``.
    """
    if not math.isfinite(estimate) or estimate <= 0:
        raise InvalidEstimate("estimate must be > 0")
    inv_norm = _clamp(inventory / settings.inventory_limit, -1.0, 1.0)

    half = base_half_spread(estimate, settings) * (
        1 + settings.spread_widen * abs(inv_norm)
    )
    mid = estimate - settings.inv_skew * inv_norm * half
    bid = max(PRICE_EPS, mid - half)
    ask = mid + half
    if ask <= bid:
        # Heavy skew pushed the whole quote below the bid floor.
        ask = bid + 2 * half
        if ask <= bid:
            ask = math.nextafter(bid, math.inf)
    return Quote(bid=bid, ask=ask)
