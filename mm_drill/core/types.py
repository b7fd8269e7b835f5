"""Core domain types."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import NewType

TsNs = NewType("TsNs", int)


class Side(IntEnum):
    """Trade side from the maker's perspective."""

    BUY = 0
    SELL = 1


def side_name(side: Side) -> str:
    return "BUY" if side == Side.BUY else "SELL"


@dataclass(frozen=True, slots=True)
class Quote:
    bid: float
    ask: float
