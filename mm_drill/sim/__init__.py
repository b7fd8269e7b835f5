"""Simulation: fair values, fills, ledger, sessions, tape."""

from __future__ import annotations

from mm_drill.sim.ledger import Fill, Ledger
from mm_drill.sim.engine import MarketMakingEngine, check_quote
from mm_drill.sim.fair import sample_fair
from mm_drill.sim.session import Round, Session
from mm_drill.sim.tape import TapeWriter

__all__ = [
    "Fill",
    "Ledger",
    "MarketMakingEngine",
    "Round",
    "Session",
    "TapeWriter",
    "check_quote",
    "sample_fair",
]
