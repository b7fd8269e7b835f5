"""Scenario catalog: read-only prompts with hidden true values."""

from __future__ import annotations

from mm_drill.scenarios.catalog import (
    Scenario,
    find_scenario,
    load_scenarios,
    parse_catalog,
)
from mm_drill.scenarios.picker import ScenarioPicker

__all__ = [
    "Scenario",
    "ScenarioPicker",
    "find_scenario",
    "load_scenarios",
    "parse_catalog",
]
