"""Scenario records and the JSON catalog loader."""

from __future__ import annotations

from dataclasses import dataclass
from importlib import resources
import json
import math
from pathlib import Path
from typing import Sequence

from mm_drill.core.errors import SchemaError

_REQUIRED = {"id", "prompt", "unit", "true_value"}
_ALLOWED = _REQUIRED | {"min", "max", "hint", "tags"}


@dataclass(frozen=True, slots=True)
class Scenario:
    id: str
    prompt: str
    unit: str
    true_value: float
    min: float | None = None
    max: float | None = None
    hint: str | None = None
    tags: tuple[str, ...] = ()


def _require_str(value: object, field: str) -> str:
    if not isinstance(value, str) or value == "":
        raise SchemaError(f"{field} must be non-empty string")
    return value


def _require_number(value: object, field: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise SchemaError(f"{field} must be a number")
    number = float(value)
    if not math.isfinite(number):
        raise SchemaError(f"{field} must be finite")
    return number


def _parse_entry(entry: object) -> Scenario:
    if not isinstance(entry, dict):
        raise SchemaError("scenario entry must be an object")
    keys = set(entry.keys())
    if not keys.issubset(_ALLOWED):
        raise SchemaError(f"unexpected keys in scenario: {sorted(keys - _ALLOWED)}")
    missing = _REQUIRED - keys
    if missing:
        raise SchemaError(f"missing keys in scenario: {sorted(missing)}")

    true_value = _require_number(entry["true_value"], "true_value")
    if true_value <= 0:
        raise SchemaError("true_value must be positive")
    lo = entry.get("min")
    hi = entry.get("max")
    lo = None if lo is None else _require_number(lo, "min")
    hi = None if hi is None else _require_number(hi, "max")
    if lo is not None and hi is not None and lo > hi:
        raise SchemaError("min must be <= max")
    hint = entry.get("hint")
    if hint is not None:
        hint = _require_str(hint, "hint")
    tags = entry.get("tags", [])
    if not isinstance(tags, list):
        raise SchemaError("tags must be a list")
    return Scenario(
        id=_require_str(entry["id"], "id"),
        prompt=_require_str(entry["prompt"], "prompt"),
        unit=_require_str(entry["unit"], "unit"),
        true_value=true_value,
        min=lo,
        max=hi,
        hint=hint,
        tags=tuple(_require_str(t, "tag") for t in tags),
    )


def parse_catalog(data: object) -> tuple[Scenario, ...]:
    if not isinstance(data, dict):
        raise SchemaError("scenario catalog must be an object")
    if set(data.keys()) != {"version", "scenarios"}:
        raise SchemaError("unexpected top-level keys in scenario catalog")
    if data["version"] != 0:
        raise SchemaError("unsupported scenario catalog version")
    entries = data["scenarios"]
    if not isinstance(entries, list):
        raise SchemaError("scenarios must be a list")

    out: list[Scenario] = []
    seen: set[str] = set()
    for entry in entries:
        scenario = _parse_entry(entry)
        if scenario.id in seen:
            raise SchemaError(f"duplicate scenario id: {scenario.id}")
        seen.add(scenario.id)
        out.append(scenario)
    if not out:
        raise SchemaError("scenario catalog is empty")
    return tuple(out)


def load_scenarios(path: str | Path | None = None) -> tuple[Scenario, ...]:
    """Load a catalog file, or the built-in catalog when ``path`` is None."""
    if path is None:
        text = (
            resources.files("mm_drill.scenarios")
            .joinpath("data/scenarios.json")
            .read_text(encoding="utf-8")
        )
    else:
        text = Path(path).read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise SchemaError(f"invalid scenario JSON: {exc}") from exc
    return parse_catalog(data)


def find_scenario(scenarios: Sequence[Scenario], scenario_id: str) -> Scenario:
    for scenario in scenarios:
        if scenario.id == scenario_id:
            return scenario
    raise SchemaError(f"unknown scenario id: {scenario_id!r}")
