import random

import pytest

from mm_drill.core import SchemaError
from mm_drill.scenarios import (
    Scenario,
    ScenarioPicker,
    find_scenario,
    load_scenarios,
)


def _write_catalog(tmp_path, payload) -> str:
    path = tmp_path / "scenarios.json"
    path.write_text(payload, encoding="utf-8")
    return str(path)


def test_builtin_catalog_loads() -> None:
    scenarios = load_scenarios()
    assert len(scenarios) == 21
    assert len({s.id for s in scenarios}) == len(scenarios)
    assert all(s.true_value > 0 for s in scenarios)
    dow = find_scenario(scenarios, "dow-members")
    assert dow.true_value == 30
    assert dow.tags == ("facts", "markets")


def test_catalog_from_file(tmp_path) -> None:
    path = _write_catalog(
        tmp_path,
        """
        {"version":0,"scenarios":[
            {"id":"x","prompt":"How many?","unit":"things","true_value":12.5}
        ]}
        """,
    )
    (s,) = load_scenarios(path)
    assert s == Scenario(id="x", prompt="How many?", unit="things", true_value=12.5)


@pytest.mark.parametrize(
    "entries",
    [
        '{"id":"x","prompt":"p","unit":"u"}',
        '{"id":"x","prompt":"p","unit":"u","true_value":0}',
        '{"id":"x","prompt":"p","unit":"u","true_value":"5"}',
        '{"id":"x","prompt":"p","unit":"u","true_value":5,"color":"red"}',
        '{"id":"x","prompt":"p","unit":"u","true_value":5,"min":9,"max":1}',
        '{"id":"x","prompt":"p","unit":"u","true_value":5,"tags":"a"}',
        '{"id":"x","prompt":"p","unit":"u","true_value":5},'
        '{"id":"x","prompt":"q","unit":"u","true_value":6}',
    ],
)
def test_catalog_rejects_bad_entries(tmp_path, entries) -> None:
    path = _write_catalog(tmp_path, '{"version":0,"scenarios":[' + entries + "]}")
    with pytest.raises(SchemaError):
        load_scenarios(path)


def test_catalog_rejects_bad_top_level(tmp_path) -> None:
    with pytest.raises(SchemaError):
        load_scenarios(_write_catalog(tmp_path, '{"version":1,"scenarios":[]}'))
    with pytest.raises(SchemaError):
        load_scenarios(_write_catalog(tmp_path, '{"version":0,"scenarios":[]}'))
    with pytest.raises(SchemaError):
        load_scenarios(_write_catalog(tmp_path, "not json"))


def test_find_unknown_scenario() -> None:
    with pytest.raises(SchemaError):
        find_scenario(load_scenarios(), "nope")


def _mini(*ids: str) -> tuple[Scenario, ...]:
    return tuple(
        Scenario(id=i, prompt=i, unit="u", true_value=1.0) for i in ids
    )


def test_picker_avoids_recent() -> None:
    picker = ScenarioPicker(_mini("a", "b", "c", "d"), random.Random(0))
    for _ in range(50):
        assert picker.pick(["x", "a", "b", "c"]).id == "d"


def test_picker_only_looks_at_last_three() -> None:
    picker = ScenarioPicker(_mini("a", "b", "c", "d", "e"), random.Random(0))
    seen = {picker.pick(["a", "b", "c", "d"]).id for _ in range(200)}
    assert seen == {"a", "e"}


def test_picker_falls_back_to_full_catalog(seq_rng) -> None:
    picker = ScenarioPicker(_mini("a", "b"), seq_rng([0.99]))
    assert picker.pick(["a", "b"]).id == "b"


def test_picker_requires_scenarios() -> None:
    with pytest.raises(SchemaError):
        ScenarioPicker((), random.Random(0))
