from mm_drill.core import Side, TsNs
from mm_drill.metrics.summary import scenario_stats
from mm_drill.scenarios import Scenario
from mm_drill.sim import Fill


def _fill(scenario_id: str, side: Side) -> Fill:
    scenario = Scenario(id=scenario_id, prompt="p", unit="u", true_value=10.0)
    return Fill(side=side, price=10.0, qty=1, scenario=scenario, fair=10.0, ts_ns=TsNs(0))


def test_scenario_stats_sorted_by_trades_then_id() -> None:
    fills = [
        _fill("b", Side.BUY),
        _fill("a", Side.SELL),
        _fill("c", Side.BUY),
        _fill("c", Side.SELL),
        _fill("c", Side.SELL),
        _fill("a", Side.BUY),
    ]
    stats = scenario_stats(fills)
    assert [(s.scenario_id, s.trades, s.buys, s.sells) for s in stats] == [
        ("c", 3, 1, 2),
        ("a", 2, 1, 1),
        ("b", 1, 1, 0),
    ]


def test_scenario_stats_limit() -> None:
    fills = [_fill(f"s{i:02d}", Side.BUY) for i in range(20)]
    stats = scenario_stats(fills)
    assert len(stats) == 12
    assert stats[0].scenario_id == "s00"
    assert scenario_stats([]) == ()


def test_scenario_stats_ties_ignore_fill_order() -> None:
    fills = [_fill("z", Side.BUY), _fill("a", Side.SELL)]
    assert [s.scenario_id for s in scenario_stats(fills)] == ["a", "z"]
    assert [s.scenario_id for s in scenario_stats(fills[::-1])] == ["a", "z"]
