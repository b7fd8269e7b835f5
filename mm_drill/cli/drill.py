"""Run a market-making drill session in the terminal."""

from __future__ import annotations

import argparse
import sys
from typing import TextIO

from mm_drill.core.config import Settings, SpreadMode
from mm_drill.core.errors import ConfigError, DrillError, SessionClosed
from mm_drill.core.fmt import format_number
from mm_drill.core.log import configure_logging, parse_level
from mm_drill.core.rng import daily_seed
from mm_drill.core.types import Quote, Side, side_name
from mm_drill.metrics.summary import SessionSummary
from mm_drill.scenarios.catalog import Scenario, find_scenario, load_scenarios
from mm_drill.sim.session import Round, Session
from mm_drill.sim.tape import TapeWriter
from mm_drill.strategy.auto import AutoQuoter

_HELP = (
    "commands: <estimate> <bid> <ask> | a <estimate> (suggest quote) | "
    "s (skip) | q (end)"
)


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Make-me-a-market drill")
    parser.add_argument("--duration", default="600", help="session seconds")
    parser.add_argument(
        "--spread-mode",
        choices=[m.value for m in SpreadMode],
        default=SpreadMode.PREDEFINED.value,
    )
    parser.add_argument("--spread", default="10", help="predefined spread width")
    parser.add_argument(
        "--percent-spread", default="0.05", help="spread as fraction of estimate"
    )
    parser.add_argument("--inventory-limit", default="10", help="max |inventory|")
    parser.add_argument("--risk-aversion", default="1.0", help="inventory penalty")
    parser.add_argument("--inv-skew", default="0.5", help="mid shift per unit inventory")
    parser.add_argument("--spread-widen", default="1.0", help="spread widen factor")
    parser.add_argument("--seed", help="rng seed int (default: today's YYYYMMDD)")
    parser.add_argument("--scenarios", help="path to scenario catalog JSON")
    parser.add_argument("--scenario", help="drill a single scenario id")
    parser.add_argument(
        "--auto", help="play N rounds unattended with default quotes"
    )
    parser.add_argument(
        "--estimate-noise", default="0.25", help="auto mode log-normal noise"
    )
    parser.add_argument("--tape", help="path to output tape jsonl")
    parser.add_argument("--log-level", default="WARNING")
    return parser.parse_args(argv)


def _parse_int(value: str, field: str) -> int:
    try:
        return int(value)
    except ValueError as exc:
        raise ConfigError(f"{field} must be int") from exc


def _parse_float(value: str, field: str) -> float:
    try:
        return float(value)
    except ValueError as exc:
        raise ConfigError(f"{field} must be float") from exc


def _settings_from_args(args: argparse.Namespace) -> Settings:
    seed = daily_seed() if args.seed is None else _parse_int(args.seed, "seed")
    return Settings(
        duration_sec=_parse_float(args.duration, "duration"),
        spread_mode=SpreadMode(args.spread_mode),
        predefined_spread=_parse_float(args.spread, "spread"),
        percent_spread=_parse_float(args.percent_spread, "percent-spread"),
        inventory_limit=_parse_int(args.inventory_limit, "inventory-limit"),
        risk_aversion=_parse_float(args.risk_aversion, "risk-aversion"),
        inv_skew=_parse_float(args.inv_skew, "inv-skew"),
        spread_widen=_parse_float(args.spread_widen, "spread-widen"),
        seed=seed,
    )


def _describe_round(rnd: Round, out: TextIO) -> None:
    unit = rnd.scenario.unit
    if rnd.fill is None:
        print(
            f"no trade: bid {format_number(rnd.quote.bid)} / "
            f"ask {format_number(rnd.quote.ask)} ({unit})",
            file=out,
        )
        return
    who = (
        "customer sold to you at your bid"
        if rnd.fill.side == Side.BUY
        else "customer bought from you at your ask"
    )
    print(
        f"trade: {side_name(rnd.fill.side)} @ {format_number(rnd.fill.price)} "
        f"({unit}), {who}",
        file=out,
    )


def _prompt(session: Session, out: TextIO) -> None:
    scenario = session.current
    snap = session.live_pnl()
    hint = f" | hint: {scenario.hint}" if scenario.hint else ""
    print(
        f"[{int(session.remaining_sec())}s inv={snap.inventory} "
        f"risk_adj={format_number(snap.risk_adj)}] {scenario.prompt} "
        f"(unit: {scenario.unit}){hint}",
        file=out,
    )


def _print_summary(summary: SessionSummary, out: TextIO) -> None:
    be = "-" if summary.break_even is None else format_number(summary.break_even)
    print(
        f"rounds={summary.rounds} trades={summary.trades} "
        f"inventory={summary.pnl.inventory} cash={format_number(summary.pnl.cash)} "
        f"mtm={format_number(summary.pnl.mtm)} "
        f"risk_adj={format_number(summary.pnl.risk_adj)} "
        f"realized={format_number(summary.realized_pnl)} break_even={be}",
        file=out,
    )
    for st in summary.top_scenarios:
        print(
            f"  {st.scenario_id}: trades={st.trades} buys={st.buys} sells={st.sells}",
            file=out,
        )


def run_interactive(session: Session, stdin: TextIO, out: TextIO) -> None:
    print(_HELP, file=out)
    _prompt(session, out)
    for line in stdin:
        parts = line.split()
        if not parts:
            continue
        try:
            if parts[0] == "q":
                break
            if parts[0] == "s":
                session.skip()
            elif parts[0] == "a" and len(parts) == 2:
                q = session.engine.default_quote(float(parts[1]))
                print(
                    f"suggested: bid {format_number(q.bid)} / "
                    f"ask {format_number(q.ask)}",
                    file=out,
                )
            elif len(parts) == 3:
                est, bid, ask = (float(p) for p in parts)
                _describe_round(session.submit(est, Quote(bid=bid, ask=ask)), out)
            else:
                print(_HELP, file=out)
        except SessionClosed:
            break
        except ValueError:
            print("numbers expected", file=out)
        except DrillError as exc:
            print(f"error: {exc}", file=out)
        if session.expired:
            break
        _prompt(session, out)
    session.end()


def run_auto(session: Session, quoter: AutoQuoter, rounds: int, out: TextIO) -> None:
    for _ in range(rounds):
        if session.expired:
            break
        est, quote = quoter.quote(session.engine, session.current)
        rnd = session.submit(est, quote)
        print(f"{rnd.scenario.id}: est {format_number(est)}", end=" ", file=out)
        _describe_round(rnd, out)
    session.end()


def _play(
    settings: Settings,
    scenarios: tuple[Scenario, ...],
    quoter: AutoQuoter,
    auto_rounds: int | None,
    tape: TapeWriter | None,
) -> None:
    session = Session(settings, scenarios, tape=tape)
    if auto_rounds is not None:
        run_auto(session, quoter, auto_rounds, sys.stdout)
    else:
        run_interactive(session, sys.stdin, sys.stdout)
    _print_summary(session.summary(), sys.stdout)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    try:
        configure_logging(level=parse_level(args.log_level))
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    try:
        settings = _settings_from_args(args)
        auto_rounds = None if args.auto is None else _parse_int(args.auto, "auto")
        if auto_rounds is not None and auto_rounds < 0:
            raise ConfigError("auto must be non-negative")
        quoter = AutoQuoter(
            seed=settings.seed,
            estimate_noise=_parse_float(args.estimate_noise, "estimate-noise"),
        )
        scenarios = load_scenarios(args.scenarios)
        if args.scenario is not None:
            scenarios = (find_scenario(scenarios, args.scenario),)
    except DrillError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if args.tape:
        run_meta = {
            "seed": settings.seed,
            "spread_mode": settings.spread_mode.value,
            "inventory_limit": settings.inventory_limit,
            "risk_aversion": settings.risk_aversion,
        }
        with TapeWriter(args.tape, run_meta=run_meta) as tape:
            _play(settings, scenarios, quoter, auto_rounds, tape)
    else:
        _play(settings, scenarios, quoter, auto_rounds, None)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
