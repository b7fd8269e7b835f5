import io
import json

from mm_drill.cli.drill import main


def test_auto_session(capsys) -> None:
    assert main(["--auto", "5", "--seed", "3"]) == 0
    out = capsys.readouterr().out
    assert "rounds=5" in out
    assert out.count("est ") == 5


def test_auto_session_is_reproducible(capsys) -> None:
    main(["--auto", "20", "--seed", "4"])
    first = capsys.readouterr().out
    main(["--auto", "20", "--seed", "4"])
    assert capsys.readouterr().out == first


def test_auto_session_writes_tape(tmp_path, capsys) -> None:
    tape = tmp_path / "tape.jsonl"
    assert main(["--auto", "3", "--seed", "5", "--tape", str(tape)]) == 0
    records = [json.loads(x) for x in tape.read_text(encoding="utf-8").splitlines()]
    assert records[0]["type"] == "header"
    assert records[0]["seed"] == 5
    assert sum(1 for r in records if r["type"] == "quote") == 3


def test_interactive_session(monkeypatch, capsys) -> None:
    commands = "a 100\n100 90 110\n100 110 90\nfoo bar baz\ns\nq\n"
    monkeypatch.setattr("sys.stdin", io.StringIO(commands))
    assert main(["--seed", "8", "--spread", "10"]) == 0
    out = capsys.readouterr().out
    assert "suggested: bid 95 / ask 105" in out
    assert "error: bid must be < ask" in out
    assert "numbers expected" in out
    assert "rounds=1" in out


def test_bad_settings_exit_code(capsys) -> None:
    assert main(["--inventory-limit", "0", "--auto", "1"]) == 2
    assert "inventory_limit" in capsys.readouterr().err
    assert main(["--seed", "x", "--auto", "1"]) == 2
    assert main(["--auto", "1", "--log-level", "chatty"]) == 2


def test_pinned_scenario(capsys) -> None:
    assert main(["--auto", "3", "--seed", "1", "--scenario", "us-pop"]) == 0
    out = capsys.readouterr().out
    assert out.count("us-pop: est ") == 3
    assert "rounds=3" in out


def test_unknown_pinned_scenario_exit_code(capsys) -> None:
    assert main(["--auto", "1", "--scenario", "no-such-id"]) == 2
    assert "unknown scenario id" in capsys.readouterr().err
