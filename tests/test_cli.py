import io

import pandas as pd
import pytest

from solver.solver_cli import WordleShell, main, parse_options
from wordsieve.engine import WordleEngine

TOY = ["alert", "crane", "slate", "plate", "grate"]


@pytest.fixture
def shell():
    return WordleShell(WordleEngine(TOY), out=io.StringIO())


def _run(shell, line):
    shell.out.seek(0)
    shell.out.truncate()
    keep_going = shell.execute(line)
    return keep_going, shell.out.getvalue()


def test_clue_pop_reset(shell):
    ok, out = _run(shell, "clue crane NNHNH")
    assert ok
    assert "[0] crane NNHNH" in out
    assert "Remaining candidates: 2" in out

    _, out = _run(shell, "p")
    assert "Removed clue: crane NNHNH" in out
    assert "Remaining candidates: 5" in out

    _run(shell, "c crane nnhnh")
    _, out = _run(shell, "r")
    assert "Clearing all current clues." in out
    _, out = _run(shell, "s")
    assert "No clues currently enforced." in out


def test_errors_are_reported_not_raised(shell):
    _, out = _run(shell, "clue crane NNXNH")
    assert out.startswith("Error:")
    _, out = _run(shell, "clue zzzzz NNNNN")
    assert "not in the dictionary" in out
    _, out = _run(shell, "pop")
    assert "no clues to pop" in out
    _, out = _run(shell, "clue crane")
    assert "exactly two arguments" in out
    _, out = _run(shell, "frobnicate")
    assert "Unknown command 'frobnicate'" in out
    assert len(shell.engine.candidates) == len(TOY)


def test_pattern_command(shell):
    _, out = _run(shell, "pattern ..ate +r")
    assert "Remaining candidates: 1" in out
    _, out = _run(shell, "f ..ate -g")
    assert "pattern ..ate -g" in out
    _, out = _run(shell, "pattern ..ate r")
    assert out.startswith("Error:")


def test_words_command(shell):
    _, out = _run(shell, "words")
    assert out.split() == sorted(TOY)
    _, out = _run(shell, "words sort=info count=2")
    lines = out.strip().splitlines()
    assert lines[0].split()[0] == "plate"
    assert lines[1].split()[0] == "slate"
    assert "...plus 3 more." in out
    _, out = _run(shell, "words sort=bogus")
    assert out.startswith("Error:")
    for bad in ("count=0", "count=-2"):
        _, out = _run(shell, f"words {bad}")
        assert out.startswith("Error: count must be at least 1")


def test_words_to_csv(shell, tmp_path):
    path = tmp_path / "out.csv"
    _, out = _run(shell, f"words max 3 output={path} scope=all")
    assert "Wrote 3 rows" in out
    table = pd.read_csv(path)
    assert table["guess"].tolist()[0] == "plate"


def test_info_and_best(shell):
    _, out = _run(shell, "info plate")
    assert "worst=1" in out
    _, out = _run(shell, "info crane grate")
    assert "worst=2" in out
    _, out = _run(shell, "best pair")
    assert "Evaluated 10 combinations." in out
    assert "best max_group" in out


def test_quit(shell):
    assert shell.execute("quit") is False
    assert shell.execute("q") is False
    assert shell.execute("") is True


def test_parse_options():
    assert parse_options(["info", "count=3"], {"sort": "alpha", "count": "10"}) == {"sort": "info", "count": "3"}
    with pytest.raises(ValueError):
        parse_options(["colour=red"], {"sort": "alpha"})


def test_main_runs_a_session(tmp_path, monkeypatch, capsys):
    path = tmp_path / "words.txt"
    path.write_text("\n".join(TOY), encoding="utf-8")
    lines = iter(["clue crane NNHNH", "words", "quit"])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(lines))
    main(["--words", str(path)])
    out = capsys.readouterr().out
    assert "Remaining candidates: 2" in out
    assert "bye!" in out
