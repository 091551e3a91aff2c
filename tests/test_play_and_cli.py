import json
import os
import subprocess
import sys
from pathlib import Path

import pytest

import endless_ttt.play as play_mod
from endless_ttt.engine import State
from endless_ttt.errors import MatchError
from endless_ttt.play import PlayArgs, run_play
from endless_ttt.state import MatchState, save_state

SRC = Path(__file__).resolve().parents[1] / "src"


def _fresh(tmp_path: Path) -> Path:
    path = tmp_path / "state.json"
    save_state(MatchState(), path)
    return path


def test_run_play_opening_then_ai(tmp_path: Path):
    state = _fresh(tmp_path)
    report = tmp_path / "README.md"
    args = PlayArgs(state=state, report=report, token="a1", seed=3)
    assert run_play(args) == State.O_MOVE
    data = json.loads(state.read_text())
    assert data["board"] == [0, 0, 2, 0, 0, 0, 0, 0, 0]
    assert data["current_player"] == "PlayerO"
    assert "PlayerO's turn." in report.read_text()

    # token is ignored once the game has started
    assert run_play(PlayArgs(state=state, report=report, token="zz", seed=3)) == State.X_MOVE
    data = json.loads(state.read_text())
    assert sorted(data["board"]) == [0] * 7 + [1, 2]


def test_run_play_finishes_games(tmp_path: Path):
    state = _fresh(tmp_path)
    report = tmp_path / "README.md"
    finished = 0
    for i in range(40):
        outcome = run_play(PlayArgs(state=state, report=report, token=format(i, "x"), seed=i))
        finished += outcome.is_game_over()
    data = json.loads(state.read_text())
    assert data["player_x_score"] + data["player_o_score"] + data["tie_score"] == finished
    assert finished >= 4


def test_run_play_without_token_writes_nothing(tmp_path: Path, monkeypatch):
    state = _fresh(tmp_path)
    before = state.read_text()
    report = tmp_path / "README.md"
    monkeypatch.setattr(play_mod, "get_git_commit", lambda: None)
    with pytest.raises(MatchError):
        run_play(PlayArgs(state=state, report=report))
    assert state.read_text() == before
    assert not report.exists()


def test_run_play_corrupt_state_writes_nothing(tmp_path: Path):
    state = tmp_path / "state.json"
    save_state(MatchState(board=[2, 2, 2, 0, 0, 0, 0, 0, 0]), state)
    before = state.read_text()
    report = tmp_path / "README.md"
    with pytest.raises(MatchError):
        run_play(PlayArgs(state=state, report=report, token="a1"))
    assert state.read_text() == before
    assert not report.exists()


def _run_cli(args: list[str], cwd: Path) -> subprocess.CompletedProcess:
    exe = [sys.executable, "-m", "endless_ttt.cli"]
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(p for p in [str(SRC), env.get("PYTHONPATH", "")] if p)
    return subprocess.run(exe + args, cwd=cwd, capture_output=True, text=True, env=env)


def test_cli_init_play_show_hint(tmp_path: Path):
    state = tmp_path / "resources" / "current_game_state.json"
    report = tmp_path / "README.md"
    r = _run_cli(["init", "--state", str(state)], cwd=tmp_path)
    assert r.returncode == 0
    assert json.loads(state.read_text())["board"] == [0] * 9

    r = _run_cli(["init", "--state", str(state)], cwd=tmp_path)
    assert r.returncode == 2

    r = _run_cli(["--seed", "1", "play", "--state", str(state), "--report", str(report), "--token", "a1"], cwd=tmp_path)
    assert r.returncode == 0, r.stderr
    assert "PlayerX takes row 0 column 2" in r.stderr
    assert report.exists()

    r = _run_cli(["show", "--state", str(state)], cwd=tmp_path)
    assert r.returncode == 0
    assert "|PlayerX wins|PlayerO wins|Ties|" in r.stdout
    assert "PlayerO's turn." in r.stdout

    r = _run_cli(["hint", "--state", str(state)], cwd=tmp_path)
    assert r.returncode == 0
    assert "optimal=" in r.stderr


def test_cli_corrupt_state_fails_without_output(tmp_path: Path):
    state = tmp_path / "state.json"
    state.write_text('{"start_player": "PlayerX"}')
    report = tmp_path / "README.md"
    r = _run_cli(["play", "--state", str(state), "--report", str(report), "--token", "a1"], cwd=tmp_path)
    assert r.returncode == 1
    assert "CorruptStateError" in r.stderr
    assert state.read_text() == '{"start_player": "PlayerX"}'
    assert not report.exists()


def test_cli_help_smoke(tmp_path: Path):
    for args in (["--help"], ["play", "--help"], ["init", "--help"], ["show", "--help"], ["hint", "--help"]):
        r = _run_cli(args, cwd=tmp_path)
        assert r.returncode == 0
        assert r.stdout or r.stderr


def test_report_is_rendered_before_state_is_saved(tmp_path: Path, monkeypatch):
    state = _fresh(tmp_path)
    before = state.read_text()
    report = tmp_path / "README.md"

    def broken(self):
        raise MatchError("cannot render")

    monkeypatch.setattr(play_mod.Match, "to_markdown", broken)
    with pytest.raises(MatchError):
        run_play(PlayArgs(state=state, report=report, token="a1"))
    assert state.read_text() == before
    assert not report.exists()


def test_cli_seed_makes_runs_reproducible(tmp_path: Path):
    boards = []
    for name in ("a", "b"):
        state = tmp_path / name / "state.json"
        report = tmp_path / name / "README.md"
        assert _run_cli(["init", "--state", str(state)], cwd=tmp_path).returncode == 0
        for _ in range(3):
            r = _run_cli(
                ["--seed", "5", "play", "--state", str(state), "--report", str(report),
                 "--token", "a1", "--difficulty", "easy"],
                cwd=tmp_path,
            )
            assert r.returncode == 0, r.stderr
        boards.append(json.loads(state.read_text())["board"])
    assert boards[0] == boards[1]


def test_cli_has_no_deterministic_flag(tmp_path: Path):
    r = _run_cli(["--deterministic", "play", "--token", "a1"], cwd=tmp_path)
    assert r.returncode == 2
    assert "--deterministic" not in _run_cli(["--help"], cwd=tmp_path).stdout
