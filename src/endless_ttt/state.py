"""
Durable match record and its JSON codec.

The record is the only thing that survives between runs. It stores which
cells each player owns, not the order the moves were played in.
"""
from __future__ import annotations

import json
import logging
import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

from .engine import Player
from .errors import CorruptStateError, StateIOError
from .game_basics import EMPTY, O_CELL, X_CELL

U64_MAX = 2 ** 64 - 1

FIELDS = (
    "start_player",
    "current_player",
    "player_x_score",
    "player_o_score",
    "tie_score",
    "board",
)


@dataclass
class MatchState:
    start_player: Player = Player.X
    current_player: Player = Player.X
    player_x_score: int = 0
    player_o_score: int = 0
    tie_score: int = 0
    board: List[int] = field(default_factory=lambda: [EMPTY] * 9)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "start_player": self.start_player.value,
            "current_player": self.current_player.value,
            "player_x_score": self.player_x_score,
            "player_o_score": self.player_o_score,
            "tie_score": self.tie_score,
            "board": list(self.board),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MatchState":
        if not isinstance(data, dict):
            raise CorruptStateError(f"Match record must be an object, got {type(data).__name__}")
        missing = [k for k in FIELDS if k not in data]
        if missing:
            raise CorruptStateError(f"Match record is missing fields: {', '.join(missing)}")
        return cls(
            start_player=_player(data, "start_player"),
            current_player=_player(data, "current_player"),
            player_x_score=_counter(data, "player_x_score"),
            player_o_score=_counter(data, "player_o_score"),
            tie_score=_counter(data, "tie_score"),
            board=_board(data["board"]),
        )

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_json(cls, text: str) -> "MatchState":
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise CorruptStateError(f"Match record is not valid JSON: {e}") from e
        return cls.from_dict(data)


def _player(data: Dict[str, Any], key: str) -> Player:
    try:
        return Player(data[key])
    except ValueError:
        raise CorruptStateError(f"{key}: unknown player tag {data[key]!r}") from None


def _counter(data: Dict[str, Any], key: str) -> int:
    v = data[key]
    if isinstance(v, bool) or not isinstance(v, int) or not 0 <= v <= U64_MAX:
        raise CorruptStateError(f"{key}: expected an unsigned 64-bit integer, got {v!r}")
    return v


def _board(raw: Any) -> List[int]:
    if not isinstance(raw, list) or len(raw) != 9:
        raise CorruptStateError(f"board: expected 9 cells, got {raw!r}")
    for v in raw:
        if isinstance(v, bool) or not isinstance(v, int) or v not in (EMPTY, O_CELL, X_CELL):
            raise CorruptStateError(f"board: invalid cell value {v!r}")
    return list(raw)


def load_state(path: Path) -> MatchState:
    try:
        text = Path(path).read_text()
    except OSError as e:
        raise StateIOError(f"Cannot read match state {path}: {e}") from e
    state = MatchState.from_json(text)
    logging.debug("Loaded match state from %s", path)
    return state


def write_text_atomic(path: Path, content: str) -> None:
    """Write via a temp file in the same directory, then replace."""
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w") as f:
                f.write(content)
            os.replace(tmp, path)
        except BaseException:
            os.unlink(tmp)
            raise
    except OSError as e:
        raise StateIOError(f"Cannot write {path}: {e}") from e


def save_state(state: MatchState, path: Path) -> None:
    write_text_atomic(path, state.to_json())
    logging.debug("Saved match state to %s", path)
