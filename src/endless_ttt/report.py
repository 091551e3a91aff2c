"""Markdown report: scores, whose turn it is, and the board."""
from __future__ import annotations

from typing import Optional

from .engine import Game, State
from .state import MatchState

INTRO = (
    ":x::o: Tic-Tac-Toe played indefinitely by github action runners! "
    "See [my workflow](.github/workflows/play.yaml).\n\n"
)

_OUTCOME_LINES = {
    State.X_WIN: "Game over: X wins!",
    State.O_WIN: "Game over: O wins!",
    State.CATS_GAME: "Game over: cat's game.",
}


def outcome_line(outcome: State) -> str:
    return _OUTCOME_LINES[outcome]


def render_markdown(state: MatchState, game: Game, outcome: Optional[State] = None) -> str:
    score_table = (
        "|PlayerX wins|PlayerO wins|Ties|\n"
        "|-|-|-|\n"
        f"|{state.player_x_score}|{state.player_o_score}|{state.tie_score}|\n\n"
    )
    game_over = f"{outcome_line(outcome)}\n\n" if outcome is not None else ""
    game_info = f"{state.current_player}'s turn.\n\n"
    board = f"<pre>\n{game.board()}</pre>"
    return f"{INTRO}{score_table}{game_over}{game_info}{board}"
