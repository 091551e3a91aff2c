"""
Match controller: one endless match made of consecutive games.

Per game the controller is either awaiting a move from `current_player` or
the game is over. A finished game bumps exactly one score counter and the
next game starts right away with the other player moving first.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from .engine import Game, Player, Position, State
from .policy import Difficulty, Opponent
from .replay import aligned_game, reconstruct
from .report import outcome_line, render_markdown
from .state import MatchState, load_state, save_state, write_text_atomic


class Match:
    def __init__(
        self,
        state: MatchState,
        game: Optional[Game] = None,
        opponent: Optional[Opponent] = None,
    ) -> None:
        self.state = state
        self.game = game if game is not None else reconstruct(state)
        self.opponent = opponent if opponent is not None else Opponent(Difficulty.MEDIUM)
        # concluded engine and its outcome, kept for the report of this run
        self.last_game: Optional[Game] = None
        self.last_outcome: Optional[State] = None

    @classmethod
    def load(cls, path: Path, opponent: Optional[Opponent] = None) -> "Match":
        state = load_state(path)
        logging.info("Loaded match from %s", path)
        return cls(state, opponent=opponent)

    def save(self, path: Path) -> None:
        save_state(self.state, path)
        logging.info("Saved match to %s", path)

    def is_new_game(self) -> bool:
        return sum(self.state.board) == 0

    def do_move(self, position: Position) -> None:
        position = Position(*position)
        player = self.state.current_player
        # the engine rejects the move before the record is touched
        self.game.do_move(position)
        self.state.board[position.index] = player.code
        logging.info("%s takes row %d column %d", player, position.row, position.column)

    def ai_move(self) -> Optional[Position]:
        position = self.opponent.get_move(self.game)
        if position is None:
            logging.info("No move available for the opponent")
            return None
        self.do_move(position)
        return position

    def _inc_score(self, winner: Optional[Player]) -> None:
        if winner is None:
            self.state.tie_score += 1
        elif winner is Player.X:
            self.state.player_x_score += 1
        else:
            self.state.player_o_score += 1

    def evaluate_state(self) -> State:
        current = self.game.state()
        mover = current.player_to_move()
        if mover is not None:
            self.state.current_player = mover
            return current
        logging.info(outcome_line(current))
        self._inc_score(current.winner())
        self.last_game = self.game
        self.last_outcome = current
        self.prepare_next_game()
        return current

    def prepare_next_game(self) -> None:
        next_player = self.state.start_player.other()
        self.state.start_player = next_player
        self.state.current_player = next_player
        self.state.board = [0] * 9
        self.game = aligned_game(next_player)

    def to_markdown(self) -> str:
        if self.last_game is not None:
            return render_markdown(self.state, self.last_game, self.last_outcome)
        return render_markdown(self.state, self.game)

    def write_to_markdown(self, path: Path) -> None:
        write_text_atomic(path, self.to_markdown())
        logging.info("Wrote report to %s", path)
