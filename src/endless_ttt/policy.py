"""
Automated opponent: solver-backed move choice with a difficulty-driven
chance of playing a random legal move instead of an optimal one.
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import Dict, List, Optional

import numpy as np

from .engine import Game, Position
from .solver import solve_state


class Difficulty(Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    UNBEATABLE = "unbeatable"

    @property
    def mistake_probability(self) -> float:
        return _MISTAKE_PROBABILITY[self]


_MISTAKE_PROBABILITY = {
    Difficulty.EASY: 0.3,
    Difficulty.MEDIUM: 0.1,
    Difficulty.HARD: 0.02,
    Difficulty.UNBEATABLE: 0.0,
}


def epsilon_policy_distribution(board: List[int], sol: Dict, epsilon: float) -> List[float]:
    legal = [i for i, v in enumerate(board) if v == 0]
    optimal = list(sol['optimal_moves'])
    nL = len(legal) if legal else 1
    nO = len(optimal) if optimal else 1
    pol = [0.0] * 9
    for i in legal:
        a = ((1.0 - epsilon) * (1.0 / nO if i in optimal else 0.0)) + (epsilon * (1.0 / nL))
        pol[i] = a
    return pol


class Opponent:
    """Picks moves for whoever is to move in a game; never mutates the game."""

    def __init__(self, difficulty: Difficulty = Difficulty.MEDIUM, seed: Optional[int] = None) -> None:
        self.difficulty = difficulty
        self._rng = np.random.default_rng(seed)

    def get_move(self, game: Game) -> Optional[Position]:
        mover = game.state().player_to_move()
        if mover is None or not game.free_positions():
            return None
        board = game.cells()
        sol = solve_state(tuple(board), mover.code)
        pol = np.asarray(
            epsilon_policy_distribution(board, sol, self.difficulty.mistake_probability),
            dtype=float,
        )
        pol = pol / pol.sum()
        idx = int(self._rng.choice(len(pol), p=pol))
        logging.debug(
            "opponent=%s optimal=%s picked=%d",
            self.difficulty.value,
            list(sol['optimal_moves']),
            idx,
        )
        return Position.from_index(idx)
