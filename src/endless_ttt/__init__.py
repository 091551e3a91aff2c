"""endless_ttt package.

A persistent tic-tac-toe match that plays one move per run and rebuilds its
engine from a compact board record.

Convenience imports are exposed for common workflows.
"""

from .engine import Game, Player, Position, State
from .match import Match
from .play import PlayArgs, run_play
from .replay import reconstruct
from .state import MatchState

__all__ = [
    "Game",
    "Player",
    "Position",
    "State",
    "Match",
    "MatchState",
    "reconstruct",
    "run_play",
    "PlayArgs",
]
