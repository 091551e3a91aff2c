"""
Alternation replay: rebuild a live engine from an unordered board snapshot.

The record only says which cells each player owns. Moves are assumed to
alternate strictly starting with `start_player`, so the starter's cells fill
even move slots and the other player's cells fill odd ones, both scanned in
row-major order. Any board obeying the count invariant is accepted whatever
its true history was; the final occupancy and the side to move are all the
engine's classification depends on.
"""
from __future__ import annotations

import logging
from typing import List, Optional

from .engine import Game, Player, Position, State
from .errors import CorruptStateError, InvalidMoveError
from .state import MatchState


def count_invariant(board: List[int], start_player: Player) -> None:
    """Raise CorruptStateError unless the starter has 0 or 1 extra marks."""
    starter = board.count(start_player.code)
    other = board.count(start_player.other().code)
    if starter - other not in (0, 1):
        raise CorruptStateError(
            f"{start_player} started but board has {starter} {start_player.mark} marks "
            f"and {other} {start_player.other().mark} marks"
        )


def replay_order(board: List[int], start_player: Player) -> List[Optional[Position]]:
    """Assign each owned cell to the next free move slot of its owner."""
    slots: List[Optional[Position]] = [None] * len(board)
    next_slot = {start_player: 0, start_player.other(): 1}
    for index, code in enumerate(board):
        if code == 0:
            continue
        owner = Player.from_code(code)
        slot = next_slot[owner]
        if slot >= len(slots):
            raise CorruptStateError(f"{owner} owns more cells than it can have played")
        slots[slot] = Position.from_index(index)
        next_slot[owner] = slot + 2
    return slots


def aligned_game(start_player: Player) -> Game:
    """A fresh engine whose first move belongs to `start_player`."""
    game = Game()
    if game.state() != State.move_for(start_player):
        game.start_next_game()
    if game.state() != State.move_for(start_player):
        raise CorruptStateError(
            f"Engine cannot be aligned so that {start_player} moves first (state {game.state().value})"
        )
    return game


def reconstruct(state: MatchState) -> Game:
    count_invariant(state.board, state.start_player)
    game = aligned_game(state.start_player)
    for slot, position in enumerate(replay_order(state.board, state.start_player)):
        if position is None:
            continue
        logging.debug("replay slot=%d position=%s", slot, tuple(position))
        try:
            game.do_move(position)
        except InvalidMoveError as e:
            raise CorruptStateError(f"Replay rejected at slot {slot}: {e}") from e
    mover = game.state().player_to_move()
    if mover is not None and mover is not state.current_player:
        raise CorruptStateError(
            f"Record says {state.current_player} moves next but the board gives the move to {mover}"
        )
    return game
