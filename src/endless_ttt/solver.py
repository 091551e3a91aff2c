"""
Exact game-theoretic solver (minimax with memoization), from the side-to-move perspective.
Tie-break policy:
- Prefer win over draw over loss.
- Among wins/draws, prefer shorter distance (plies) to termination.
- Among losses, prefer longer distance (delay the loss).
The side to move is passed explicitly since either player may start a game.
"""
from functools import lru_cache
from typing import Dict, List, Optional

from .game_basics import get_winner, is_draw, other_code


def legal_moves(board_t: tuple) -> List[int]:
    return [i for i, v in enumerate(board_t) if v == 0]


def apply_move_t(board_t: tuple, idx: int, player: int) -> tuple:
    lst = list(board_t)
    lst[idx] = player
    return tuple(lst)


def better_of(a: int, b: int) -> int:
    order = {+1: 2, 0: 1, -1: 0}
    return a if order[a] > order[b] else b


def _terminal(value: int) -> Dict:
    return {
        'value': value,
        'plies_to_end': 0,
        'optimal_moves': tuple(),
        'q_values': tuple([None] * 9),
        'dtt_action': tuple([None] * 9),
    }


@lru_cache(maxsize=None)
def solve_state(board_t: tuple, to_move: int) -> Dict:
    if get_winner(list(board_t)) != 0:
        # the previous mover completed a line
        return _terminal(-1)
    if is_draw(list(board_t)):
        return _terminal(0)
    q_vals: List[Optional[int]] = [None] * 9
    dtt_action: List[Optional[int]] = [None] * 9
    best_val: Optional[int] = None
    best_dtt: Optional[int] = None
    best_moves: List[int] = []
    for mv in legal_moves(board_t):
        child = apply_move_t(board_t, mv, to_move)
        s_child = solve_state(child, other_code(to_move))
        q = -s_child['value']
        q_vals[mv] = q
        dtt_action[mv] = 1 + s_child['plies_to_end']
        if best_val is None:
            best_val = q
            best_dtt = dtt_action[mv]
            best_moves = [mv]
            continue
        if better_of(q, best_val) == q and q != best_val:
            best_val = q
            best_dtt = dtt_action[mv]
            best_moves = [mv]
        elif q == best_val:
            # delay losses, hurry wins and draws
            if q == -1:
                improves = dtt_action[mv] > best_dtt
            else:
                improves = dtt_action[mv] < best_dtt
            if improves:
                best_dtt = dtt_action[mv]
                best_moves = [mv]
            elif dtt_action[mv] == best_dtt:
                best_moves.append(mv)
    return {
        'value': best_val,
        'plies_to_end': best_dtt,
        'optimal_moves': tuple(sorted(best_moves)),
        'q_values': tuple(q_vals),
        'dtt_action': tuple(dtt_action),
    }
