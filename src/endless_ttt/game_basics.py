"""
Game basics: cell codes, win patterns, winner/draw checks.
Notes:
- State is a list of 9 cells, row-major: 0=empty, 1=O, 2=X.
- The persisted record uses these codes directly, so they are not 1=X like
  most textbook encodings.
"""
from typing import List, Optional, Tuple

EMPTY = 0
O_CELL = 1
X_CELL = 2

WIN_PATTERNS = [
    [0, 1, 2], [3, 4, 5], [6, 7, 8],
    [0, 3, 6], [1, 4, 7], [2, 5, 8],
    [0, 4, 8], [2, 4, 6]
]


def other_code(code: int) -> int:
    return O_CELL if code == X_CELL else X_CELL


def winning_line(board: List[int]) -> Optional[Tuple[int, int, int]]:
    for pattern in WIN_PATTERNS:
        a, b, c = pattern
        v = board[a]
        if v != EMPTY and v == board[b] and v == board[c]:
            return a, b, c
    return None


def get_winner(board: List[int]) -> int:
    line = winning_line(board)
    return EMPTY if line is None else board[line[0]]


def is_draw(board: List[int]) -> bool:
    return EMPTY not in board and get_winner(board) == EMPTY
