"""
Move-sequence driven tic-tac-toe engine.

The engine only learns about the board through `do_move`; whose turn it is
and whether the game is over follow from the moves it has observed. A fresh
engine always hands the first move to PlayerX, and `start_next_game` gives
the first move of the following game to the other player.
"""
from __future__ import annotations

from enum import Enum
from typing import List, NamedTuple, Optional, Tuple

from .errors import InvalidMoveError
from .game_basics import EMPTY, O_CELL, X_CELL, get_winner, winning_line

ROWS = 3
COLUMNS = 3


class Player(Enum):
    X = "PlayerX"
    O = "PlayerO"

    def other(self) -> "Player":
        return Player.O if self is Player.X else Player.X

    @property
    def code(self) -> int:
        return X_CELL if self is Player.X else O_CELL

    @property
    def mark(self) -> str:
        return "X" if self is Player.X else "O"

    @classmethod
    def from_code(cls, code: int) -> "Player":
        if code == X_CELL:
            return cls.X
        if code == O_CELL:
            return cls.O
        raise ValueError(f"Not a player cell code: {code}")

    def __str__(self) -> str:
        return self.value


class State(Enum):
    X_MOVE = "PlayerXMove"
    O_MOVE = "PlayerOMove"
    X_WIN = "PlayerXWin"
    O_WIN = "PlayerOWin"
    CATS_GAME = "CatsGame"

    def is_game_over(self) -> bool:
        return self in (State.X_WIN, State.O_WIN, State.CATS_GAME)

    def player_to_move(self) -> Optional[Player]:
        if self is State.X_MOVE:
            return Player.X
        if self is State.O_MOVE:
            return Player.O
        return None

    def winner(self) -> Optional[Player]:
        if self is State.X_WIN:
            return Player.X
        if self is State.O_WIN:
            return Player.O
        return None

    @classmethod
    def move_for(cls, player: Player) -> "State":
        return cls.X_MOVE if player is Player.X else cls.O_MOVE


class Position(NamedTuple):
    row: int
    column: int

    @property
    def index(self) -> int:
        return self.row * COLUMNS + self.column

    @classmethod
    def from_index(cls, index: int) -> "Position":
        return cls(index // COLUMNS, index % COLUMNS)

    def in_bounds(self) -> bool:
        return 0 <= self.row < ROWS and 0 <= self.column < COLUMNS


class PositionOutOfBoundsError(InvalidMoveError):
    pass


class PositionAlreadyOwnedError(InvalidMoveError):
    pass


class GameOverError(InvalidMoveError):
    pass


class Game:
    def __init__(self) -> None:
        self._cells: List[int] = [EMPTY] * (ROWS * COLUMNS)
        self._starting_player = Player.X
        self._state = State.move_for(self._starting_player)
        self.history: List[Position] = []
        self.winning_positions: Tuple[Position, ...] = ()

    @property
    def starting_player(self) -> Player:
        return self._starting_player

    def state(self) -> State:
        return self._state

    def cells(self) -> List[int]:
        return self._cells[:]

    def get_owner(self, position: Position) -> Optional[Player]:
        if not position.in_bounds():
            raise PositionOutOfBoundsError(f"{position} is outside the board")
        code = self._cells[position.index]
        return None if code == EMPTY else Player.from_code(code)

    def free_positions(self) -> List[Position]:
        if self._state.is_game_over():
            return []
        return [Position.from_index(i) for i, v in enumerate(self._cells) if v == EMPTY]

    def can_move(self, position: Position) -> bool:
        return (
            not self._state.is_game_over()
            and position.in_bounds()
            and self._cells[position.index] == EMPTY
        )

    def do_move(self, position: Position) -> State:
        position = Position(*position)
        if self._state.is_game_over():
            raise GameOverError(f"Cannot play {position}: the game is over ({self._state.value})")
        if not position.in_bounds():
            raise PositionOutOfBoundsError(f"{position} is outside the board")
        if self._cells[position.index] != EMPTY:
            raise PositionAlreadyOwnedError(f"{position} is already owned")
        mover = self._state.player_to_move()
        self._cells[position.index] = mover.code
        self.history.append(position)
        self._state = self._classify(mover)
        return self._state

    def _classify(self, mover: Player) -> State:
        line = winning_line(self._cells)
        if line is not None:
            self.winning_positions = tuple(Position.from_index(i) for i in line)
            return State.X_WIN if get_winner(self._cells) == X_CELL else State.O_WIN
        if EMPTY not in self._cells:
            return State.CATS_GAME
        return State.move_for(mover.other())

    def start_next_game(self) -> State:
        self._starting_player = self._starting_player.other()
        self._cells = [EMPTY] * (ROWS * COLUMNS)
        self.history = []
        self.winning_positions = ()
        self._state = State.move_for(self._starting_player)
        return self._state

    def board(self) -> str:
        lines = []
        for row in range(ROWS):
            marks = []
            for column in range(COLUMNS):
                code = self._cells[row * COLUMNS + column]
                marks.append("-" if code == EMPTY else Player.from_code(code).mark)
            lines.append(" ".join(marks))
        return "\n".join(lines) + "\n"

    def __str__(self) -> str:
        return self.board()
