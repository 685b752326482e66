"""
Small value types shared by the board, the game and the encoder.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .connect4 import Game


class Player(IntEnum):
    """Stone colour. Red always moves first."""

    RED = 1
    YELLOW = -1

    def opposite(self) -> Player:
        return Player.YELLOW if self is Player.RED else Player.RED

    def to_char(self) -> str:
        return "R" if self is Player.RED else "Y"

    @classmethod
    def from_int(cls, value: int) -> Player:
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"Invalid player value {value}, expected 1 (red) or -1 (yellow)") from None

    def __str__(self) -> str:
        return "Red" if self is Player.RED else "Yellow"


RED = Player.RED
YELLOW = Player.YELLOW


@dataclass(frozen=True)
class Position:
    """A board cell. Row 0 is the bottom row."""

    col: int
    row: int

    def is_valid(self, width: int, height: int) -> bool:
        return 0 <= self.col < width and 0 <= self.row < height

    def to_index(self, width: int) -> int:
        return self.row * width + self.col


@dataclass(frozen=True)
class Move:
    """
    A dropped piece: the column and the row gravity lands it on.

    The row is recorded so history entries are self-describing and can be
    undone without searching the column.
    """

    col: int
    row: int

    def position(self) -> Position:
        return Position(self.col, self.row)

    def encode(self) -> int:
        """Action index of this move."""
        return self.col

    @staticmethod
    def decode(action: int, game: Game) -> Optional[Move]:
        """Move for an action index in a live game, or None if unplayable."""
        if not 0 <= action < game.width:
            return None
        row = game.board.column_height(action, game.geo)
        if row >= game.height:
            return None
        return Move(action, row)

    def __str__(self) -> str:
        return f"col {self.col}"


class GameOutcome(Enum):
    """Final result of a finished game."""

    RED_WIN = "red_win"
    YELLOW_WIN = "yellow_win"
    DRAW = "draw"

    @classmethod
    def for_winner(cls, player: Player) -> GameOutcome:
        return cls.RED_WIN if player is Player.RED else cls.YELLOW_WIN

    def winner(self) -> Optional[Player]:
        if self is GameOutcome.RED_WIN:
            return Player.RED
        if self is GameOutcome.YELLOW_WIN:
            return Player.YELLOW
        return None

    def is_draw(self) -> bool:
        return self is GameOutcome.DRAW

    def encode_winner_absolute(self) -> float:
        """+1 for a red win, -1 for a yellow win, 0 for a draw."""
        winner = self.winner()
        return 0.0 if winner is None else float(winner.value)

    def encode_winner_from_perspective(self, perspective: Player) -> float:
        """+1 if perspective won, -1 if it lost, 0 for a draw."""
        winner = self.winner()
        if winner is None:
            return 0.0
        return 1.0 if winner == perspective else -1.0

    def __str__(self) -> str:
        if self is GameOutcome.DRAW:
            return "Draw"
        return f"{self.winner()} wins"
