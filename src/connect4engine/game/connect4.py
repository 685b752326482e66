"""
Connect 4 game logic.

Game owns a Board, the geometry for its size, the player to move, the
history of applied moves and the terminal outcome. Moves are applied and
undone in place; an undo is the exact inverse of the move that was
actually applied.

Illegal moves and undo on an empty history are reported by returning
False and leave the game untouched. Out-of-range board dimensions are a
construction error (ValueError).
"""

from __future__ import annotations

from typing import Optional, Union

from .board import Board, STANDARD_COLS, STANDARD_ROWS
from .encoding import TOTAL_INPUT_PLANES, decode_move
from .geometry import BoardGeometry
from .types import GameOutcome, Move, Player, Position


class Game:
    """
    Two-player Connect 4 on a width x height board. Red moves first.

    Args:
        width: Number of columns (2-32)
        height: Number of rows (2-32)
    """

    def __init__(self, width: int = STANDARD_COLS, height: int = STANDARD_ROWS):
        self._board = Board(width, height)
        self._geo = BoardGeometry.for_size(width, height)
        self._current_player = Player.RED
        self._move_history: list[Move] = []
        self._is_over = False
        self._outcome: Optional[GameOutcome] = None

    @classmethod
    def standard(cls) -> Game:
        return cls(STANDARD_COLS, STANDARD_ROWS)

    # --- State queries ---

    @property
    def width(self) -> int:
        return self._board.width

    @property
    def height(self) -> int:
        return self._board.height

    @property
    def board(self) -> Board:
        return self._board

    @property
    def geo(self) -> BoardGeometry:
        return self._geo

    def turn(self) -> Player:
        """Player to move (for a finished game, who would have moved next)."""
        return self._current_player

    def is_over(self) -> bool:
        return self._is_over

    def outcome(self) -> Optional[GameOutcome]:
        return self._outcome

    def move_history(self) -> tuple[Move, ...]:
        return tuple(self._move_history)

    def get_piece(self, pos: Position) -> Optional[Player]:
        return self._board.get_piece(pos)

    def set_piece(self, pos: Position, player: Union[Player, int, None]) -> None:
        """Place or remove a stone directly, outside the move rules."""
        if player is not None:
            player = Player.from_int(int(player))
        self._board.set_piece(pos, player)

    # --- Moves ---

    def legal_moves(self) -> list[Move]:
        """One move per non-full column, with the row gravity will use."""
        if self._is_over:
            return []
        board, geo = self._board, self._geo
        return [
            Move(col, board.column_height(col, geo))
            for col in range(board.width)
            if not board.is_column_full(col, geo)
        ]

    def is_legal_move(self, move: Move) -> bool:
        if self._is_over:
            return False
        if not 0 <= move.col < self._board.width:
            return False
        board, geo = self._board, self._geo
        return not board.is_column_full(move.col, geo) and move.row == board.column_height(
            move.col, geo
        )

    def make_move(self, move: Move) -> bool:
        """
        Apply a move for the player to move.

        The move's row must match where gravity places the piece; a stale
        or mismatched row is rejected.

        Returns:
            True if the move was applied, False if it was illegal
        """
        if not self.is_legal_move(move):
            return False

        mover = self._current_player
        row = self._board.drop_piece(move.col, mover, self._geo)
        if row is None:
            return False

        self._move_history.append(Move(move.col, row))

        if self._board.check_win(mover, self._geo):
            self._is_over = True
            self._outcome = GameOutcome.for_winner(mover)
        elif self._board.is_board_full(self._geo):
            self._is_over = True
            self._outcome = GameOutcome.DRAW

        # Switch even after a terminal move
        self._current_player = mover.opposite()
        return True

    def unmake_move(self) -> bool:
        """Undo the last applied move. Returns False if there is none."""
        if not self._move_history:
            return False

        last = self._move_history.pop()
        self._board.set_piece(last.position(), None)

        self._is_over = False
        self._outcome = None
        self._current_player = self._current_player.opposite()
        return True

    # --- Action-index protocol ---

    def legal_action_indices(self) -> list[int]:
        return [move.encode() for move in self.legal_moves()]

    def apply_action(self, action: int) -> bool:
        """Play the column `action`. Returns False if it is not playable."""
        move = decode_move(action, self)
        if move is None:
            return False
        return self.make_move(move)

    def action_size(self) -> int:
        return self.width

    def board_shape(self) -> tuple[int, int]:
        return self.height, self.width

    def input_plane_count(self) -> int:
        return TOTAL_INPUT_PLANES

    # --- Rewards ---

    def reward_absolute(self) -> float:
        """+1 red won, -1 yellow won, 0 draw or unfinished."""
        if self._outcome is None:
            return 0.0
        return self._outcome.encode_winner_absolute()

    def reward_from_perspective(self, perspective: Union[Player, int]) -> float:
        perspective = Player.from_int(int(perspective))
        if self._outcome is None:
            return 0.0
        return self._outcome.encode_winner_from_perspective(perspective)

    def winning_cells(self) -> list[Position]:
        """Cells on the winning line(s) of a won game, bottom-left first."""
        if self._outcome is None or self._outcome.winner() is None:
            return []
        stones = self._board.stones_for(self._outcome.winner())
        cells = self._geo.four_in_a_row_cells(stones)
        return [Position(*self._geo.position(i)) for i in cells.iter_ones()]

    # --- Copying and identity ---

    def clone(self) -> Game:
        """Independent deep copy."""
        other = Game.__new__(Game)
        other._board = self._board.copy()
        other._geo = self._geo
        other._current_player = self._current_player
        other._move_history = list(self._move_history)
        other._is_over = self._is_over
        other._outcome = self._outcome
        return other

    copy = clone

    def position_key(self) -> tuple:
        """Hashable key of the stones and the player to move."""
        return (
            self.width,
            self.height,
            self._board.red.words,
            self._board.yellow.words,
            int(self._current_player),
        )

    def name(self) -> str:
        return f"connect4_{self.width}x{self.height}"

    def render(self) -> str:
        return self._board.render()

    def __str__(self) -> str:
        return (
            f"Game(turn: {self._current_player}, is_over: {self._is_over}, "
            f"outcome: {self._outcome})\n{self._board}"
        )

    def __repr__(self) -> str:
        return (
            f"Game(width={self.width}, height={self.height}, "
            f"turn={self._current_player.name}, over={self._is_over})"
        )
