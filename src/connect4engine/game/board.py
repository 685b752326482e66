"""
Connect 4 board on two bit sets.

Board representation:
- one FixedBitSet of red stones, one of yellow stones, always disjoint
- width and height copied alongside so a board can exist (and be
  serialized) without a BoardGeometry; geometric queries take the
  matching geometry as an argument
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from .bitboard import FixedBitSet, words_for_board
from .geometry import BoardGeometry, check_dimensions
from .types import Player, Position

STANDARD_COLS = 7
STANDARD_ROWS = 6


class Board:
    """
    Stones of both players on a width x height board.

    Args:
        width: Number of columns (2-32)
        height: Number of rows (2-32)
    """

    __slots__ = ("red", "yellow", "width", "height")

    def __init__(self, width: int, height: int):
        check_dimensions(width, height)
        nw = words_for_board(width, height)
        self.red = FixedBitSet.empty(nw)
        self.yellow = FixedBitSet.empty(nw)
        self.width = width
        self.height = height

    @classmethod
    def standard(cls) -> Board:
        return cls(STANDARD_COLS, STANDARD_ROWS)

    @property
    def num_words(self) -> int:
        return self.red.num_words

    # --- Direct cell access (bypasses gravity) ---

    def get_piece(self, pos: Position) -> Optional[Player]:
        if not pos.is_valid(self.width, self.height):
            return None
        idx = pos.to_index(self.width)
        if self.red.get(idx):
            return Player.RED
        if self.yellow.get(idx):
            return Player.YELLOW
        return None

    def set_piece(self, pos: Position, player: Optional[Player]) -> None:
        if not pos.is_valid(self.width, self.height):
            return
        idx = pos.to_index(self.width)
        self.red = self.red.clear(idx)
        self.yellow = self.yellow.clear(idx)
        if player is Player.RED:
            self.red = self.red.set(idx)
        elif player is Player.YELLOW:
            self.yellow = self.yellow.set(idx)

    def clear(self) -> None:
        self.red = FixedBitSet.empty(self.num_words)
        self.yellow = FixedBitSet.empty(self.num_words)

    def stones_for(self, player: Player) -> FixedBitSet:
        return self.red if player is Player.RED else self.yellow

    def occupied(self) -> FixedBitSet:
        return self.red | self.yellow

    # --- Gravity and fullness ---

    def drop_piece(self, col: int, player: Player, geo: BoardGeometry) -> Optional[int]:
        """
        Drop a piece into a column.

        Returns:
            The row the piece landed on, or None if the column is full or
            out of range (the board is left untouched)
        """
        if not 0 <= col < self.width:
            return None

        empty_in_col = geo.column_masks[col].andnot(self.occupied())
        idx = empty_in_col.lowest_bit_index()
        if idx is None:
            return None

        if player is Player.RED:
            self.red = self.red.set(idx)
        else:
            self.yellow = self.yellow.set(idx)
        return idx // self.width

    def column_height(self, col: int, geo: BoardGeometry) -> int:
        """Number of pieces in a column (0 for an out-of-range column)."""
        if not 0 <= col < self.width:
            return 0
        return (self.occupied() & geo.column_masks[col]).count()

    def is_column_full(self, col: int, geo: BoardGeometry) -> bool:
        if not 0 <= col < self.width:
            return True
        top_idx = (self.height - 1) * self.width + col
        return self.occupied().get(top_idx)

    def is_board_full(self, geo: BoardGeometry) -> bool:
        return (self.occupied() & geo.top_row_mask) == geo.top_row_mask

    def check_win(self, player: Player, geo: BoardGeometry) -> bool:
        return geo.has_four_in_a_row(self.stones_for(player))

    # --- Array and byte views ---

    def _unpack(self, bb: FixedBitSet) -> np.ndarray:
        raw = bb.bits.to_bytes(bb.num_words * 8, "little")
        flat = np.unpackbits(np.frombuffer(raw, dtype=np.uint8), bitorder="little")
        return flat[: self.width * self.height].reshape(self.height, self.width).astype(bool)

    def to_planes(self) -> tuple[np.ndarray, np.ndarray]:
        """Boolean (height, width) arrays of red and yellow stones, row 0 first."""
        return self._unpack(self.red), self._unpack(self.yellow)

    def to_bytes(self) -> bytes:
        """
        Pack the board as little-endian u64 words (red, then yellow)
        followed by one byte each for width and height.
        """
        words = np.array(self.red.words + self.yellow.words, dtype="<u8")
        return words.tobytes() + bytes((self.width, self.height))

    @classmethod
    def from_bytes(cls, data: bytes) -> Board:
        if len(data) < 2:
            raise ValueError("Board data too short")
        width, height = data[-2], data[-1]
        board = cls(width, height)
        nw = board.num_words
        if len(data) != nw * 16 + 2:
            raise ValueError(
                f"Board data for {width}x{height} must be {nw * 16 + 2} bytes, got {len(data)}"
            )
        words = np.frombuffer(data[:-2], dtype="<u8").tolist()
        red = FixedBitSet.from_words(words[:nw])
        yellow = FixedBitSet.from_words(words[nw:])
        area_mask = FixedBitSet(nw, (1 << (width * height)) - 1)
        if red.andnot(area_mask) or yellow.andnot(area_mask) or (red & yellow):
            raise ValueError("Board data has overlapping or off-board stones")
        board.red = red
        board.yellow = yellow
        return board

    # --- Value semantics ---

    def copy(self) -> Board:
        other = Board.__new__(Board)
        other.red = self.red
        other.yellow = self.yellow
        other.width = self.width
        other.height = self.height
        return other

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (
            self.width == other.width
            and self.height == other.height
            and self.red == other.red
            and self.yellow == other.yellow
        )

    def render(self) -> str:
        """
        Render the board as ASCII, top row first.

        - 'R' = red
        - 'Y' = yellow
        - '.' = empty
        """
        lines = []
        for row in range(self.height - 1, -1, -1):
            cells = []
            for col in range(self.width):
                player = self.get_piece(Position(col, row))
                cells.append(player.to_char() if player is not None else ".")
            lines.append("|" + "|".join(cells) + "|")
        lines.append(" " + " ".join(str(col % 10) for col in range(self.width)))
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"Board(width={self.width}, height={self.height})"

