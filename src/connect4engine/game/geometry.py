"""
Precomputed board masks and the shift-based geometry built on them.

Cells are laid out row-major with row 0 at the bottom:

    index = row * width + col

For a 7x6 board:

    35 36 37 38 39 40 41
    28 29 30 31 32 33 34
    21 22 23 24 25 26 27
    14 15 16 17 18 19 20
     7  8  9 10 11 12 13
     0  1  2  3  4  5  6

Shifting left by 1 moves every cell one column right, by ``width`` one row
up. A horizontal step can carry a bit from the last column of one row into
column 0 of the next (or the reverse), so every shift with a horizontal
component is masked with ``not_col0`` or ``not_col_last``.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from .bitboard import FixedBitSet, words_for_board

MIN_DIM = 2
MAX_DIM = 32
MAX_COLUMNS = 32
WIN_LENGTH = 4


def check_dimensions(width: int, height: int) -> None:
    """Raise ValueError unless both dimensions are within the engine range."""
    if not MIN_DIM <= width <= MAX_DIM:
        raise ValueError(f"Board width must be between {MIN_DIM} and {MAX_DIM}, got {width}")
    if not MIN_DIM <= height <= MAX_DIM:
        raise ValueError(f"Board height must be between {MIN_DIM} and {MAX_DIM}, got {height}")


class BoardGeometry:
    """
    Read-only masks for one board size.

    Args:
        width: Number of columns (2-32)
        height: Number of rows (2-32)
        num_words: Expected bit set width; must equal
            ceil(width * height / 64) when given

    Raises:
        ValueError: If the dimensions are out of range or num_words
            does not match the board area
    """

    __slots__ = (
        "width",
        "height",
        "area",
        "num_words",
        "board_mask",
        "not_col0",
        "not_col_last",
        "column_masks",
        "top_row_mask",
        "bottom_row_mask",
        "_lines",
    )

    def __init__(self, width: int, height: int, num_words: Optional[int] = None):
        check_dimensions(width, height)
        needed = words_for_board(width, height)
        if num_words is not None and num_words != needed:
            raise ValueError(
                f"num_words={num_words} does not match board {width}x{height} (need {needed})"
            )

        self.width = width
        self.height = height
        self.area = width * height
        self.num_words = needed

        nw = needed
        self.board_mask = FixedBitSet(nw, (1 << self.area) - 1)

        col0 = FixedBitSet.from_indices(nw, (row * width for row in range(height)))
        col_last = FixedBitSet.from_indices(
            nw, (row * width + width - 1 for row in range(height))
        )
        self.not_col0 = self.board_mask.andnot(col0)
        self.not_col_last = self.board_mask.andnot(col_last)

        columns = [
            FixedBitSet.from_indices(nw, (row * width + col for row in range(height)))
            for col in range(width)
        ]
        columns.extend(FixedBitSet.empty(nw) for _ in range(MAX_COLUMNS - width))
        self.column_masks: tuple[FixedBitSet, ...] = tuple(columns)

        self.top_row_mask = FixedBitSet.from_indices(
            nw, ((height - 1) * width + col for col in range(width))
        )
        self.bottom_row_mask = FixedBitSet.from_indices(nw, range(width))

        # (shift, boundary mask) per direction
        self._lines = (
            (1, self.not_col0),                   # horizontal
            (width, None),                        # vertical
            (width + 1, self.not_col0),           # ascending diagonal
            (width - 1, self.not_col_last),       # descending diagonal
        )

    @staticmethod
    @lru_cache(maxsize=None)
    def for_size(width: int, height: int) -> BoardGeometry:
        """Shared geometry instance for a board size."""
        return BoardGeometry(width, height)

    # --- Index helpers ---

    def index(self, col: int, row: int) -> int:
        return row * self.width + col

    def position(self, index: int) -> tuple[int, int]:
        """(col, row) of a cell index."""
        row, col = divmod(index, self.width)
        return col, row

    def empty(self) -> FixedBitSet:
        return FixedBitSet.empty(self.num_words)

    # --- Connectivity ---

    def neighbors(self, bb: FixedBitSet) -> FixedBitSet:
        """All orthogonal neighbours of every bit in bb."""
        w = self.width

        right = bb.shift_left(1) & self.not_col0
        left = bb.shift_right(1) & self.not_col_last
        up = bb.shift_left(w)
        down = bb.shift_right(w)

        return (right | left | up | down) & self.board_mask

    def flood_fill(self, seed: FixedBitSet, mask: FixedBitSet) -> FixedBitSet:
        """Connected component of seed within mask (4-connectivity)."""
        filled = seed & mask
        while True:
            expanded = (filled | self.neighbors(filled)) & mask
            if expanded == filled:
                return filled
            filled = expanded

    # --- Line detection ---

    @staticmethod
    def _run_ends(bb: FixedBitSet, step: int, boundary: Optional[FixedBitSet]) -> FixedBitSet:
        # Bit i of the result is set iff bb holds i, i-step, i-2*step, i-3*step
        # with no row wrap in between.
        shifted = bb
        run = bb
        for _ in range(WIN_LENGTH - 1):
            shifted = shifted.shift_left(step)
            if boundary is not None:
                shifted = shifted & boundary
            run = run & shifted
        return run

    def has_four_in_a_row(self, bb: FixedBitSet) -> bool:
        """True if bb contains four consecutive cells in any direction."""
        for step, boundary in self._lines:
            if self._run_ends(bb, step, boundary):
                return True
        return False

    def four_in_a_row_cells(self, bb: FixedBitSet) -> FixedBitSet:
        """Every cell of bb that lies on some run of four."""
        cells = self.empty()
        for step, boundary in self._lines:
            ends = self._run_ends(bb, step, boundary)
            for k in range(WIN_LENGTH):
                cells = cells | ends.shift_right(k * step)
        return cells

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BoardGeometry):
            return NotImplemented
        return self.width == other.width and self.height == other.height

    def __hash__(self) -> int:
        return hash((self.width, self.height))

    def __repr__(self) -> str:
        return f"BoardGeometry(width={self.width}, height={self.height}, num_words={self.num_words})"
