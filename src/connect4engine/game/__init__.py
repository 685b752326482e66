"""Game module - bit sets, geometry, Connect 4 rules and encoding."""

from .bitboard import FixedBitSet, words_for_board
from .geometry import (
    MIN_DIM,
    MAX_DIM,
    WIN_LENGTH,
    BoardGeometry,
    check_dimensions,
)
from .types import (
    RED,
    YELLOW,
    Player,
    Position,
    Move,
    GameOutcome,
)
from .board import STANDARD_COLS, STANDARD_ROWS, Board
from .connect4 import Game

from .encoding import (
    PIECE_PLANES,
    HISTORY_LENGTH,
    CONSTANT_PLANES,
    TOTAL_INPUT_PLANES,
    num_input_planes,
    encode_game_planes,
    encode_game_tensor,
    encode_move,
    decode_move,
    get_action_mask,
    get_symmetries,
)

__all__ = [
    "FixedBitSet",
    "words_for_board",
    "MIN_DIM",
    "MAX_DIM",
    "WIN_LENGTH",
    "BoardGeometry",
    "check_dimensions",
    "RED",
    "YELLOW",
    "Player",
    "Position",
    "Move",
    "GameOutcome",
    "STANDARD_COLS",
    "STANDARD_ROWS",
    "Board",
    "Game",
    "PIECE_PLANES",
    "HISTORY_LENGTH",
    "CONSTANT_PLANES",
    "TOTAL_INPUT_PLANES",
    "num_input_planes",
    "encode_game_planes",
    "encode_game_tensor",
    "encode_move",
    "decode_move",
    "get_action_mask",
    "get_symmetries",
]
