"""
connect4engine - bitboard rules engine for Connect 4 on any board size.

Boards from 2x2 up to 32x32 are stored as fixed-width bit sets; wins are
found with shift-and-mask chains, moves are applied and undone in place,
and positions encode to input planes for a learning system.

Usage:
    from connect4engine import Game, encode_game_planes

    game = Game(7, 6)
    game.apply_action(3)
    data, planes, height, width = encode_game_planes(game)
"""

__version__ = "0.1.0"

from .game import (
    FixedBitSet,
    BoardGeometry,
    Board,
    Game,
    Player,
    Position,
    Move,
    GameOutcome,
    RED,
    YELLOW,
    TOTAL_INPUT_PLANES,
    encode_game_planes,
    encode_move,
    decode_move,
)

__all__ = [
    "FixedBitSet",
    "BoardGeometry",
    "Board",
    "Game",
    "Player",
    "Position",
    "Move",
    "GameOutcome",
    "RED",
    "YELLOW",
    "TOTAL_INPUT_PLANES",
    "encode_game_planes",
    "encode_move",
    "decode_move",
    "__version__",
]
