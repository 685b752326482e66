"""
Plane encoding for neural network input, and the action codec.

Everything here is plain numpy; torch views live in torch_utils.

Input encoding:
- Shape: (C, H, W) where C = HISTORY_LENGTH * 2 + 1 = 17 by default
- Planes 2t, 2t+1: perspective's stones and opponent's stones, t plies ago
- Last plane: 1.0 everywhere if perspective is red, else 0.0

Perspective is the player to move when encoding starts; historical planes
are always relative to it, not to whoever was moving at that ply.

Actions:
- Action index = column (0 to W-1)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

import numpy as np

from .types import Move, Player

if TYPE_CHECKING:
    from .connect4 import Game


PIECE_PLANES = 2
HISTORY_LENGTH = 8
CONSTANT_PLANES = 1
TOTAL_INPUT_PLANES = HISTORY_LENGTH * PIECE_PLANES + CONSTANT_PLANES


def num_input_planes(history_length: int = HISTORY_LENGTH) -> int:
    """Plane count for a given history length."""
    return history_length * PIECE_PLANES + CONSTANT_PLANES


def _fill_planes(planes: np.ndarray, game: Game, perspective: Player, t: int) -> None:
    red, yellow = game.board.to_planes()
    own, opp = (red, yellow) if perspective is Player.RED else (yellow, red)
    planes[t * PIECE_PLANES] = own
    planes[t * PIECE_PLANES + 1] = opp


def encode_game_planes(
    game: Game,
    history_length: int = HISTORY_LENGTH,
) -> tuple[np.ndarray, int, int, int]:
    """
    Encode the current position and recent history.

    Walks back through the game with unmake_move() and then replays the
    same moves with make_move(), so the game is temporarily mutated and
    must not be shared with another caller during the call. On return it
    is exactly as it was.

    Args:
        game: Game to encode
        history_length: Number of positions (current one included)

    Returns:
        (data, num_planes, height, width) where data is a flat float32
        array in row-major (plane, row, col) order
    """
    if history_length < 1:
        raise ValueError(f"history_length must be at least 1, got {history_length}")

    perspective = game.turn()
    height, width = game.height, game.width
    num_planes = num_input_planes(history_length)
    planes = np.zeros((num_planes, height, width), dtype=np.float32)

    history = game.move_history()
    steps_back = min(history_length - 1, len(history))
    moves_to_replay = history[len(history) - steps_back:]

    # T=0: current position
    _fill_planes(planes, game, perspective, 0)

    # T=1..steps_back: walk backward through history
    for t in range(1, steps_back + 1):
        game.unmake_move()
        _fill_planes(planes, game, perspective, t)

    for move in moves_to_replay:
        game.make_move(move)

    planes[-1] = 1.0 if perspective is Player.RED else 0.0

    return planes.reshape(-1), num_planes, height, width


def encode_game_tensor(game: Game, history_length: int = HISTORY_LENGTH) -> np.ndarray:
    """Encoded planes as a (C, H, W) float32 array."""
    data, num_planes, height, width = encode_game_planes(game, history_length)
    return data.reshape(num_planes, height, width)


def encode_move(move: Move) -> int:
    """Action index of a move."""
    return move.col


def decode_move(action: int, game: Game) -> Optional[Move]:
    """
    Move for an action index, with the row the piece would land on.

    Returns:
        None if the column is out of range or already full
    """
    return Move.decode(action, game)


def get_action_mask(game: Game) -> np.ndarray:
    """
    Get mask of legal actions.

    Returns:
        Boolean array of shape (W,) where True = legal move
    """
    mask = np.zeros(game.width, dtype=bool)
    mask[game.legal_action_indices()] = True
    return mask


def get_symmetries(planes: np.ndarray, policy: np.ndarray) -> list[tuple[np.ndarray, np.ndarray]]:
    """
    Symmetric samples for data augmentation.

    Connect 4 is symmetric under left-right reflection.

    Args:
        planes: Encoded position of shape (C, H, W)
        policy: Policy vector of length W

    Returns:
        [(planes, policy), (mirrored planes, mirrored policy)]
    """
    flipped_planes = np.flip(planes, axis=-1).copy()
    flipped_policy = np.flip(policy).copy()
    return [(planes, policy), (flipped_planes, flipped_policy)]
