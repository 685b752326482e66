"""
PyTorch views of the encoder output and policy helpers.

Kept apart from the rules core so that Game and the plane encoder only
need numpy. Import from here when feeding a network.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import torch

from .encoding import HISTORY_LENGTH, encode_game_tensor, get_action_mask

if TYPE_CHECKING:
    from .connect4 import Game


def encode_game_torch(
    game: Game,
    history_length: int = HISTORY_LENGTH,
    device: torch.device = None,
) -> torch.Tensor:
    """
    Encode game as PyTorch tensor.

    Returns:
        torch.Tensor of shape (1, C, H, W) ready for a network
    """
    encoded = encode_game_tensor(game, history_length)
    tensor = torch.from_numpy(encoded).unsqueeze(0)
    if device is not None:
        tensor = tensor.to(device)
    return tensor


def get_action_mask_torch(game: Game, device: torch.device = None) -> torch.Tensor:
    """Legal action mask as a bool tensor of shape (W,)."""
    tensor = torch.from_numpy(get_action_mask(game))
    if device is not None:
        tensor = tensor.to(device)
    return tensor


def mask_illegal_logits(logits: torch.Tensor, mask: torch.Tensor) -> torch.Tensor:
    """
    Apply legal move mask to policy logits.

    Sets illegal move logits to -inf so they have 0 probability after softmax.
    """
    masked = logits.clone()
    masked[~mask] = float("-inf")
    return masked


def decode_policy(logits: torch.Tensor, mask: torch.Tensor) -> torch.Tensor:
    """Probability distribution over legal moves from raw logits."""
    return torch.softmax(mask_illegal_logits(logits, mask), dim=-1)
