"""
Random seed management for reproducible rollouts.
"""

from __future__ import annotations

import random
import numpy as np
import torch


def set_seed(seed: int) -> np.random.Generator:
    """
    Seed Python random, NumPy and PyTorch.

    Args:
        seed: Random seed value

    Returns:
        A NumPy Generator seeded with the same value, for callers that
        draw moves from their own stream
    """
    random.seed(seed)
    np.random.seed(seed)
    torch.manual_seed(seed)

    return np.random.default_rng(seed)
