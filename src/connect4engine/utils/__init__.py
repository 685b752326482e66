"""Utilities module."""

from .config import (
    HOST_MIN_DIM,
    HOST_MAX_DIM,
    Config,
    BoardConfig,
    EncodingConfig,
    RolloutConfig,
    get_default_config,
)
from .seed import set_seed
from .logging import (
    Logger,
    RolloutMetrics,
    console,
    create_progress,
    print_config,
    print_board,
)

__all__ = [
    "HOST_MIN_DIM",
    "HOST_MAX_DIM",
    "Config",
    "BoardConfig",
    "EncodingConfig",
    "RolloutConfig",
    "get_default_config",
    "set_seed",
    "Logger",
    "RolloutMetrics",
    "console",
    "create_progress",
    "print_config",
    "print_board",
]
