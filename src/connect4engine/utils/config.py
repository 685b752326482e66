"""
Configuration management for the Connect 4 engine.

Uses dataclasses for clean configuration with sensible defaults.
Supports loading from YAML files.
"""

from __future__ import annotations

from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Optional
import yaml

from ..game.encoding import HISTORY_LENGTH

# Range a hosting process accepts; the engine itself allows 2-32
HOST_MIN_DIM = 4
HOST_MAX_DIM = 32


@dataclass
class BoardConfig:
    """Board size."""

    width: int = 7
    height: int = 6

    def validate(self) -> None:
        """Raise ValueError if the size is outside the host range."""
        if not HOST_MIN_DIM <= self.width <= HOST_MAX_DIM:
            raise ValueError(
                f"Board width must be between {HOST_MIN_DIM} and {HOST_MAX_DIM}, got {self.width}"
            )
        if not HOST_MIN_DIM <= self.height <= HOST_MAX_DIM:
            raise ValueError(
                f"Board height must be between {HOST_MIN_DIM} and {HOST_MAX_DIM}, got {self.height}"
            )


@dataclass
class EncodingConfig:
    """Input plane encoding."""

    history_length: int = HISTORY_LENGTH


@dataclass
class RolloutConfig:
    """Random self-play rollouts."""

    num_games: int = 100
    max_moves: Optional[int] = None  # None = play to the end
    encode: bool = True  # Store encoded planes for every position


@dataclass
class Config:
    """Full engine configuration."""

    board: BoardConfig = field(default_factory=BoardConfig)
    encoding: EncodingConfig = field(default_factory=EncodingConfig)
    rollout: RolloutConfig = field(default_factory=RolloutConfig)

    log_dir: str = "runs"

    # Random seed
    seed: int = 42

    def save(self, path: str) -> None:
        """Save config to YAML file."""
        with open(path, "w") as f:
            yaml.dump(asdict(self), f, default_flow_style=False)

    @classmethod
    def load(cls, path: str) -> Config:
        """Load config from YAML file."""
        with open(path) as f:
            data = yaml.safe_load(f) or {}

        config = cls(
            board=BoardConfig(**(data.get("board") or {})),
            encoding=EncodingConfig(**(data.get("encoding") or {})),
            rollout=RolloutConfig(**(data.get("rollout") or {})),
            log_dir=data.get("log_dir", "runs"),
            seed=data.get("seed", 42),
        )
        config.board.validate()
        return config

    def ensure_dirs(self) -> None:
        """Create output directories if they don't exist."""
        Path(self.log_dir).mkdir(parents=True, exist_ok=True)


def get_default_config() -> Config:
    """Get default configuration (standard 7x6 board)."""
    return Config()
