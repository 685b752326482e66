"""Self-play module."""

from .rollout import (
    GameRecord,
    play_random_game,
    summarize,
    generate_random_games,
)

__all__ = [
    "GameRecord",
    "play_random_game",
    "summarize",
    "generate_random_games",
]
