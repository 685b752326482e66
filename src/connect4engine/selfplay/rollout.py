"""
Random self-play rollouts.

Plays games with uniformly random legal moves, collecting the encoded
position before every move together with the uniform policy over legal
columns. This is raw data generation on top of the rules engine; no
search or evaluation is involved.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import numpy as np

from ..game import Game, GameOutcome, encode_game_tensor, get_action_mask
from ..game.encoding import HISTORY_LENGTH
from ..utils.config import Config
from ..utils.logging import Logger, RolloutMetrics, create_progress


@dataclass
class GameRecord:
    """Record of one rollout."""

    width: int
    height: int
    planes: List[np.ndarray] = field(default_factory=list)  # Encoded positions
    policies: List[np.ndarray] = field(default_factory=list)  # Uniform over legal moves
    actions: List[int] = field(default_factory=list)
    outcome: Optional[GameOutcome] = None  # None if cut off by max_moves
    num_moves: int = 0

    @property
    def reward(self) -> float:
        """+1 red won, -1 yellow won, 0 draw or unfinished."""
        if self.outcome is None:
            return 0.0
        return self.outcome.encode_winner_absolute()


def play_random_game(
    width: int = 7,
    height: int = 6,
    rng: Optional[np.random.Generator] = None,
    history_length: int = HISTORY_LENGTH,
    encode: bool = True,
    max_moves: Optional[int] = None,
) -> GameRecord:
    """
    Play one game with random legal moves.

    Args:
        width: Board width
        height: Board height
        rng: Random generator (a fresh unseeded one if None)
        history_length: Positions per encoded sample
        encode: Whether to store encoded planes and policies
        max_moves: Stop early after this many moves

    Returns:
        GameRecord of the game
    """
    if rng is None:
        rng = np.random.default_rng()

    game = Game(width, height)
    record = GameRecord(width=width, height=height)

    while not game.is_over():
        if max_moves is not None and record.num_moves >= max_moves:
            break

        legal = game.legal_action_indices()

        if encode:
            mask = get_action_mask(game)
            record.planes.append(encode_game_tensor(game, history_length))
            record.policies.append(mask.astype(np.float32) / mask.sum())

        action = int(rng.choice(legal))
        game.apply_action(action)
        record.actions.append(action)
        record.num_moves += 1

    record.outcome = game.outcome()
    return record


def summarize(records: List[GameRecord], elapsed_seconds: float = 0.0) -> RolloutMetrics:
    """Aggregate counts over a batch of records."""
    if records:
        board = f"{records[0].width}x{records[0].height}"
    else:
        board = "-"
    outcomes = [r.outcome for r in records]
    total_moves = sum(r.num_moves for r in records)
    return RolloutMetrics(
        board=board,
        games_played=len(records),
        total_moves=total_moves,
        avg_game_length=total_moves / len(records) if records else 0.0,
        red_wins=outcomes.count(GameOutcome.RED_WIN),
        yellow_wins=outcomes.count(GameOutcome.YELLOW_WIN),
        draws=outcomes.count(GameOutcome.DRAW),
        unfinished=outcomes.count(None),
        positions_encoded=sum(len(r.planes) for r in records),
        elapsed_seconds=elapsed_seconds,
    )


def generate_random_games(
    config: Config,
    rng: Optional[np.random.Generator] = None,
    logger: Optional[Logger] = None,
    show_progress: bool = False,
) -> Tuple[List[GameRecord], RolloutMetrics]:
    """
    Play config.rollout.num_games random games.

    Args:
        config: Engine configuration
        rng: Random generator (seeded from config.seed if None)
        logger: Optional logger for the batch summary
        show_progress: Show a rich progress bar

    Returns:
        (records, metrics)
    """
    try:
        config.board.validate()
    except ValueError as e:
        if logger is not None:
            logger.log_error(f"Rejected rollout batch: {e}")
        raise

    if rng is None:
        rng = np.random.default_rng(config.seed)

    width, height = config.board.width, config.board.height
    num_games = config.rollout.num_games

    def play() -> GameRecord:
        return play_random_game(
            width,
            height,
            rng=rng,
            history_length=config.encoding.history_length,
            encode=config.rollout.encode,
            max_moves=config.rollout.max_moves,
        )

    start = time.perf_counter()
    records: List[GameRecord] = []
    if show_progress:
        with create_progress() as progress:
            task = progress.add_task(f"Rollouts {width}x{height}", total=num_games)
            for _ in range(num_games):
                records.append(play())
                progress.advance(task)
    else:
        records = [play() for _ in range(num_games)]
    elapsed = time.perf_counter() - start

    metrics = summarize(records, elapsed)
    if logger is not None:
        logger.log_rollouts(metrics)
        logger.log_success(f"Played {num_games} games on {width}x{height}")
    return records, metrics
