"""Tests for random rollouts, configuration and logging."""

import json

import numpy as np
import pytest

from connect4engine.game import TOTAL_INPUT_PLANES, GameOutcome
from connect4engine.selfplay import (
    GameRecord,
    generate_random_games,
    play_random_game,
    summarize,
)
from connect4engine.utils import (
    BoardConfig,
    Config,
    Logger,
    get_default_config,
    print_board,
    print_config,
    set_seed,
)


class TestPlayRandomGame:
    def test_plays_to_the_end(self):
        rng = np.random.default_rng(0)
        record = play_random_game(7, 6, rng=rng)

        assert record.outcome is not None
        assert 7 <= record.num_moves <= 42
        assert len(record.actions) == record.num_moves
        assert len(record.planes) == record.num_moves
        assert len(record.policies) == record.num_moves

    def test_samples(self):
        record = play_random_game(7, 6, rng=np.random.default_rng(1))
        first = record.planes[0]
        assert first.shape == (TOTAL_INPUT_PLANES, 6, 7)
        assert np.all(first[:-1] == 0)
        np.testing.assert_allclose(record.policies[0], np.full(7, 1 / 7, dtype=np.float32))
        for policy in record.policies:
            assert np.isclose(policy.sum(), 1.0)

    def test_reproducible(self):
        a = play_random_game(9, 7, rng=np.random.default_rng(42), encode=False)
        b = play_random_game(9, 7, rng=np.random.default_rng(42), encode=False)
        assert a.actions == b.actions
        assert a.outcome == b.outcome
        assert a.planes == []

    def test_max_moves(self):
        record = play_random_game(20, 20, rng=np.random.default_rng(3), max_moves=5)
        assert record.num_moves <= 5
        if record.num_moves == 5:
            assert record.outcome is None
            assert record.reward == 0.0

    def test_reward_matches_outcome(self):
        record = play_random_game(4, 4, rng=np.random.default_rng(9), encode=False)
        assert record.reward == record.outcome.encode_winner_absolute()


class TestSummarize:
    def test_counts(self):
        records = [
            GameRecord(7, 6, outcome=GameOutcome.RED_WIN, num_moves=7),
            GameRecord(7, 6, outcome=GameOutcome.YELLOW_WIN, num_moves=10),
            GameRecord(7, 6, outcome=GameOutcome.DRAW, num_moves=42),
            GameRecord(7, 6, outcome=None, num_moves=5),
        ]
        metrics = summarize(records, elapsed_seconds=2.0)
        assert metrics.board == "7x6"
        assert metrics.games_played == 4
        assert metrics.total_moves == 64
        assert metrics.avg_game_length == 16.0
        assert (metrics.red_wins, metrics.yellow_wins, metrics.draws) == (1, 1, 1)
        assert metrics.unfinished == 1
        assert metrics.moves_per_second == 32.0

    def test_empty(self):
        metrics = summarize([])
        assert metrics.games_played == 0
        assert metrics.avg_game_length == 0.0


class TestGenerateRandomGames:
    def test_batch_with_logger(self, tmp_path):
        config = Config()
        config.rollout.num_games = 5
        config.log_dir = str(tmp_path)
        logger = Logger(log_dir=str(tmp_path), verbose=False)

        records, metrics = generate_random_games(config, logger=logger)

        assert len(records) == 5
        assert metrics.games_played == 5
        assert metrics.red_wins + metrics.yellow_wins + metrics.draws == 5
        assert metrics.positions_encoded == metrics.total_moves

        lines = logger.log_file.read_text().splitlines()
        assert len(lines) == 1
        assert json.loads(lines[0])["games_played"] == 5

    def test_seeded_from_config(self):
        config = Config(seed=17)
        config.rollout.num_games = 3
        config.rollout.encode = False
        first, _ = generate_random_games(config)
        second, _ = generate_random_games(config)
        assert [r.actions for r in first] == [r.actions for r in second]

    def test_progress_bar(self):
        config = Config()
        config.board = BoardConfig(width=5, height=4)
        config.rollout.num_games = 2
        records, _ = generate_random_games(config, show_progress=True)
        assert all(r.width == 5 and r.height == 4 for r in records)

    def test_rejects_host_range(self):
        config = Config()
        config.board = BoardConfig(width=3, height=6)
        with pytest.raises(ValueError):
            generate_random_games(config)

    def test_reports_batch_outcome(self, tmp_path, capsys):
        logger = Logger(log_dir=str(tmp_path), verbose=True)
        config = Config()
        config.rollout.num_games = 2
        config.rollout.encode = False

        generate_random_games(config, logger=logger)
        assert "Played 2 games on 7x6" in capsys.readouterr().out

        config.board = BoardConfig(width=3, height=6)
        with pytest.raises(ValueError):
            generate_random_games(config, logger=logger)
        assert "Rejected rollout batch" in capsys.readouterr().out
        assert len(logger.metrics_history) == 1


class TestConfig:
    def test_defaults(self):
        config = get_default_config()
        assert (config.board.width, config.board.height) == (7, 6)
        assert config.encoding.history_length == 8

    def test_save_load(self, tmp_path):
        config = Config(seed=7)
        config.board = BoardConfig(width=10, height=8)
        config.encoding.history_length = 4
        config.rollout.max_moves = 30
        path = tmp_path / "config.yaml"

        config.save(str(path))
        loaded = Config.load(str(path))
        assert loaded == config

    def test_load_partial(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("board:\n  width: 9\nseed: 3\n")
        loaded = Config.load(str(path))
        assert loaded.board.width == 9
        assert loaded.board.height == 6
        assert loaded.seed == 3

    def test_load_empty_sections(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("board:\nencoding:\nrollout:\nseed: 5\n")
        loaded = Config.load(str(path))
        assert loaded.board == BoardConfig()
        assert loaded.encoding.history_length == 8
        assert loaded.rollout.num_games == 100
        assert loaded.seed == 5

    def test_load_rejects_bad_board(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("board:\n  width: 40\n")
        with pytest.raises(ValueError):
            Config.load(str(path))

    def test_ensure_dirs(self, tmp_path):
        config = Config(log_dir=str(tmp_path / "logs" / "nested"))
        config.ensure_dirs()
        assert (tmp_path / "logs" / "nested").is_dir()


class TestLogging:
    def test_messages_and_tables(self, tmp_path):
        logger = Logger(log_dir=str(tmp_path), verbose=True)
        logger.log_info("info")
        logger.log_warning("warning")
        print_config(Config())
        print_board("|R|.|", title="Test")

    def test_set_seed_returns_generator(self):
        a = set_seed(5).integers(0, 1000, size=4)
        b = set_seed(5).integers(0, 1000, size=4)
        assert np.array_equal(a, b)
