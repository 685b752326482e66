"""
Logging utilities with rich formatting.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, asdict
from datetime import datetime
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.table import Table
from rich.progress import (
    Progress,
    SpinnerColumn,
    TextColumn,
    BarColumn,
    TimeElapsedColumn,
    TimeRemainingColumn,
    MofNCompleteColumn,
)
from rich.panel import Panel


console = Console()


@dataclass
class RolloutMetrics:
    """Summary of one batch of rollouts."""

    board: str
    games_played: int
    total_moves: int
    avg_game_length: float
    red_wins: int
    yellow_wins: int
    draws: int
    unfinished: int
    positions_encoded: int
    elapsed_seconds: float
    timestamp: str = ""

    def __post_init__(self):
        if not self.timestamp:
            self.timestamp = datetime.now().isoformat()

    @property
    def moves_per_second(self) -> float:
        if self.elapsed_seconds <= 0:
            return 0.0
        return self.total_moves / self.elapsed_seconds


class Logger:
    """
    Rollout logger with rich output and JSON logging.

    Args:
        log_dir: Directory for log files
        verbose: Whether to print to console
    """

    def __init__(self, log_dir: str = "runs", verbose: bool = True):
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.verbose = verbose

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        self.log_file = self.log_dir / f"rollout_{timestamp}.jsonl"

        self.metrics_history: list[RolloutMetrics] = []

    def log_rollouts(self, metrics: RolloutMetrics) -> None:
        """Log metrics for one batch of games."""
        self.metrics_history.append(metrics)

        with open(self.log_file, "a") as f:
            f.write(json.dumps(asdict(metrics)) + "\n")

        if self.verbose:
            self._print_rollouts(metrics)

    def _print_rollouts(self, m: RolloutMetrics) -> None:
        table = Table(title=f"Rollouts {m.board}", show_header=False, box=None)
        table.add_column("Metric", style="cyan")
        table.add_column("Value", style="white")

        table.add_row("Games", str(m.games_played))
        table.add_row("Moves", str(m.total_moves))
        table.add_row("Avg Game Len", f"{m.avg_game_length:.1f}")
        table.add_row("Red / Yellow / Draw", f"{m.red_wins} / {m.yellow_wins} / {m.draws}")
        if m.unfinished:
            table.add_row("Unfinished", str(m.unfinished))
        table.add_row("Positions", str(m.positions_encoded))
        table.add_row("Moves/s", f"{m.moves_per_second:.0f}")

        console.print(table)
        console.print()

    def log_message(self, message: str, style: str = "white") -> None:
        if self.verbose:
            console.print(f"[{style}]{message}[/]")

    def log_info(self, message: str) -> None:
        self.log_message(message, "blue")

    def log_success(self, message: str) -> None:
        self.log_message(message, "green")

    def log_warning(self, message: str) -> None:
        self.log_message(message, "yellow")

    def log_error(self, message: str) -> None:
        self.log_message(message, "red")


def create_progress() -> Progress:
    """Create a rich progress bar with elapsed/remaining time."""
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        TimeElapsedColumn(),
        TextColumn("eta"),
        TimeRemainingColumn(),
        console=console,
        transient=False,
    )


def print_config(config: Any) -> None:
    """Print configuration as a flat parameter table."""
    table = Table(title="Configuration", show_header=True)
    table.add_column("Parameter", style="cyan")
    table.add_column("Value", style="white")

    def add_dict(d: dict, prefix: str = "") -> None:
        for k, v in d.items():
            key = f"{prefix}{k}" if prefix else k
            if isinstance(v, dict):
                add_dict(v, f"{key}.")
            else:
                table.add_row(key, str(v))

    add_dict(asdict(config))
    console.print(table)


def print_board(board_str: str, title: str = "Board") -> None:
    """Print a game board in a panel."""
    console.print(Panel(board_str, title=title, border_style="blue"))
