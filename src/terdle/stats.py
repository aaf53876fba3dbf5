"""Summary statistics across a user's rounds."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from .models import MAX_GUESSES, GameRound


@dataclass(frozen=True)
class StatsSummary:
    """Totals shown under the round history table."""

    games_started: int
    games_completed: int
    games_won: int
    win_percentage: float
    average_guesses: float


def is_completed(game_round: GameRound) -> bool:
    """A round counts as completed once solved or out of guesses."""
    return game_round.success or len(game_round.guesses) >= MAX_GUESSES


def summarize(rounds: Iterable[GameRound]) -> StatsSummary:
    """Aggregate rounds; percentages and averages cover completed rounds only."""
    started = 0
    completed = 0
    won = 0
    total_guesses = 0
    for game_round in rounds:
        started += 1
        if is_completed(game_round):
            completed += 1
            total_guesses += len(game_round.guesses)
        if game_round.success:
            won += 1

    if completed == 0:
        return StatsSummary(started, 0, won, 0.0, 0.0)
    return StatsSummary(
        games_started=started,
        games_completed=completed,
        games_won=won,
        win_percentage=100.0 * won / completed,
        average_guesses=total_guesses / completed,
    )
