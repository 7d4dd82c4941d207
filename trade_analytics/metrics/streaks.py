"""
Win/loss streaks over trades in chronological order.

Trades are ordered by closed_at (falling back to trade_date). Python's
sort is stable, so trades sharing a timestamp keep their input order.
"""
from typing import Iterable

from trade_analytics.metrics.primitives import (
    Outcome,
    classify,
    qualifying_trades,
    sort_timestamp,
)
from trade_analytics.models import Trade


def chronological_outcomes(trades: Iterable[Trade]) -> list[Outcome]:
    ordered = sorted(qualifying_trades(trades), key=sort_timestamp)
    return [classify(t) for t in ordered]


def _longest_run(outcomes: list[Outcome], target: Outcome) -> int:
    longest = 0
    current = 0
    for outcome in outcomes:
        if outcome == target:
            current += 1
            longest = max(longest, current)
        else:
            current = 0
    return longest


def compute_longest_win_streak(trades: Iterable[Trade]) -> int:
    """Longest run of consecutive wins; a loss or breakeven ends the run."""
    return _longest_run(chronological_outcomes(trades), "win")


def compute_longest_loss_streak(trades: Iterable[Trade]) -> int:
    return _longest_run(chronological_outcomes(trades), "loss")


def compute_current_streak(trades: Iterable[Trade]) -> int:
    """
    Streak ending at the most recent trade.

    Returns:
        Positive count for trailing wins, negative for trailing losses,
        0 when the latest trade broke even or there are no trades
    """
    outcomes = chronological_outcomes(trades)
    if not outcomes or outcomes[-1] == "breakeven":
        return 0

    last = outcomes[-1]
    run = 0
    for outcome in reversed(outcomes):
        if outcome != last:
            break
        run += 1
    return run if last == "win" else -run
