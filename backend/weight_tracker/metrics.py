"""
Derived weight statistics.

Pure functions over a user's entries ordered newest first. Nothing here is
stored; the API recomputes the summary on every read.
"""
import math
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional, Protocol, Sequence

# Period filter values and their length in days (None = whole history)
PERIODS = {"7": 7, "30": 30, "90": 90, "all": None}


class WeightLike(Protocol):
    date: date
    weight: float


@dataclass
class WeightStats:
    period: str
    total_entries: int
    period_entries: int
    current_weight: Optional[float] = None
    previous_weight: Optional[float] = None
    change: Optional[float] = None
    trend: Optional[str] = None
    min_weight: Optional[float] = None
    max_weight: Optional[float] = None
    average_weight: Optional[float] = None
    goal_weight: Optional[float] = None
    weight_to_goal: Optional[float] = None
    goal_progress: Optional[int] = None
    goal_progress_display: Optional[int] = None


def round_half_up(value: float) -> int:
    """Round to the nearest integer, .5 going up (not banker's rounding)."""
    return math.floor(value + 0.5)


def filter_by_period(entries: Sequence[WeightLike], period: str, today: date) -> list:
    """Entries dated strictly after ``today - days``; everything for "all"."""
    if period not in PERIODS:
        raise ValueError(f"Unknown period {period!r}, expected one of {', '.join(PERIODS)}")
    days = PERIODS[period]
    if days is None:
        return list(entries)
    cutoff = today - timedelta(days=days)
    return [e for e in entries if e.date > cutoff]


def weight_trend(change: Optional[float]) -> Optional[str]:
    """Gain for a positive change, loss otherwise (a zero change reads as loss)."""
    if change is None:
        return None
    return "gain" if change > 0 else "loss"


def goal_progress(current: Optional[float], max_weight: float, goal: Optional[float]) -> Optional[int]:
    """
    Percentage of the way from the heaviest weight down to the goal:

        round(((max - current) / (max - goal)) * 100)

    Assumes a weight-loss goal below the period maximum. For a goal above the
    maximum the result is negative or meaningless, and it is undefined (None)
    when the maximum equals the goal. The value is not clamped.
    """
    if current is None or goal is None:
        return None
    span = max_weight - goal
    if span == 0:
        return None
    return round_half_up(((max_weight - current) / span) * 100)


def display_progress(progress: Optional[int]) -> Optional[int]:
    """Progress clamped to [0, 100] for showing on a progress bar."""
    if progress is None:
        return None
    return max(0, min(100, progress))


def summarize_weights(
    entries: Sequence[WeightLike],
    goal_weight: Optional[float] = None,
    period: str = "all",
    today: Optional[date] = None,
) -> WeightStats:
    """
    Summarize ``entries`` (newest first).

    Current and previous weights come from the full history; min, max and
    average only from the entries inside ``period``.
    """
    today = today or date.today()
    filtered = filter_by_period(entries, period, today)

    stats = WeightStats(
        period=period,
        total_entries=len(entries),
        period_entries=len(filtered),
        goal_weight=goal_weight,
    )

    if entries:
        stats.current_weight = float(entries[0].weight)
    if len(entries) > 1:
        stats.previous_weight = float(entries[1].weight)
        stats.change = stats.current_weight - stats.previous_weight
        stats.trend = weight_trend(stats.change)

    weights = [float(e.weight) for e in filtered]
    if weights:
        stats.min_weight = min(weights)
        stats.max_weight = max(weights)
        stats.average_weight = sum(weights) / len(weights)

    if stats.current_weight is not None and goal_weight is not None:
        stats.weight_to_goal = stats.current_weight - goal_weight
        # An empty period contributes a maximum of 0 to the progress formula
        period_max = stats.max_weight if stats.max_weight is not None else 0.0
        stats.goal_progress = goal_progress(stats.current_weight, period_max, goal_weight)
        stats.goal_progress_display = display_progress(stats.goal_progress)

    return stats
