"""Streak engine: current and best consecutive-day completion runs per habit."""

from __future__ import annotations

from datetime import date, timedelta

from habitflow.dates import date_key, parse_date_key
from habitflow.models import Habit, LogState, StreakStats


def completed_days(logs: dict[str, dict[str, bool]], habit_id: str) -> list[date]:
    """Days the habit was completed, ascending. Malformed keys are skipped."""
    days = []
    for k, entries in logs.items():
        if not entries.get(habit_id):
            continue
        d = parse_date_key(k)
        if d is not None:
            days.append(d)
    return sorted(days)


def best_streak(days: list[date]) -> int:
    """Longest run of consecutive days in an ascending list."""
    best = 0
    run = 0
    prev: date | None = None
    for d in days:
        if prev is not None and (d - prev).days == 1:
            run += 1
        else:
            run = 1
        best = max(best, run)
        prev = d
    return best


def current_streak(logs: dict[str, dict[str, bool]], habit_id: str, today: date) -> int:
    """Run ending today, or ending yesterday while today is still open."""

    def done(d: date) -> bool:
        return bool(logs.get(date_key(d), {}).get(habit_id))

    cursor = today if done(today) else today - timedelta(days=1)
    count = 0
    # the log is finite, so the walk stops at the first day before the run
    while done(cursor):
        count += 1
        cursor -= timedelta(days=1)
    return count


def compute_streak(
    logs: dict[str, dict[str, bool]],
    habit: Habit,
    today: date,
) -> StreakStats:
    return StreakStats(
        current=current_streak(logs, habit.id, today),
        best=best_streak(completed_days(logs, habit.id)),
    )


def compute_streaks(state: LogState, today: date) -> dict[str, StreakStats]:
    """Streak stats for every habit, keyed by habit id."""
    return {h.id: compute_streak(state.logs, h, today) for h in state.habits}
