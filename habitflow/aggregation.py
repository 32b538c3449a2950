"""Monthly aggregation engine: trend series, completion totals, moods, growth.

Everything is scoped to the month containing a reference date and is
recomputed from the full log on each call. Only completions of habits in
the current collection count; entries left behind by deleted habits are
inert.
"""

from __future__ import annotations

import math
from collections import Counter
from datetime import date

from habitflow.dates import date_key, days_in_month, month_key
from habitflow.models import (
    HEADLINE_MOODS,
    CompletionStats,
    LogState,
    MonthSummary,
    TrendPoint,
)


def percent(part: int, whole: int) -> int:
    """Whole-number percentage rounded half up; 0 when whole is 0."""
    if whole <= 0:
        return 0
    return int(math.floor(part * 100 / whole + 0.5))


def daily_trend(state: LogState, reference: date) -> list[TrendPoint]:
    habit_count = len(state.habits)
    points = []
    for day in days_in_month(reference):
        key = date_key(day)
        count = state.completed_count(key)
        points.append(TrendPoint(date_key=key, count=count, percentage=percent(count, habit_count)))
    return points


def completion_stats(state: LogState, reference: date) -> CompletionStats:
    days = days_in_month(reference)
    total_completed = sum(state.completed_count(date_key(d)) for d in days)
    total_possible = len(days) * len(state.habits)
    return CompletionStats(
        total_completed=total_completed,
        total_possible=total_possible,
        percentage=percent(total_completed, total_possible),
    )


def mood_histogram(moods: dict[str, str], reference: date) -> dict[str, int]:
    """Mood counts within the month.

    Headline moods are always present; any other label, known or not, is
    counted under its literal key.
    """
    counts: Counter[str] = Counter()
    for day in days_in_month(reference):
        label = moods.get(date_key(day))
        if label:
            counts[label] += 1
    histogram = {m: 0 for m in HEADLINE_MOODS}
    histogram.update(counts)
    return histogram


def growth_score(total_completed: int, happy_count: int) -> int:
    """One point per 5 completions plus one per 3 happy days."""
    return max(0, total_completed) // 5 + max(0, happy_count) // 3


def month_summary(state: LogState, reference: date) -> MonthSummary:
    completion = completion_stats(state, reference)
    moods = mood_histogram(state.moods, reference)
    return MonthSummary(
        month=month_key(reference),
        trend=daily_trend(state, reference),
        completion=completion,
        moods=moods,
        growth=growth_score(completion.total_completed, moods.get("Happy", 0)),
    )
