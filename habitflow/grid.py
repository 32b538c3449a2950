"""Month grid view-model: visible days, week grouping, per-day and per-habit totals."""

from __future__ import annotations

from collections import defaultdict
from datetime import date

from habitflow.aggregation import percent
from habitflow.dates import date_key, days_in_month, is_same_calendar_day, week_number
from habitflow.models import DayTotal, Habit, HabitProgress, LogState


def visible_days(reference: date, focused: bool, today: date) -> list[date]:
    """Days shown for the reference month.

    Focus mode narrows the view to today when today is in the month,
    otherwise to the month's first day.
    """
    days = days_in_month(reference)
    if not focused:
        return days
    for d in days:
        if is_same_calendar_day(d, today):
            return [d]
    return days[:1]


def group_by_week(days: list[date]) -> list[tuple[int, list[date]]]:
    """(week number, days) pairs in week order."""
    weeks: dict[int, list[date]] = defaultdict(list)
    for d in days:
        weeks[week_number(d)].append(d)
    return sorted(weeks.items())


def daily_totals(state: LogState, days: list[date]) -> list[DayTotal]:
    habit_count = len(state.habits)
    totals = []
    for d in days:
        key = date_key(d)
        done = state.completed_count(key)
        totals.append(DayTotal(
            date_key=key,
            completed=done,
            not_completed=habit_count - done,
            percentage=percent(done, habit_count),
        ))
    return totals


def habit_progress(state: LogState, habit: Habit, days: list[date]) -> HabitProgress:
    done = sum(1 for d in days if state.is_completed(habit.id, date_key(d)))
    return HabitProgress(
        habit_id=habit.id,
        done=done,
        required=len(days),
        percentage=percent(done, len(days)),
    )
