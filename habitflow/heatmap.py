"""Yearly heatmap: per-day intensity level 0-4 from the completion ratio."""

from __future__ import annotations

from datetime import date

from habitflow.dates import date_key, days_in_year, weekday_index
from habitflow.models import HeatmapCell, LogState


def intensity_level(count: int, habit_count: int) -> int:
    """0 at 0%, then (0,25] -> 1, (25,50] -> 2, (50,75] -> 3, (75,100] -> 4."""
    if habit_count <= 0 or count <= 0:
        return 0
    # integer comparisons keep the boundaries exact
    if count * 4 <= habit_count:
        return 1
    if count * 2 <= habit_count:
        return 2
    if count * 4 <= habit_count * 3:
        return 3
    return 4


def year_heatmap(state: LogState, year: int) -> list[HeatmapCell]:
    """One cell per day of the year, in order, with no gaps."""
    habit_count = len(state.habits)
    cells = []
    for day in days_in_year(year):
        key = date_key(day)
        count = state.completed_count(key)
        cells.append(HeatmapCell(date_key=key, level=intensity_level(count, habit_count), count=count))
    return cells


def leading_pad(year: int) -> int:
    """Empty slots before Jan 1 in a Sunday-first week column."""
    return weekday_index(date(year, 1, 1))


def heatmap_columns(cells: list[HeatmapCell], year: int) -> list[list[HeatmapCell | None]]:
    """Group cells into week columns of 7 (Sunday first).

    The first column is left-padded with None so Jan 1 sits on its weekday;
    the last column may be shorter than 7.
    """
    slots: list[HeatmapCell | None] = [None] * leading_pad(year)
    slots.extend(cells)
    return [slots[i:i + 7] for i in range(0, len(slots), 7)]
