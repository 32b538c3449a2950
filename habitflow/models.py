"""Typed dataclasses for HabitFlow data model.

All models use from_dict/to_dict for JSON/YAML serialization.
camelCase in JSON is mapped to snake_case in Python.
Unknown keys are ignored; missing keys use defaults.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any

from habitflow.dates import parse_date_key


MOODS = ("Happy", "Energetic", "Neutral", "Relaxed", "Stressed")
HEADLINE_MOODS = ("Happy", "Neutral", "Stressed")
PALETTE = ("pastel-red", "pastel-blue", "pastel-green", "pastel-purple", "pastel-yellow")


# ── Settings ──────────────────────────────────────────────────


@dataclass
class Settings:
    timezone: str = "UTC"
    palette: list[str] = field(default_factory=lambda: list(PALETTE))
    color_assignment: str = "round_robin"  # round_robin, random

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Settings:
        if not d or not isinstance(d, dict):
            return cls()
        raw_palette = d.get("palette")
        if not isinstance(raw_palette, list):
            raw_palette = []
        palette = [str(c) for c in raw_palette if str(c).strip()]
        assignment = str(d.get("color_assignment", "round_robin")).strip().lower()
        if assignment not in ("round_robin", "random"):
            assignment = "round_robin"
        return cls(
            timezone=str(d.get("timezone") or "UTC"),
            palette=palette or list(PALETTE),
            color_assignment=assignment,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "timezone": self.timezone,
            "palette": list(self.palette),
            "color_assignment": self.color_assignment,
        }


# ── Log ───────────────────────────────────────────────────────


@dataclass
class Habit:
    id: str = ""
    name: str = ""
    color: str = PALETTE[0]

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Habit:
        return cls(
            id=str(d.get("id", "")),
            name=str(d.get("name", "")),
            color=str(d.get("color") or PALETTE[0]),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "color": self.color}


@dataclass
class LogState:
    """The persisted triple: habits, completion log, mood log."""

    habits: list[Habit] = field(default_factory=list)
    logs: dict[str, dict[str, bool]] = field(default_factory=dict)
    moods: dict[str, str] = field(default_factory=dict)

    @classmethod
    def parse(cls, d: Any) -> tuple[LogState, list[str]]:
        """Coerce loosely-shaped data into a LogState.

        Returns (state, errors); every error names a part that was replaced
        by its default or dropped.
        """
        if not isinstance(d, dict):
            return cls(), [f"state is {type(d).__name__}, expected object"]
        errors: list[str] = []

        raw_habits = d.get("habits", [])
        if not isinstance(raw_habits, list):
            errors.append("habits is not a list; using empty list")
            raw_habits = []
        habits: list[Habit] = []
        seen: set[str] = set()
        for i, h in enumerate(raw_habits):
            if not isinstance(h, dict) or h.get("id") in (None, ""):
                errors.append(f"habits[{i}] dropped: missing id")
                continue
            name = h.get("name")
            if not isinstance(name, str) or not name.strip():
                errors.append(f"habits[{i}] dropped: missing name")
                continue
            habit = Habit.from_dict(h)
            if habit.id in seen:
                errors.append(f"habits[{i}] dropped: duplicate id {habit.id}")
                continue
            seen.add(habit.id)
            habits.append(habit)

        raw_logs = d.get("logs", {})
        if not isinstance(raw_logs, dict):
            errors.append("logs is not an object; using empty log")
            raw_logs = {}
        logs: dict[str, dict[str, bool]] = {}
        for day, entries in raw_logs.items():
            if parse_date_key(day) is None:
                errors.append(f"logs[{day}] dropped: not a YYYY-MM-DD key")
                continue
            if not isinstance(entries, dict):
                errors.append(f"logs[{day}] dropped: not an object")
                continue
            logs[str(day)] = {str(k): bool(v) for k, v in entries.items()}

        raw_moods = d.get("moods", {})
        if not isinstance(raw_moods, dict):
            errors.append("moods is not an object; using empty mood log")
            raw_moods = {}
        moods: dict[str, str] = {}
        for day, label in raw_moods.items():
            if parse_date_key(day) is None:
                errors.append(f"moods[{day}] dropped: not a YYYY-MM-DD key")
                continue
            if not isinstance(label, str):
                errors.append(f"moods[{day}] dropped: not a string")
                continue
            moods[str(day)] = label

        return cls(habits=habits, logs=logs, moods=moods), errors

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> LogState:
        return cls.parse(d)[0]

    def to_dict(self) -> dict[str, Any]:
        return {
            "habits": [h.to_dict() for h in self.habits],
            "logs": {day: dict(entries) for day, entries in self.logs.items()},
            "moods": dict(self.moods),
        }

    def copy(self) -> LogState:
        return copy.deepcopy(self)

    def is_completed(self, habit_id: str, day_key: str) -> bool:
        return bool(self.logs.get(day_key, {}).get(habit_id, False))

    def completed_count(self, day_key: str) -> int:
        """Completions on a day across the current habit collection."""
        entries = self.logs.get(day_key, {})
        return sum(1 for h in self.habits if entries.get(h.id))


# ── Derived statistics ────────────────────────────────────────


@dataclass
class StreakStats:
    current: int = 0
    best: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {"current": self.current, "best": self.best}


@dataclass
class TrendPoint:
    date_key: str = ""
    count: int = 0
    percentage: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "day": int(self.date_key[-2:]) if self.date_key else 0,
            "dateKey": self.date_key,
            "count": self.count,
            "percentage": self.percentage,
        }


@dataclass
class CompletionStats:
    total_completed: int = 0
    total_possible: int = 0
    percentage: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalCompleted": self.total_completed,
            "totalPossible": self.total_possible,
            "percentage": self.percentage,
        }


@dataclass
class MonthSummary:
    month: str = ""
    trend: list[TrendPoint] = field(default_factory=list)
    completion: CompletionStats = field(default_factory=CompletionStats)
    moods: dict[str, int] = field(default_factory=dict)
    growth: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "month": self.month,
            "trend": [p.to_dict() for p in self.trend],
            "completion": self.completion.to_dict(),
            "moods": dict(self.moods),
            "growth": self.growth,
        }


@dataclass
class HeatmapCell:
    date_key: str = ""
    level: int = 0
    count: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {"dateKey": self.date_key, "level": self.level, "count": self.count}


@dataclass
class DayTotal:
    date_key: str = ""
    completed: int = 0
    not_completed: int = 0
    percentage: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "dateKey": self.date_key,
            "completed": self.completed,
            "notCompleted": self.not_completed,
            "percentage": self.percentage,
        }


@dataclass
class HabitProgress:
    habit_id: str = ""
    done: int = 0
    required: int = 0
    percentage: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "habitId": self.habit_id,
            "done": self.done,
            "required": self.required,
            "percentage": self.percentage,
        }
