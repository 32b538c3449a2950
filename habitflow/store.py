"""Log store: habits, completion log and mood log, with write-through persistence.

Mutation functions operate on a LogState in place. LogStore wraps one
state for the lifetime of the process and saves after every mutation.
"""

from __future__ import annotations

import json
import logging
import random
import time
from datetime import date
from pathlib import Path
from typing import Any

from habitflow.dates import date_key
from habitflow.fileio import read_json, write_json_atomic
from habitflow.models import Habit, LogState, Settings
from habitflow.workspace import load_settings, state_path

logger = logging.getLogger(__name__)


DEFAULT_HABITS = [
    Habit(id="1", name="Morning Jog", color="pastel-red"),
    Habit(id="2", name="Read 30 mins", color="pastel-blue"),
    Habit(id="3", name="Drink Water", color="pastel-green"),
    Habit(id="4", name="Meditation", color="pastel-purple"),
    Habit(id="5", name="Coding", color="pastel-yellow"),
]


def seed_state() -> LogState:
    """State used on first run or when persisted data is unreadable."""
    return LogState(habits=[Habit(h.id, h.name, h.color) for h in DEFAULT_HABITS])


# ── Mutations ─────────────────────────────────────────────────


def toggle_completion(state: LogState, habit_id: str, day_key: str) -> bool:
    """Flip completion for (habit, day). Returns the new value."""
    entries = state.logs.setdefault(day_key, {})
    entries[habit_id] = not entries.get(habit_id, False)
    return entries[habit_id]


def set_mood(state: LogState, day_key: str, label: str) -> None:
    """Record the day's mood, overwriting any earlier one. Labels are not checked."""
    state.moods[day_key] = label


def find_habit(state: LogState, habit_id: str) -> Habit | None:
    for h in state.habits:
        if h.id == habit_id:
            return h
    return None


def new_habit_id(state: LogState, now_ms: int | None = None) -> str:
    """Creation-timestamp id, bumped until unused."""
    candidate = now_ms if now_ms is not None else int(time.time() * 1000)
    taken = {h.id for h in state.habits}
    while str(candidate) in taken:
        candidate += 1
    return str(candidate)


def pick_color(state: LogState, settings: Settings | None = None) -> str:
    settings = settings or Settings()
    if settings.color_assignment == "random":
        return random.choice(settings.palette)
    return settings.palette[len(state.habits) % len(settings.palette)]


def add_habit(
    state: LogState,
    name: str,
    settings: Settings | None = None,
    now_ms: int | None = None,
) -> Habit | None:
    """Append a new habit. Blank names are ignored and return None."""
    name = (name or "").strip()
    if not name:
        return None
    habit = Habit(
        id=new_habit_id(state, now_ms),
        name=name,
        color=pick_color(state, settings),
    )
    state.habits.append(habit)
    return habit


def delete_habit(state: LogState, habit_id: str) -> bool:
    """Remove a habit from the collection. Its log entries are kept, inert."""
    habit = find_habit(state, habit_id)
    if habit is None:
        return False
    state.habits.remove(habit)
    return True


# ── Persistence ───────────────────────────────────────────────


def load_state(root: Path | None = None) -> tuple[LogState, list[str]]:
    """Load state.json. Never raises on bad data.

    Missing file gives the seed state with no errors. Unreadable or
    non-object data gives the seed state plus an error. Anything else is
    repaired part by part (see LogState.parse).
    """
    path = state_path(root)
    if not path.exists():
        return seed_state(), []
    try:
        data = read_json(path)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        msg = f"could not read {path.name}: {e}"
        logger.warning("%s; falling back to default habits", msg)
        return seed_state(), [msg]
    if not isinstance(data, dict) or not data:
        msg = f"{path.name} does not hold a state object"
        logger.warning("%s; falling back to default habits", msg)
        return seed_state(), [msg]
    state, errors = LogState.parse(data)
    for err in errors:
        logger.warning("%s: %s", path.name, err)
    return state, errors


def save_state(state: LogState, root: Path | None = None) -> None:
    """Save state back to state.json atomically."""
    write_json_atomic(state_path(root), state.to_dict())


# ── Export ────────────────────────────────────────────────────


def export_filename(today: date) -> str:
    return f"habitflow-backup-{date_key(today)}.json"


def export_snapshot(state: LogState) -> dict[str, Any]:
    """Backup payload; same shape as state.json."""
    return state.to_dict()


# ── Store ─────────────────────────────────────────────────────


class LogStore:
    """Single source of truth for one workspace.

    Every mutation is written through to disk. A failed write is logged and
    the in-memory state stays authoritative for the rest of the session.
    """

    def __init__(
        self,
        state: LogState,
        root: Path | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.state = state
        self.root = root
        self.settings = settings or Settings()
        self.load_errors: list[str] = []

    @classmethod
    def open(cls, root: Path) -> LogStore:
        state, errors = load_state(root)
        store = cls(state, root, load_settings(root))
        store.load_errors = errors
        return store

    def snapshot(self) -> LogState:
        """Deep copy for engines; callers cannot reach the live state."""
        return self.state.copy()

    def save(self) -> bool:
        if self.root is None:
            return True
        try:
            save_state(self.state, self.root)
        except OSError as e:
            logger.error("failed to persist %s: %s", state_path(self.root), e)
            return False
        return True

    def toggle_completion(self, habit_id: str, day_key: str) -> bool:
        value = toggle_completion(self.state, habit_id, day_key)
        self.save()
        return value

    def set_mood(self, day_key: str, label: str) -> None:
        set_mood(self.state, day_key, label)
        self.save()

    def add_habit(self, name: str) -> Habit | None:
        habit = add_habit(self.state, name, self.settings)
        if habit is not None:
            self.save()
        return habit

    def delete_habit(self, habit_id: str) -> bool:
        deleted = delete_habit(self.state, habit_id)
        if deleted:
            self.save()
        return deleted
