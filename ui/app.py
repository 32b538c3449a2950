from __future__ import annotations

import logging
import os
from datetime import date
from pathlib import Path
from typing import Any

from fastapi import Body, Depends, FastAPI, HTTPException
from fastapi.responses import JSONResponse

from habitflow import (
    LogStore,
    compute_streaks,
    daily_totals,
    export_filename,
    export_snapshot,
    group_by_week,
    habit_progress,
    heatmap_columns,
    leading_pad,
    month_summary,
    parse_date_key,
    parse_month,
    today_str,
    visible_days,
    workspace_root,
    year_heatmap,
)

logging.basicConfig(
    level=os.environ.get("HABITFLOW_LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="HabitFlow", version="0.1.0")


# ── Store & parameter helpers ─────────────────────────────────

_stores: dict[Path, LogStore] = {}


def get_store() -> LogStore:
    """One store per workspace root, kept for the life of the process."""
    root = workspace_root()
    store = _stores.get(root)
    if store is None:
        store = LogStore.open(root)
        if store.load_errors:
            logger.warning("state loaded with %d repair(s)", len(store.load_errors))
        _stores[root] = store
    return store


def reset_stores() -> None:
    _stores.clear()


def _day(value: str | None, field: str = "date") -> date:
    if not value:
        value = today_str()
    d = parse_date_key(value)
    if d is None:
        raise HTTPException(status_code=400, detail=f"Invalid {field}: {value!r}")
    return d


def _month(value: str | None) -> date:
    if not value:
        return _day(None).replace(day=1)
    try:
        return parse_month(value)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid month: {value!r}")


# ── Routes ────────────────────────────────────────────────────


@app.get("/healthz")
def healthz() -> dict[str, str]:
    return {"ok": "true"}


@app.get("/api/state")
def api_get_state(store: LogStore = Depends(get_store)) -> dict[str, Any]:
    """Full snapshot: habits, logs, moods."""
    return store.snapshot().to_dict()


@app.post("/api/habits")
def api_add_habit(payload: dict[str, Any] = Body(...), store: LogStore = Depends(get_store)) -> dict[str, Any]:
    """Add a habit. A blank name is ignored."""
    habit = store.add_habit(str(payload.get("name", "")))
    return {"ok": habit is not None, "habit": habit.to_dict() if habit else None}


@app.delete("/api/habits/{habit_id}")
def api_delete_habit(habit_id: str, store: LogStore = Depends(get_store)) -> dict[str, Any]:
    """Delete a habit; its log entries stay behind, unused."""
    if not store.delete_habit(habit_id):
        raise HTTPException(status_code=404, detail=f"Habit not found: {habit_id}")
    return {"ok": True, "habit_id": habit_id}


@app.post("/api/toggle")
def api_toggle(payload: dict[str, Any] = Body(...), store: LogStore = Depends(get_store)) -> dict[str, Any]:
    """Flip completion for {habitId, date}."""
    habit_id = str(payload.get("habitId", ""))
    day = _day(payload.get("date"))
    key = day.isoformat()
    done = store.toggle_completion(habit_id, key)
    return {"ok": True, "habitId": habit_id, "date": key, "done": done}


@app.post("/api/mood")
def api_set_mood(payload: dict[str, Any] = Body(...), store: LogStore = Depends(get_store)) -> dict[str, Any]:
    """Set the mood for {date, mood}."""
    day = _day(payload.get("date"))
    mood = str(payload.get("mood", ""))
    store.set_mood(day.isoformat(), mood)
    return {"ok": True, "date": day.isoformat(), "mood": mood}


@app.get("/api/streaks")
def api_streaks(today: str | None = None, store: LogStore = Depends(get_store)) -> dict[str, Any]:
    streaks = compute_streaks(store.snapshot(), _day(today, "today"))
    return {"streaks": {hid: s.to_dict() for hid, s in streaks.items()}}


@app.get("/api/summary")
def api_summary(month: str | None = None, store: LogStore = Depends(get_store)) -> dict[str, Any]:
    """Trend, completion, moods and growth score for a month (YYYY-MM)."""
    return month_summary(store.snapshot(), _month(month)).to_dict()


@app.get("/api/heatmap/{year}")
def api_heatmap(year: int, store: LogStore = Depends(get_store)) -> dict[str, Any]:
    if not 1 <= year <= 9999:
        raise HTTPException(status_code=400, detail=f"Invalid year: {year}")
    cells = year_heatmap(store.snapshot(), year)
    columns = heatmap_columns(cells, year)
    return {
        "year": year,
        "leadingPad": leading_pad(year),
        "days": [c.to_dict() for c in cells],
        "weeks": [[c.to_dict() if c else None for c in col] for col in columns],
    }


@app.get("/api/grid")
def api_grid(
    month: str | None = None,
    focused: bool = False,
    today: str | None = None,
    store: LogStore = Depends(get_store),
) -> dict[str, Any]:
    """Month grid: week groups, daily totals, per-habit progress and streaks."""
    state = store.snapshot()
    now = _day(today, "today")
    days = visible_days(_month(month), focused, now)
    streaks = compute_streaks(state, now)
    return {
        "weeks": [
            {"week": week, "days": [d.isoformat() for d in week_days]}
            for week, week_days in group_by_week(days)
        ],
        "totals": [t.to_dict() for t in daily_totals(state, days)],
        "habits": [
            {
                **h.to_dict(),
                "progress": habit_progress(state, h, days).to_dict(),
                "streak": streaks[h.id].to_dict(),
            }
            for h in state.habits
        ],
        "moods": {d.isoformat(): state.moods.get(d.isoformat()) for d in days},
    }


@app.get("/api/export")
def api_export(store: LogStore = Depends(get_store)) -> JSONResponse:
    """Downloadable backup named with today's date."""
    filename = export_filename(_day(None))
    return JSONResponse(
        content=export_snapshot(store.snapshot()),
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


def main() -> None:
    import uvicorn
    uvicorn.run(
        "ui.app:app",
        host=os.environ.get("HABITFLOW_HOST", "127.0.0.1"),
        port=int(os.environ.get("HABITFLOW_PORT", "8000")),
    )


if __name__ == "__main__":
    main()
