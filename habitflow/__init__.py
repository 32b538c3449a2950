"""HabitFlow core library: habit log store and derivation engines.

Public API re-exports for convenient imports:
    from habitflow import LogStore, compute_streaks, month_summary, ...
"""

# Workspace & paths
from habitflow.workspace import (
    workspace_root,
    load_settings,
    get_user_timezone,
    today_str,
    state_path,
    settings_path,
)

# File I/O
from habitflow.fileio import (
    read_json,
    read_yaml,
    write_json_atomic,
)

# Models
from habitflow.models import (
    MOODS,
    HEADLINE_MOODS,
    PALETTE,
    Settings,
    Habit,
    LogState,
    StreakStats,
    TrendPoint,
    CompletionStats,
    MonthSummary,
    HeatmapCell,
    DayTotal,
    HabitProgress,
)

# Calendar
from habitflow.dates import (
    date_key,
    parse_date_key,
    month_key,
    parse_month,
    days_in_month,
    days_in_year,
    weekday_index,
    week_number,
    is_same_calendar_day,
)

# Log store
from habitflow.store import (
    LogStore,
    seed_state,
    toggle_completion,
    set_mood,
    find_habit,
    add_habit,
    delete_habit,
    load_state,
    save_state,
    export_filename,
    export_snapshot,
)

# Engines
from habitflow.streaks import compute_streak, compute_streaks
from habitflow.aggregation import (
    percent,
    daily_trend,
    completion_stats,
    mood_histogram,
    growth_score,
    month_summary,
)
from habitflow.heatmap import (
    intensity_level,
    year_heatmap,
    leading_pad,
    heatmap_columns,
)
from habitflow.grid import (
    visible_days,
    group_by_week,
    daily_totals,
    habit_progress,
)
