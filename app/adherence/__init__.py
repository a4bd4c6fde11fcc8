"""Daily adherence derivation: day boundaries, progress, grouping, dashboard."""

from app.adherence.day import day_bounds, local_date_of, local_today, resolve_timezone
from app.adherence.progress import compute_progress, is_taken_today, latest_log_by_medication, taken_medication_ids
from app.adherence.grouping import UNSCHEDULED, group_by_scheduled_time, time_key
from app.adherence.dashboard import DashboardCache, DashboardSnapshot, build_dashboard, dashboard_cache

__all__ = [
    "day_bounds",
    "local_date_of",
    "local_today",
    "resolve_timezone",
    "compute_progress",
    "is_taken_today",
    "latest_log_by_medication",
    "taken_medication_ids",
    "UNSCHEDULED",
    "group_by_scheduled_time",
    "time_key",
    "DashboardCache",
    "DashboardSnapshot",
    "build_dashboard",
    "dashboard_cache",
]
