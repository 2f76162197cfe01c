"""Services package."""

from avitio_progress.services.progress_calculator import (
    dates_in_period,
    compute_overview,
    classify_trend,
    compute_signal_stat,
    aggregate_trend,
    compute_relation,
)
from avitio_progress.services.progress_service import build_progress_report
from avitio_progress.services.record_loader import (
    load_action_logs,
    load_check_ins,
    load_signals,
    load_actions,
    load_catalog,
)
from avitio_progress.services.streak_service import compute_streak, all_actions_completed

__all__ = [
    "dates_in_period",
    "compute_overview",
    "classify_trend",
    "compute_signal_stat",
    "aggregate_trend",
    "compute_relation",
    "build_progress_report",
    "load_action_logs",
    "load_check_ins",
    "load_signals",
    "load_actions",
    "load_catalog",
    "compute_streak",
    "all_actions_completed",
]
