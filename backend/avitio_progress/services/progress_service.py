"""Progress report composition for the progress dashboard."""

import logging
from datetime import date
from typing import List, Optional

from avitio_progress.config import get_settings
from avitio_progress.schemas import (
    ActionCompletionRecord,
    CheckInRecord,
    ProgressSignal,
    ActionItem,
    CatalogSignal,
    SignalData,
    TopInsight,
    ProgressReport,
)
from avitio_progress.services.progress_calculator import (
    RELATION_THRESHOLD,
    dates_in_period,
    compute_overview,
    compute_signal_stat,
    aggregate_trend,
    compute_relation,
)

logger = logging.getLogger(__name__)


def resolve_signal_name(
    signal: ProgressSignal,
    catalog: List[CatalogSignal],
    fallback: str,
) -> str:
    """Display name: catalog definition first, then the signal's own name."""
    for entry in catalog:
        if entry.id == signal.signal_id and entry.name:
            return entry.name
    return signal.name or fallback


def select_top_insight(signals: List[SignalData]) -> Optional[TopInsight]:
    """Strongest reported relation, by absolute delta."""
    significant = [
        s for s in signals
        if s.has_relation and abs(s.relation_delta) >= RELATION_THRESHOLD
    ]
    if not significant:
        return None

    # sorted() is stable, so the first signal wins ties
    best = sorted(significant, key=lambda s: abs(s.relation_delta), reverse=True)[0]
    return TopInsight(signal_name=best.name, text=best.insight, delta=best.relation_delta)


def build_progress_report(
    signals: List[ProgressSignal],
    actions: List[ActionItem],
    action_logs: List[ActionCompletionRecord],
    check_ins: List[CheckInRecord],
    period_days: Optional[int] = None,
    catalog: Optional[List[CatalogSignal]] = None,
    today: Optional[date] = None,
) -> ProgressReport:
    """
    Build the full progress report for one objective and period.

    Action logs are scoped to the configured actions; logs for actions that
    are no longer part of the plan are ignored.
    """
    settings = get_settings()
    if period_days is None:
        period_days = settings.default_period_days
    catalog = catalog or []

    axis = dates_in_period(period_days, today)
    period = set(axis)

    period_check_ins = [c for c in check_ins if c.date in period]
    action_ids = {a.id for a in actions}
    period_logs = [
        log for log in action_logs
        if log.habit_id in action_ids and log.date in period
    ]

    overview = compute_overview(period_logs, actions, period_days, axis)

    signal_data = []
    for signal in signals:
        name = resolve_signal_name(signal, catalog, settings.unknown_signal_name)
        named_signal = signal.model_copy(update={"name": name})

        stat = compute_signal_stat(named_signal, period_check_ins, axis)
        relation = compute_relation(
            [c for c in period_check_ins if c.signal_id == signal.signal_id],
            period_logs,
            axis,
        )

        signal_data.append(SignalData(
            **stat.model_dump(),
            insight=relation.text,
            relation_delta=relation.delta,
            avg_with_action=relation.avg_with_action,
            avg_without_action=relation.avg_without_action,
            has_relation=relation.has_relation,
        ))

    trend = aggregate_trend(signal_data)
    overview = overview.model_copy(update={
        "trend_summary": trend.summary,
        "trend_description": trend.description,
    })

    top_insight = select_top_insight(signal_data)

    logger.debug(
        f"Progress report for {period_days} days ending {axis[-1] if axis else '-'}: "
        f"{len(signal_data)} signals, trend {trend.trend_type.value}"
    )

    return ProgressReport(
        period_days=period_days,
        dates=axis,
        overview=overview,
        signals=signal_data,
        trend=trend,
        top_insight=top_insight,
    )
