"""Progress analytics - period calendar, overview, signal trends and relations."""

from datetime import date, timedelta
from typing import List, Optional, Iterable, Dict

from avitio_progress.schemas import (
    ActionCompletionRecord,
    CheckInRecord,
    ProgressSignal,
    ActionItem,
    TrendType,
    SignalStat,
    TrendAggregate,
    OverviewStats,
    SignalRelation,
)


# Classification thresholds
MIN_COVERAGE_DAYS = 3
TREND_THRESHOLD = 0.3
VARIABILITY_THRESHOLD = 0.6
RECENT_WINDOW = 3

# Relation estimator
MIN_RELATION_CHECKINS = 4
RELATION_THRESHOLD = 0.3

STATUS_TEXT = {
    TrendType.IMPROVING: "Improving slowly.",
    TrendType.STABLE: "Stable evolution.",
    TrendType.IRREGULAR: "Irregular.",
    TrendType.NO_PATTERN: "Still no clear pattern.",
}

TREND_DESCRIPTIONS = {
    TrendType.IMPROVING: "Your signals show a steady positive change.",
    TrendType.STABLE: "Your process is holding firm and steady.",
    TrendType.IRREGULAR: "There are natural variations, it is part of the process.",
    TrendType.NO_PATTERN: "We are still gathering information.",
}

SUMMARY_PREFIX = "Overall trend: "
NO_PATTERN_DESCRIPTION = "We are still building your progress. Come back in a few days."

RELATION_NOT_ENOUGH_DATA = "Not enough data yet to see a relation."
RELATION_NEEDS_VARIETY = "We need more variety of days (with and without actions) to compare."
RELATION_POSITIVE = "When you do this action, the signal tends to improve."
RELATION_NEUTRAL = "No clear impact of this action observed yet."


def _average(values: List[float]) -> float:
    """Mean of values, 0 when empty."""
    if not values:
        return 0.0
    return sum(values) / len(values)


# ============== Period Calendar ==============

def dates_in_period(days: int, today: Optional[date] = None) -> List[str]:
    """
    Canonical date axis for a period: `days` ascending YYYY-MM-DD keys
    ending at today (inclusive).
    """
    today = today or date.today()
    return [
        (today - timedelta(days=offset)).isoformat()
        for offset in range(days - 1, -1, -1)
    ]


def _half_period_dates(axis: List[str]):
    mid = len(axis) // 2
    return set(axis[:mid]), set(axis[mid:])


# ============== Overview ==============

def compute_overview(
    logs: Iterable[ActionCompletionRecord],
    actions: List[ActionItem],
    period_length: int,
    axis: List[str],
) -> OverviewStats:
    """
    Action completion presence for a period.

    total_actions counts every completed row, so several actions on the same
    day each count once: it measures volume, active_days measures presence.
    """
    period = set(axis)
    valid_logs = [log for log in logs if log.completed and log.date in period]

    active_days = len({log.date for log in valid_logs})
    presence_ratio = active_days / period_length if period_length > 0 else 0.0

    return OverviewStats(
        active_days=active_days,
        total_actions=len(valid_logs),
        presence_ratio=presence_ratio,
        plan_load=len(actions),
    )


# ============== Signal Trends ==============

def classify_trend(coverage: int, trend_value: float, variability: float) -> TrendType:
    """
    Map signal statistics to a trend label. First match wins:

    - fewer than 3 covered days: no pattern
    - trend > 0.3 with variability <= 0.6: improving
    - |trend| <= 0.3: stable
    - variability > 0.6: irregular
    - anything else (a smooth negative trend) folds into stable; there is
      no "worsening" label
    """
    if coverage < MIN_COVERAGE_DAYS:
        return TrendType.NO_PATTERN
    if trend_value > TREND_THRESHOLD and variability <= VARIABILITY_THRESHOLD:
        return TrendType.IMPROVING
    if abs(trend_value) <= TREND_THRESHOLD:
        return TrendType.STABLE
    if variability > VARIABILITY_THRESHOLD:
        return TrendType.IRREGULAR
    return TrendType.STABLE


def compute_signal_stat(
    signal: ProgressSignal,
    check_ins: Iterable[CheckInRecord],
    axis: List[str],
) -> SignalStat:
    """Trend statistics for one signal over the date axis."""
    period = set(axis)
    signal_check_ins = sorted(
        (c for c in check_ins if c.signal_id == signal.signal_id and c.date in period),
        key=lambda c: c.date,
    )

    values = [c.value for c in signal_check_ins]
    coverage = len({c.date for c in signal_check_ins})

    # Half-period delta
    first_half, second_half = _half_period_dates(axis)
    first_values = [c.value for c in signal_check_ins if c.date in first_half]
    second_values = [c.value for c in signal_check_ins if c.date in second_half]

    if first_values and second_values:
        trend_value = _average(second_values) - _average(first_values)
    else:
        trend_value = 0.0

    # Consecutive check-ins by sort order, not calendar adjacency
    diffs = [abs(curr - prev) for prev, curr in zip(values, values[1:])]
    variability = _average(diffs)

    recent_avg = _average(values[-RECENT_WINDOW:])

    trend_type = classify_trend(coverage, trend_value, variability)

    return SignalStat(
        id=signal.id,
        catalog_id=signal.signal_id,
        name=signal.name,
        coverage=coverage,
        trend_value=trend_value,
        variability=variability,
        recent_avg=recent_avg,
        trend_type=trend_type,
        formatted_status=STATUS_TEXT[trend_type],
        data_points=list(values),
        chart_data=list(values),
    )


def aggregate_trend(signal_stats: Iterable[SignalStat]) -> TrendAggregate:
    """
    Dominant trend label across signals with enough coverage.

    A tie between the two most frequent labels resolves to stable.
    """
    valid_signals = [s for s in signal_stats if s.coverage >= MIN_COVERAGE_DAYS]

    if not valid_signals:
        return TrendAggregate(
            summary=SUMMARY_PREFIX + STATUS_TEXT[TrendType.NO_PATTERN],
            description=NO_PATTERN_DESCRIPTION,
            trend_type=TrendType.NO_PATTERN,
        )

    counts: Dict[TrendType, int] = {trend_type: 0 for trend_type in TrendType}
    for stat in valid_signals:
        counts[stat.trend_type] += 1

    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    (first_type, first_count), (_, second_count) = ranked[0], ranked[1]

    best = TrendType.STABLE if first_count == second_count else first_type

    return TrendAggregate(
        summary=SUMMARY_PREFIX + STATUS_TEXT[best],
        description=TREND_DESCRIPTIONS[best],
        trend_type=best,
    )


# ============== Relations ==============

def compute_relation(
    signal_check_ins: Iterable[CheckInRecord],
    action_logs: Iterable[ActionCompletionRecord],
    axis: List[str],
) -> SignalRelation:
    """
    Compare a signal's average on days with any completed action against
    days without one.

    This is correlational only. Below 4 check-ins, or without both kinds of
    day to contrast, no relation is reported.
    """
    # Any completed action counts, not a specific one
    action_dates = {log.date for log in action_logs if log.completed}

    period = set(axis)
    valid_check_ins = [c for c in signal_check_ins if c.date in period]

    if len(valid_check_ins) < MIN_RELATION_CHECKINS:
        return SignalRelation(has_relation=False, text=RELATION_NOT_ENOUGH_DATA)

    with_action = [c.value for c in valid_check_ins if c.date in action_dates]
    without_action = [c.value for c in valid_check_ins if c.date not in action_dates]

    avg_with = _average(with_action)
    avg_without = _average(without_action)

    if not with_action or not without_action:
        return SignalRelation(
            has_relation=False,
            text=RELATION_NEEDS_VARIETY,
            avg_with_action=avg_with,
            avg_without_action=avg_without,
        )

    delta = avg_with - avg_without

    # Negative deltas get the neutral text as well
    text = RELATION_POSITIVE if delta >= RELATION_THRESHOLD else RELATION_NEUTRAL

    return SignalRelation(
        has_relation=True,
        text=text,
        delta=delta,
        avg_with_action=avg_with,
        avg_without_action=avg_without,
    )
