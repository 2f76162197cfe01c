"""Completion streaks - consecutive days on which the whole plan was done."""

from datetime import date, timedelta
from typing import List, Optional

from avitio_progress.config import get_settings
from avitio_progress.schemas import ActionCompletionRecord, ActionItem


def all_actions_completed(
    action_logs: List[ActionCompletionRecord],
    actions: List[ActionItem],
    day: str,
) -> bool:
    """True when every configured action has a completed log on `day`."""
    if not actions:
        return False

    completed_ids = {
        log.habit_id for log in action_logs
        if log.completed and log.date == day
    }
    return all(action.id in completed_ids for action in actions)


def compute_streak(
    action_logs: List[ActionCompletionRecord],
    actions: List[ActionItem],
    today: Optional[date] = None,
    max_days: Optional[int] = None,
) -> int:
    """
    Count consecutive fully-completed days, walking back from today.

    Today counts only once it is complete; an incomplete today ends the
    streak at 0.
    """
    if not actions:
        return 0

    today = today or date.today()
    max_days = max_days if max_days is not None else get_settings().max_streak_days

    completed_by_day = {}
    for log in action_logs:
        if log.completed:
            completed_by_day.setdefault(log.date, set()).add(log.habit_id)

    action_ids = {a.id for a in actions}

    streak = 0
    check_date = today
    while streak < max_days:
        done = completed_by_day.get(check_date.isoformat(), set())
        if not action_ids <= done:
            break
        streak += 1
        check_date -= timedelta(days=1)

    return streak
