"""
Record loading and normalization.

This module handles:
- Mapping data-layer documents (camelCase or snake_case keys) to records
- Rejecting malformed date keys and out-of-range check-in values
- Logging a warning for every skipped record

Records are skipped, never corrected.
"""

import logging
from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Tuple

from pydantic import ValidationError

from avitio_progress.schemas import (
    ActionCompletionRecord,
    CheckInRecord,
    ProgressSignal,
    ActionItem,
    CatalogSignal,
)

logger = logging.getLogger(__name__)

MIN_CHECKIN_VALUE = 1
MAX_CHECKIN_VALUE = 5


def _first_present(entry: Dict[str, Any], *keys: str) -> Optional[Any]:
    """Value of the first key present in entry."""
    for key in keys:
        if entry.get(key) is not None:
            return entry[key]
    return None


def _require(entry: Dict[str, Any], field: str, *keys: str) -> Any:
    value = _first_present(entry, *keys)
    if value is None:
        raise ValueError(f"Missing required field '{field}' (accepted keys: {', '.join(keys)})")
    return value


def parse_date_key(value: Any) -> str:
    """Validate a YYYY-MM-DD calendar day key."""
    if not isinstance(value, str) or len(value) != 10:
        raise ValueError(f"Invalid date key {value!r}, expected YYYY-MM-DD")
    try:
        date.fromisoformat(value)
    except ValueError:
        raise ValueError(f"Invalid date key {value!r}, not a calendar day")
    return value


def _report_skipped(kind: str, skipped: List[Tuple[int, str]], loaded: int) -> None:
    for idx, error in skipped:
        logger.warning(f"Skipped {kind} record {idx}: {error}")
    if skipped:
        logger.info(f"Loaded {loaded} {kind} record(s), skipped {len(skipped)}")


def load_action_logs(raw: Iterable[Dict[str, Any]]) -> List[ActionCompletionRecord]:
    """
    Load action completion logs.

    The completions collection stores the action as `actionId` and the
    calendar day as `periodKey`; both are accepted alongside `habitId`/`date`.
    """
    records = []
    skipped = []
    for idx, entry in enumerate(raw):
        try:
            habit_id = _require(entry, "habit_id", "habit_id", "habitId", "actionId")
            day = parse_date_key(_require(entry, "date", "date", "periodKey"))
            completed = entry.get("completed")
            if completed is None:
                completed = False
            if not isinstance(completed, bool):
                raise ValueError(f"'completed' must be a boolean, got {type(completed).__name__}")

            records.append(ActionCompletionRecord(
                habit_id=str(habit_id),
                date=day,
                completed=completed,
            ))
        except (ValueError, TypeError, AttributeError, ValidationError) as e:
            skipped.append((idx, str(e)))

    _report_skipped("action log", skipped, len(records))
    return records


def load_check_ins(raw: Iterable[Dict[str, Any]]) -> List[CheckInRecord]:
    """Load check-ins, dropping values outside the 1-5 scale."""
    records = []
    skipped = []
    for idx, entry in enumerate(raw):
        try:
            signal_id = _require(entry, "signal_id", "signal_id", "signalId")
            day = parse_date_key(_require(entry, "date", "date"))
            value = _require(entry, "value", "value")

            # bool is an int subclass
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"Check-in value must be an integer, got {value!r}")
            if value < MIN_CHECKIN_VALUE or value > MAX_CHECKIN_VALUE:
                raise ValueError(
                    f"Check-in value must be between {MIN_CHECKIN_VALUE} and "
                    f"{MAX_CHECKIN_VALUE}, got {value}"
                )

            records.append(CheckInRecord(
                signal_id=str(signal_id),
                date=day,
                value=value,
            ))
        except (ValueError, TypeError, AttributeError, ValidationError) as e:
            skipped.append((idx, str(e)))

    _report_skipped("check-in", skipped, len(records))
    return records


def load_signals(raw: Iterable[Dict[str, Any]]) -> List[ProgressSignal]:
    records = []
    skipped = []
    for idx, entry in enumerate(raw):
        try:
            records.append(ProgressSignal(
                id=str(_require(entry, "id", "id")),
                signal_id=str(_require(entry, "signal_id", "signal_id", "signalId")),
                name=str(entry.get("name") or ""),
            ))
        except (ValueError, TypeError, AttributeError, ValidationError) as e:
            skipped.append((idx, str(e)))

    _report_skipped("signal", skipped, len(records))
    return records


def load_actions(raw: Iterable[Dict[str, Any]]) -> List[ActionItem]:
    records = []
    skipped = []
    for idx, entry in enumerate(raw):
        try:
            records.append(ActionItem(
                id=str(_require(entry, "id", "id")),
                name=str(entry.get("name") or ""),
            ))
        except (ValueError, TypeError, AttributeError, ValidationError) as e:
            skipped.append((idx, str(e)))

    _report_skipped("action", skipped, len(records))
    return records


def load_catalog(raw: Iterable[Dict[str, Any]]) -> List[CatalogSignal]:
    records = []
    skipped = []
    for idx, entry in enumerate(raw):
        try:
            records.append(CatalogSignal(
                id=str(_require(entry, "id", "id")),
                name=str(entry.get("name") or ""),
            ))
        except (ValueError, TypeError, AttributeError, ValidationError) as e:
            skipped.append((idx, str(e)))

    _report_skipped("catalog signal", skipped, len(records))
    return records
