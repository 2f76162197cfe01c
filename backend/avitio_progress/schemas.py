"""Pydantic schemas for progress records and computed results."""

from enum import Enum
from pydantic import BaseModel, Field
from typing import Optional, List


DATE_KEY_PATTERN = r"^\d{4}-\d{2}-\d{2}$"


# ============== Input Records ==============

class ActionCompletionRecord(BaseModel):
    """One action marked done/undone on one calendar day."""
    habit_id: str
    date: str = Field(pattern=DATE_KEY_PATTERN)
    completed: bool = False

    class Config:
        frozen = True


class CheckInRecord(BaseModel):
    """One subjective 1-5 rating of a progress signal on one day."""
    signal_id: str
    date: str = Field(pattern=DATE_KEY_PATTERN)
    value: int

    class Config:
        frozen = True


class ProgressSignal(BaseModel):
    id: str  # Document ID
    signal_id: str  # Catalog ID
    name: str = ""


class ActionItem(BaseModel):
    id: str
    name: str = ""


class CatalogSignal(BaseModel):
    id: str
    name: str = ""


# ============== Trend Schemas ==============

class TrendType(str, Enum):
    IMPROVING = "improving"
    STABLE = "stable"
    IRREGULAR = "irregular"
    NO_PATTERN = "no_pattern"


class SignalStat(BaseModel):
    """Per-signal trend statistics for a period."""
    id: str
    catalog_id: str
    name: str
    coverage: int = 0  # Distinct days with a check-in
    trend_value: float = 0
    variability: float = 0
    recent_avg: float = 0
    trend_type: TrendType = TrendType.NO_PATTERN
    formatted_status: str
    data_points: List[int] = []
    chart_data: List[int] = []  # Sparse, no gap filling

    class Config:
        frozen = True


class TrendAggregate(BaseModel):
    summary: str
    description: str
    trend_type: TrendType

    class Config:
        frozen = True


# ============== Overview Schemas ==============

class OverviewStats(BaseModel):
    """Day-level action completion statistics for a period."""
    active_days: int = 0
    total_actions: int = 0
    presence_ratio: float = 0
    plan_load: int = 0
    trend_summary: str = ""
    trend_description: str = ""

    class Config:
        frozen = True


# ============== Relation Schemas ==============

class SignalRelation(BaseModel):
    """Descriptive comparison of a signal on days with vs without actions."""
    has_relation: bool
    text: str
    delta: float = 0
    avg_with_action: float = 0
    avg_without_action: float = 0

    class Config:
        frozen = True


# ============== Report Schemas ==============

class SignalData(SignalStat):
    """Signal statistics combined with the signal's relation estimate."""
    insight: str
    relation_delta: float = 0
    avg_with_action: float = 0
    avg_without_action: float = 0
    has_relation: bool = False


class TopInsight(BaseModel):
    signal_name: str
    text: str
    delta: float

    class Config:
        frozen = True


class ProgressReport(BaseModel):
    """Everything the progress dashboard renders for one period."""
    period_days: int
    dates: List[str]
    overview: OverviewStats
    signals: List[SignalData] = []
    trend: TrendAggregate
    top_insight: Optional[TopInsight] = None

    class Config:
        frozen = True
