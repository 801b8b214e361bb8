# diary_metrics/core/models/data_models.py

import datetime as dt
from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from diary_metrics.utils.constants import trend_color_classes


# Enum types for the fixed display vocabularies
class SeverityBand(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"
    NEUTRAL = "neutral"


class TrendArrow(str, Enum):
    UP = "↑"
    DOWN = "↓"
    FLAT = "→"


class TitrationAction(str, Enum):
    INCREASE = "increase"
    MAINTAIN = "maintain"
    DECREASE = "decrease"
    REVIEW = "review"


class Confidence(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


# Diary Data Models
class DiaryEntry(BaseModel):
    """One calendar day's sleep diary record. None means not recorded."""

    model_config = ConfigDict(frozen=True)

    id: str
    date: dt.date
    # strict: a numeric string is a boundary concern, not something to coerce here
    tst: Optional[float] = Field(None, ge=0, strict=True, allow_inf_nan=False)
    tib: Optional[float] = Field(None, ge=0, strict=True, allow_inf_nan=False)
    se: Optional[float] = Field(None, ge=0, le=100, strict=True, allow_inf_nan=False)
    sol: Optional[float] = Field(None, ge=0, strict=True, allow_inf_nan=False)
    waso: Optional[float] = Field(None, ge=0, strict=True, allow_inf_nan=False)
    ema: Optional[float] = Field(None, ge=0, strict=True, allow_inf_nan=False)
    twt: Optional[float] = Field(None, ge=0, strict=True, allow_inf_nan=False)
    quality_rating: Optional[int] = Field(None, ge=1, le=5, strict=True)
    ttb: Optional[dt.datetime] = None
    tts: Optional[dt.datetime] = None
    tfa: Optional[dt.datetime] = None
    tob: Optional[dt.datetime] = None

    @field_validator('id', mode='before')
    @classmethod
    def coerce_id(cls, v):
        # Identifiers are opaque; storage layers often hand back integers or UUIDs
        if v is None:
            raise ValueError('Diary entry id is required')
        return str(v)


class DerivedMeasures(BaseModel):
    """Measures computed from a night's clock times and wake durations."""

    model_config = ConfigDict(frozen=True)

    tib: int = Field(..., ge=0)
    twt: float = Field(..., ge=0)
    tst: int = Field(..., ge=0)
    se: int = Field(..., ge=0, le=100)


# Summary Models
class WeeklySummary(BaseModel):
    """Averages of each measure over a window plus coverage counts."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    avg_tst: Optional[float] = None
    avg_tib: Optional[float] = None
    avg_se: Optional[float] = None
    avg_sol: Optional[float] = None
    avg_waso: Optional[float] = None
    avg_ema: Optional[float] = None
    avg_twt: Optional[float] = None
    avg_quality: Optional[float] = None
    days_logged: int = Field(0, ge=0)
    total_days: int = Field(7, ge=0)

    @property
    def completion_rate(self) -> int:
        from diary_metrics.core.reporting.formatters import completion_rate
        return completion_rate(self.days_logged, self.total_days)


class MetricsComparison(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    current: WeeklySummary
    previous: Optional[WeeklySummary] = None
    baseline: Optional[WeeklySummary] = None
    se_change: Optional[float] = None  # % change from previous week
    se_baseline_change: Optional[float] = None  # % change from baseline


class TrendDescriptor(BaseModel):
    model_config = ConfigDict(frozen=True)

    arrow: TrendArrow
    favorable: bool
    magnitude: str

    @property
    def is_flat(self) -> bool:
        return self.arrow == TrendArrow.FLAT

    @property
    def color_class(self) -> str:
        if self.favorable:
            return trend_color_classes['favorable']
        if self.is_flat:
            return trend_color_classes['flat']
        return trend_color_classes['unfavorable']


# Recommendation Models
class TitrationRecommendation(BaseModel):
    model_config = ConfigDict(frozen=True)

    action: TitrationAction
    minutes: int = Field(..., ge=0)
    reason: str
    confidence: Confidence
    weekly_avg_se: Optional[float] = None
    days_logged: int = Field(0, ge=0)


class Prescription(BaseModel):
    """Sleep window prescribed by the therapist (HH:MM strings)."""

    model_config = ConfigDict(frozen=True)

    bedtime: str
    wake_time: str
    window_minutes: int = Field(..., gt=0)

    @field_validator('bedtime', 'wake_time')
    @classmethod
    def validate_time_format(cls, v):
        try:
            dt.datetime.strptime(v, '%H:%M')
        except ValueError:
            raise ValueError('Invalid time format. Use HH:MM')
        return v


class ProgressReport(BaseModel):
    """Everything the display layer needs for a patient's weekly progress."""

    model_config = ConfigDict(frozen=True)

    as_of: dt.date
    current_range: Tuple[dt.date, dt.date]
    previous_range: Tuple[dt.date, dt.date]
    baseline_range: Optional[Tuple[dt.date, dt.date]] = None
    comparison: MetricsComparison
    se_diff_from_previous: Optional[float] = None
    se_diff_from_baseline: Optional[float] = None
    completion_rate: int = Field(0, ge=0)
    recommendation: Optional[TitrationRecommendation] = None
