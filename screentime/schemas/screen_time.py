"""Screen-time records exchanged between storage, evaluator and API.

``ScreenTimeSettings`` and ``UsageData`` carry no range checks. Range and
format checks live in the evaluator (``InvalidInput``) and in the request
schema ``ScreenTimeSettingsUpdate``.
"""

import enum
import uuid
from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

HHMM_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"

ContentFiltering = Literal["strict", "moderate", "relaxed"]
ContentType = Literal["video", "book", "other"]
ContentCategory = Literal[
    "Educational", "Science", "Math", "Stories", "Music",
    "Art", "History", "Geography", "Languages", "Games",
]


class ScreenTimeStatus(str, enum.Enum):
    WITHIN_LIMITS = "within-limits"
    APPROACHING_LIMIT = "approaching-limit"
    LIMIT_EXCEEDED = "limit-exceeded"
    BEDTIME = "bedtime"


class ScreenTimeSettings(BaseModel):
    """Fully populated per-child settings, as consumed by the evaluator."""

    daily_limit: int
    video_limit: int
    book_limit: int  # 0 = unlimited
    bedtime_start: str  # "HH:MM"
    bedtime_end: str    # "HH:MM"
    weekend_extension: int
    enabled: bool
    content_filtering: ContentFiltering = "moderate"
    allowed_categories: list[str] = []
    reward_system: bool = False
    reward_points: int = 0
    model_config = ConfigDict(from_attributes=True, frozen=True)


class ScreenTimeSettingsUpdate(BaseModel):
    """Partial settings update sent from the guardian dashboard."""

    daily_limit: int | None = Field(None, ge=0)
    video_limit: int | None = Field(None, ge=0)
    book_limit: int | None = Field(None, ge=0)
    bedtime_start: str | None = Field(None, pattern=HHMM_PATTERN)
    bedtime_end: str | None = Field(None, pattern=HHMM_PATTERN)
    weekend_extension: int | None = Field(None, ge=0)
    enabled: bool | None = None
    content_filtering: ContentFiltering | None = None
    allowed_categories: list[ContentCategory] | None = None
    reward_system: bool | None = None
    reward_points: int | None = Field(None, ge=0)


class UsageData(BaseModel):
    """Usage for one child on one calendar day."""

    date: date
    video_minutes: int = 0
    book_minutes: int = 0
    total_minutes: int = 0
    last_activity: datetime | None = None
    categories_accessed: list[str] = []
    model_config = ConfigDict(from_attributes=True, frozen=True)


class UsageEventCreate(BaseModel):
    content_type: ContentType
    minutes: int = Field(..., ge=1, le=24 * 60)
    category: str | None = Field(None, max_length=50)
    occurred_at: datetime | None = None  # defaults to now


class PolicyEvaluation(BaseModel):
    status: ScreenTimeStatus
    effective_daily_limit: int
    used_minutes: int
    remaining_minutes: int
    used_fraction: float  # 0.0 - 1.0
    model_config = ConfigDict(frozen=True)


class WeeklyUsageEntry(BaseModel):
    date: date
    day_label: str  # "Mon" .. "Sun"
    minutes_used: int


class AccessCheckRequest(BaseModel):
    content_type: ContentType
    category: str | None = None


class AccessDecision(BaseModel):
    allowed: bool
    reason: str  # ok | policy-disabled | bedtime | daily-limit-reached | ...
    status: ScreenTimeStatus


class ChildScreenTimeStatus(BaseModel):
    """Everything the dashboard card for one child needs."""

    child_id: uuid.UUID
    child_name: str
    evaluated_at: datetime
    settings: ScreenTimeSettings
    usage: UsageData
    evaluation: PolicyEvaluation
    remaining_label: str  # e.g. "1h 10m"
    settings_error: bool = False


class StatusCounts(BaseModel):
    within_limits: int = 0
    approaching_limit: int = 0
    limit_exceeded: int = 0
    bedtime: int = 0


class GuardianOverview(BaseModel):
    guardian_id: uuid.UUID
    evaluated_at: datetime
    total_children: int
    average_usage_minutes: float
    status_counts: StatusCounts
    children: list[ChildScreenTimeStatus]
