"""Screen-time service.

Loads settings and usage from storage and runs them through the pure
policy evaluator for single children, weekly charts and the guardian
overview.
"""

import logging
import uuid
from datetime import date, datetime
from zoneinfo import ZoneInfo

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from screentime.config import settings as app_settings
from screentime.models.child import Child
from screentime.schemas.screen_time import (
    ChildScreenTimeStatus,
    GuardianOverview,
    PolicyEvaluation,
    ScreenTimeStatus,
    StatusCounts,
    WeeklyUsageEntry,
)
from screentime.services.policy_evaluator import (
    InvalidInput,
    evaluate,
    format_minutes,
    summarize_week,
)
from screentime.services.settings_service import get_child_settings
from screentime.services.usage_service import empty_usage, get_usage_for_day, get_week_usages

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Clock helpers
# ---------------------------------------------------------------------------

def local_now() -> datetime:
    """Current time in the configured family timezone."""
    return datetime.now(ZoneInfo(app_settings.TIMEZONE))


def as_local(moment: datetime) -> datetime:
    """Convert ``moment`` to the configured timezone; naive values are taken as local."""
    tz = ZoneInfo(app_settings.TIMEZONE)
    if moment.tzinfo is None:
        return moment.replace(tzinfo=tz)
    return moment.astimezone(tz)


# ---------------------------------------------------------------------------
# Single child
# ---------------------------------------------------------------------------

async def get_child_status(
    db: AsyncSession,
    child: Child,
    now: datetime,
) -> ChildScreenTimeStatus:
    """Evaluate one child at ``now``.

    Raises:
        InvalidInput: If the stored settings or usage cannot be evaluated.
    """
    child_settings = await get_child_settings(db, child.id)
    usage = await get_usage_for_day(db, child.id, now.date()) or empty_usage(now.date())

    evaluation = evaluate(child_settings, usage, now)

    return ChildScreenTimeStatus(
        child_id=child.id,
        child_name=child.name,
        evaluated_at=now,
        settings=child_settings,
        usage=usage,
        evaluation=evaluation,
        remaining_label=format_minutes(evaluation.remaining_minutes),
    )


async def get_weekly_usage(
    db: AsyncSession,
    child_id: uuid.UUID,
    end_date: date,
) -> list[WeeklyUsageEntry]:
    """Seven chart entries ending on ``end_date``."""
    return summarize_week(await get_week_usages(db, child_id, end_date), end_date)


async def _status_with_fallback(
    db: AsyncSession,
    child: Child,
    now: datetime,
) -> ChildScreenTimeStatus:
    """Like get_child_status, but reports unevaluable settings as unrestricted."""
    try:
        return await get_child_status(db, child, now)
    except InvalidInput as exc:
        logger.warning("Invalid screen-time settings for child %s: %s", child.id, exc)

    child_settings = await get_child_settings(db, child.id)
    usage = await get_usage_for_day(db, child.id, now.date()) or empty_usage(now.date())
    used = max(0, usage.total_minutes)
    return ChildScreenTimeStatus(
        child_id=child.id,
        child_name=child.name,
        evaluated_at=now,
        settings=child_settings.model_copy(update={"enabled": False}),
        usage=usage,
        evaluation=PolicyEvaluation(
            status=ScreenTimeStatus.WITHIN_LIMITS,
            effective_daily_limit=0,
            used_minutes=used,
            remaining_minutes=0,
            used_fraction=0.0,
        ),
        remaining_label=format_minutes(0),
        settings_error=True,
    )


# ---------------------------------------------------------------------------
# Guardian overview
# ---------------------------------------------------------------------------

async def get_guardian_overview(
    db: AsyncSession,
    guardian_id: uuid.UUID,
    now: datetime,
    status_filter: ScreenTimeStatus | None = None,
) -> GuardianOverview:
    """Evaluate every child of a guardian for the dashboard overview.

    Counts and the average cover all children; ``status_filter`` only
    narrows the returned list.
    """
    result = await db.execute(
        select(Child).where(Child.guardian_id == guardian_id).order_by(Child.name)
    )
    children = result.scalars().all()

    statuses = [await _status_with_fallback(db, child, now) for child in children]

    counts = StatusCounts()
    for entry in statuses:
        field = entry.evaluation.status.value.replace("-", "_")
        setattr(counts, field, getattr(counts, field) + 1)

    average = (
        sum(entry.usage.total_minutes for entry in statuses) / len(statuses)
        if statuses else 0.0
    )

    if status_filter is not None:
        statuses = [s for s in statuses if s.evaluation.status == status_filter]

    return GuardianOverview(
        guardian_id=guardian_id,
        evaluated_at=now,
        total_children=len(children),
        average_usage_minutes=average,
        status_counts=counts,
        children=statuses,
    )
