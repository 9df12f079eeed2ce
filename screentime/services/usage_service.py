"""Usage Service.

Reads and additively updates per-child daily usage records. Only the
current day accepts new events; earlier days are history.
"""

import logging
import uuid
from datetime import date, datetime, timedelta

from fastapi import HTTPException, status
from sqlalchemy import case, delete, literal, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from screentime.config import settings as app_settings
from screentime.models.usage import DailyUsage
from screentime.schemas.screen_time import UsageData, UsageEventCreate

logger = logging.getLogger(__name__)


def empty_usage(day: date) -> UsageData:
    """Zero-usage record for a day without any recorded activity."""
    return UsageData(date=day)


async def _get_row(db: AsyncSession, child_id: uuid.UUID, day: date) -> DailyUsage | None:
    result = await db.execute(
        select(DailyUsage).where(
            DailyUsage.child_id == child_id,
            DailyUsage.date == day,
        )
    )
    return result.scalar_one_or_none()


async def _ensure_row(db: AsyncSession, child_id: uuid.UUID, day: date) -> None:
    """Create the zero record for ``day`` unless it already exists.

    Uses ``INSERT ... ON CONFLICT DO NOTHING`` so two first events of a day
    cannot both insert.
    """
    if db.bind.dialect.name == "postgresql":
        from sqlalchemy.dialects.postgresql import insert
    else:
        from sqlalchemy.dialects.sqlite import insert

    stmt = insert(DailyUsage).values(
        id=uuid.uuid4(),
        child_id=child_id,
        date=day,
        video_minutes=0,
        book_minutes=0,
        total_minutes=0,
        categories_accessed=[],
    )
    await db.execute(stmt.on_conflict_do_nothing(index_elements=["child_id", "date"]))


async def get_usage_for_day(
    db: AsyncSession,
    child_id: uuid.UUID,
    day: date,
) -> UsageData | None:
    """Return the usage record for ``day``, or None when nothing was recorded."""
    row = await _get_row(db, child_id, day)
    return UsageData.model_validate(row) if row is not None else None


async def get_week_usages(
    db: AsyncSession,
    child_id: uuid.UUID,
    end_date: date,
) -> list[UsageData | None]:
    """Seven usage records (or None), oldest first, ending on ``end_date``."""
    start_date = end_date - timedelta(days=6)
    result = await db.execute(
        select(DailyUsage).where(
            DailyUsage.child_id == child_id,
            DailyUsage.date >= start_date,
            DailyUsage.date <= end_date,
        )
    )
    by_date = {row.date: UsageData.model_validate(row) for row in result.scalars().all()}
    return [by_date.get(start_date + timedelta(days=i)) for i in range(7)]


async def record_usage(
    db: AsyncSession,
    child_id: uuid.UUID,
    event: UsageEventCreate,
    today: date,
    occurred_at: datetime,
) -> UsageData:
    """Add a content-consumption event to the child's usage for ``today``.

    ``occurred_at`` must fall on ``today`` (in the configured timezone);
    earlier days are immutable and later days are rejected.

    Raises:
        HTTPException 409: If the event belongs to a past day.
        HTTPException 422: If the event lies in the future.
    """
    event_day = occurred_at.date()
    if event_day < today:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Usage for {event_day.isoformat()} is closed history",
        )
    if event_day > today:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Usage events cannot be recorded for a future day",
        )

    await _ensure_row(db, child_id, today)

    # Increment in SQL so concurrent events for the same day all count
    values = {
        "total_minutes": DailyUsage.total_minutes + event.minutes,
        "last_activity": case(
            (
                or_(
                    DailyUsage.last_activity.is_(None),
                    DailyUsage.last_activity < occurred_at,
                ),
                literal(occurred_at, DailyUsage.last_activity.type),
            ),
            else_=DailyUsage.last_activity,
        ),
    }
    if event.content_type == "video":
        values["video_minutes"] = DailyUsage.video_minutes + event.minutes
    elif event.content_type == "book":
        values["book_minutes"] = DailyUsage.book_minutes + event.minutes

    await db.execute(
        update(DailyUsage)
        .where(DailyUsage.child_id == child_id, DailyUsage.date == today)
        .values(**values)
        .execution_options(synchronize_session=False)
    )

    # The UPDATE above holds the row (PostgreSQL) or database (SQLite) write
    # lock until commit, so the category list can be extended in Python.
    result = await db.execute(
        select(DailyUsage)
        .where(DailyUsage.child_id == child_id, DailyUsage.date == today)
        .with_for_update()
        .execution_options(populate_existing=True)
    )
    row = result.scalar_one()

    if event.category and event.category not in (row.categories_accessed or []):
        # Reassign so the JSON / ARRAY column is flagged dirty
        row.categories_accessed = [*(row.categories_accessed or []), event.category]
        await db.flush()

    logger.debug(
        "Recorded %d %s minutes for child %s (total %d)",
        event.minutes, event.content_type, child_id, row.total_minutes,
    )
    return UsageData.model_validate(row)


async def purge_usage_before(db: AsyncSession, cutoff: date) -> int:
    """Delete usage history older than ``cutoff``. Returns the row count."""
    result = await db.execute(delete(DailyUsage).where(DailyUsage.date < cutoff))
    return result.rowcount


async def purge_expired_usage(db: AsyncSession, today: date) -> int:
    """Delete records older than ``USAGE_RETENTION_DAYS`` before ``today``.

    ``today`` is the current day in the configured timezone, the same
    calendar the ``date`` keys are written in.
    """
    cutoff = today - timedelta(days=app_settings.USAGE_RETENTION_DAYS)
    removed = await purge_usage_before(db, cutoff)
    logger.info("Purged %d daily usage records before %s", removed, cutoff.isoformat())
    return removed
