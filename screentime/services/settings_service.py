"""Screen-time settings service.

Defaults merging, partial updates and cached persistence of per-child
settings. The evaluator only ever sees fully populated settings produced
here.
"""

import logging
import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from screentime.config import settings as app_settings
from screentime.core.redis_client import cache_delete, cache_get_json, cache_set_json
from screentime.models.screen_time import ScreenTimeSettingsRecord
from screentime.schemas.screen_time import (
    ScreenTimeSettings,
    ScreenTimeSettingsUpdate,
)

logger = logging.getLogger(__name__)


DEFAULT_SETTINGS = ScreenTimeSettings(
    daily_limit=120,          # 2 hours
    video_limit=60,           # 1 hour for videos
    book_limit=0,             # unlimited for books
    bedtime_start="21:00",
    bedtime_end="07:00",
    weekend_extension=30,
    enabled=True,
    content_filtering="moderate",
    allowed_categories=["Educational", "Science", "Stories", "Music"],
    reward_system=True,
    reward_points=0,
)

SETTINGS_FIELDS = tuple(ScreenTimeSettings.model_fields)


def _cache_key(child_id: uuid.UUID) -> str:
    return f"screen-time:settings:{child_id}"


def normalize_settings(stored: dict | None) -> ScreenTimeSettings:
    """Merge a (possibly partial) stored settings document over the defaults.

    Keys that are missing or ``None`` take the default value; unknown keys
    are dropped.
    """
    merged = DEFAULT_SETTINGS.model_dump()
    if stored:
        merged.update(
            {k: v for k, v in stored.items() if k in SETTINGS_FIELDS and v is not None}
        )
    return ScreenTimeSettings(**merged)


def merge_settings_update(
    current: ScreenTimeSettings,
    update: ScreenTimeSettingsUpdate,
) -> ScreenTimeSettings:
    """Apply the fields explicitly set in ``update`` on top of ``current``."""
    changes = {
        k: v for k, v in update.model_dump(exclude_unset=True).items() if v is not None
    }
    return current.model_copy(update=changes)


def _record_to_dict(record: ScreenTimeSettingsRecord) -> dict:
    return {field: getattr(record, field) for field in SETTINGS_FIELDS}


async def _get_record(
    db: AsyncSession, child_id: uuid.UUID
) -> ScreenTimeSettingsRecord | None:
    result = await db.execute(
        select(ScreenTimeSettingsRecord).where(
            ScreenTimeSettingsRecord.child_id == child_id
        )
    )
    return result.scalar_one_or_none()


async def get_child_settings(
    db: AsyncSession,
    child_id: uuid.UUID,
    bypass_cache: bool = False,
) -> ScreenTimeSettings:
    """Load normalised settings for a child.

    Returns the cached document if available (TTL ``SETTINGS_CACHE_TTL``),
    unless bypass_cache=True. A child without a stored row gets the
    defaults.
    """
    key = _cache_key(child_id)

    if not bypass_cache:
        cached = await cache_get_json(key)
        if cached is not None:
            return normalize_settings(cached)

    record = await _get_record(db, child_id)
    stored = _record_to_dict(record) if record is not None else None
    result = normalize_settings(stored)

    await cache_set_json(key, result.model_dump(), app_settings.SETTINGS_CACHE_TTL)
    return result


async def save_child_settings(
    db: AsyncSession,
    child_id: uuid.UUID,
    new_settings: ScreenTimeSettings,
) -> ScreenTimeSettings:
    """Write the full settings row for a child and invalidate the cache."""
    record = await _get_record(db, child_id)
    values = new_settings.model_dump()

    if record is None:
        record = ScreenTimeSettingsRecord(child_id=child_id, **values)
        db.add(record)
    else:
        for field, value in values.items():
            setattr(record, field, value)

    await db.flush()
    await cache_delete(_cache_key(child_id))
    return new_settings


async def provision_default_settings(
    db: AsyncSession, child_id: uuid.UUID
) -> ScreenTimeSettings:
    """Create the default settings row for a newly added child."""
    logger.info("Provisioning default screen-time settings for child %s", child_id)
    return await save_child_settings(db, child_id, DEFAULT_SETTINGS)


async def update_child_settings(
    db: AsyncSession,
    child_id: uuid.UUID,
    update: ScreenTimeSettingsUpdate,
) -> ScreenTimeSettings:
    current = await get_child_settings(db, child_id, bypass_cache=True)
    return await save_child_settings(db, child_id, merge_settings_update(current, update))


async def forget_child_settings(child_id: uuid.UUID) -> None:
    await cache_delete(_cache_key(child_id))
