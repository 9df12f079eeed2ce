"""Screen Time router.

Per-child settings, current status, weekly usage chart and the access
check used by content players.
"""

from datetime import date, datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from screentime.core.dependencies import get_child_or_404
from screentime.database import get_db
from screentime.models.child import Child
from screentime.schemas.screen_time import (
    AccessCheckRequest,
    AccessDecision,
    ChildScreenTimeStatus,
    ScreenTimeSettings,
    ScreenTimeSettingsUpdate,
    WeeklyUsageEntry,
)
from screentime.services.access_gate import check_access
from screentime.services.screen_time_service import (
    as_local,
    get_child_status,
    get_weekly_usage,
    local_now,
)
from screentime.services.settings_service import (
    forget_child_settings,
    get_child_settings,
    update_child_settings,
)

router = APIRouter(prefix="/children/{child_id}/screen-time", tags=["Screen Time"])


@router.get("/settings", response_model=ScreenTimeSettings)
async def read_settings(
    child: Annotated[Child, Depends(get_child_or_404)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Get the child's settings with defaults filled in."""
    return await get_child_settings(db, child.id)


@router.put("/settings", response_model=ScreenTimeSettings)
async def write_settings(
    body: ScreenTimeSettingsUpdate,
    child: Annotated[Child, Depends(get_child_or_404)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Partially update the child's settings; omitted fields keep their value."""
    updated = await update_child_settings(db, child.id, body)
    await db.commit()
    # Drop anything cached by reads that ran before the commit
    await forget_child_settings(child.id)
    return updated


@router.get("/status", response_model=ChildScreenTimeStatus)
async def read_status(
    child: Annotated[Child, Depends(get_child_or_404)],
    db: Annotated[AsyncSession, Depends(get_db)],
    at: datetime | None = Query(None, description="Evaluation moment, defaults to now"),
):
    """Evaluate the child's screen-time status.

    Naive ``at`` values are read in the configured timezone.
    """
    now = as_local(at) if at is not None else local_now()
    return await get_child_status(db, child, now)


@router.get("/weekly", response_model=list[WeeklyUsageEntry])
async def read_weekly(
    child: Annotated[Child, Depends(get_child_or_404)],
    db: Annotated[AsyncSession, Depends(get_db)],
    end_date: date | None = Query(None, description="Last day of the week, defaults to today"),
):
    """Seven days of total usage, oldest first, for the weekly chart."""
    if end_date is None:
        end_date = local_now().date()
    return await get_weekly_usage(db, child.id, end_date)


@router.post("/access-check", response_model=AccessDecision)
async def access_check(
    body: AccessCheckRequest,
    child: Annotated[Child, Depends(get_child_or_404)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Decide whether the child may start content of the given type now."""
    current = await get_child_status(db, child, local_now())
    return check_access(
        current.settings,
        current.usage,
        current.evaluation,
        body.content_type,
        body.category,
    )
