"""Usage router.

Content players report consumption here; the dashboard reads daily
records back.
"""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from screentime.core.dependencies import get_child_or_404
from screentime.core.rate_limit import USAGE_EVENT_LIMIT, limiter
from screentime.database import get_db
from screentime.models.child import Child
from screentime.schemas.screen_time import UsageData, UsageEventCreate
from screentime.services.screen_time_service import as_local, local_now
from screentime.services.usage_service import empty_usage, get_usage_for_day, record_usage

router = APIRouter(prefix="/children/{child_id}/usage", tags=["Usage"])


@router.post("/", response_model=UsageData, status_code=status.HTTP_201_CREATED)
@limiter.limit(USAGE_EVENT_LIMIT)
async def add_usage_event(
    request: Request,
    body: UsageEventCreate,
    child: Annotated[Child, Depends(get_child_or_404)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Record minutes of video, book or other content for today."""
    now = local_now()
    occurred_at = as_local(body.occurred_at) if body.occurred_at is not None else now
    return await record_usage(db, child.id, body, now.date(), occurred_at)


@router.get("/today", response_model=UsageData)
async def read_today(
    child: Annotated[Child, Depends(get_child_or_404)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Today's usage, or a zero record when nothing was recorded yet."""
    today = local_now().date()
    return await get_usage_for_day(db, child.id, today) or empty_usage(today)


@router.get("/{day}", response_model=UsageData)
async def read_day(
    day: date,
    child: Annotated[Child, Depends(get_child_or_404)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Usage for a given day, or a zero record when nothing was recorded."""
    return await get_usage_for_day(db, child.id, day) or empty_usage(day)
