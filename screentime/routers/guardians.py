"""Guardians router.

Dashboard overview across all children of a parent or educator.
"""

import uuid
from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from screentime.database import get_db
from screentime.schemas.screen_time import GuardianOverview, ScreenTimeStatus
from screentime.services.screen_time_service import as_local, get_guardian_overview, local_now

router = APIRouter(prefix="/guardians", tags=["Guardians"])


@router.get("/{guardian_id}/overview", response_model=GuardianOverview)
async def guardian_overview(
    guardian_id: uuid.UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    status: ScreenTimeStatus | None = Query(None, description="Only list children in this status"),
    at: datetime | None = Query(None, description="Evaluation moment, defaults to now"),
) -> GuardianOverview:
    """Status counts, average usage and per-child cards for the dashboard.

    Children whose stored settings cannot be evaluated are listed as
    ``within-limits`` with ``settings_error`` set.
    """
    now = as_local(at) if at is not None else local_now()
    return await get_guardian_overview(db, guardian_id, now, status_filter=status)
