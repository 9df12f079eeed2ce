"""Children router.

Endpoints for managing child accounts. Creating a child provisions its
default screen-time settings; deleting it removes settings and usage
history with it.
"""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from screentime.core.dependencies import get_child_or_404
from screentime.database import get_db
from screentime.models.child import Child
from screentime.models.screen_time import ScreenTimeSettingsRecord
from screentime.models.usage import DailyUsage
from screentime.schemas.child import ChildCreate, ChildResponse, ChildUpdate
from screentime.services.settings_service import forget_child_settings, provision_default_settings

router = APIRouter(prefix="/children", tags=["Children"])


@router.get("/", response_model=list[ChildResponse])
async def list_children(
    db: Annotated[AsyncSession, Depends(get_db)],
    guardian_id: uuid.UUID | None = Query(None, description="Only children of this guardian"),
):
    """List children, optionally for a single parent or educator."""
    query = select(Child)
    if guardian_id is not None:
        query = query.where(Child.guardian_id == guardian_id)

    result = await db.execute(query.order_by(Child.name))
    return result.scalars().all()


@router.post("/", response_model=ChildResponse, status_code=status.HTTP_201_CREATED)
async def create_child(
    body: ChildCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Add a child and provision its default screen-time settings."""
    child = Child(
        guardian_id=body.guardian_id,
        guardian_role=body.guardian_role,
        name=body.name,
        email=body.email,
    )
    db.add(child)
    await db.flush()
    await db.refresh(child)
    await provision_default_settings(db, child.id)
    return child


@router.get("/{child_id}", response_model=ChildResponse)
async def get_child(child: Annotated[Child, Depends(get_child_or_404)]):
    """Get details of a specific child."""
    return child


@router.put("/{child_id}", response_model=ChildResponse)
async def update_child(
    body: ChildUpdate,
    child: Annotated[Child, Depends(get_child_or_404)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Update a child's name or email."""
    for field, value in body.model_dump(exclude_unset=True).items():
        if value is not None or field == "email":
            setattr(child, field, value)

    await db.flush()
    await db.refresh(child)
    return child


@router.delete("/{child_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_child(
    child: Annotated[Child, Depends(get_child_or_404)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Delete a child together with its settings and usage history."""
    await db.execute(delete(DailyUsage).where(DailyUsage.child_id == child.id))
    await db.execute(
        delete(ScreenTimeSettingsRecord).where(ScreenTimeSettingsRecord.child_id == child.id)
    )
    child_id = child.id
    await db.delete(child)
    await db.commit()
    await forget_child_settings(child_id)
    return None
