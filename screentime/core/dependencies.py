from typing import Annotated
from uuid import UUID

from fastapi import Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from screentime.database import get_db
from screentime.models.child import Child


async def get_child_or_404(
    child_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Child:
    """Resolve the ``child_id`` path parameter to a Child row.

    Raises:
        HTTPException 404: If no child with that id exists.
    """
    result = await db.execute(select(Child).where(Child.id == child_id))
    child = result.scalar_one_or_none()

    if child is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Child not found",
        )

    return child
