import uuid
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class ChildCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    guardian_id: uuid.UUID
    guardian_role: Literal["parent", "educator"] = "parent"
    email: str | None = None


class ChildUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=100)
    email: str | None = None


class ChildResponse(BaseModel):
    id: uuid.UUID
    guardian_id: uuid.UUID
    guardian_role: str
    name: str
    email: str | None = None
    created_at: datetime | None = None
    model_config = ConfigDict(from_attributes=True)
