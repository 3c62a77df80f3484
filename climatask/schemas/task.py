"""
ClimaTask Backend — Task Schemas
==================================

TaskUpdate separates "omitted" from "set": routes call
model_dump(exclude_unset=True), so a body of {"title": "x"} never touches
isCompleted, while {"isCompleted": false} explicitly reopens a task.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field, field_validator

from climatask.schemas.common import CamelModel
from climatask.schemas.user import UserPublic


class TaskCreate(CamelModel):
    user_id: int
    title: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None


class TaskUpdate(CamelModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    is_completed: Optional[bool] = None

    @field_validator("title", "is_completed")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("may be omitted but not set to null")
        return v


class TaskResponse(CamelModel):
    id: int
    user_id: int
    title: str
    description: Optional[str] = None
    is_completed: bool
    created_at: datetime

    @field_validator("created_at")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        # SQLite drops the offset; stored values are always UTC
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v


class TaskWithUser(TaskResponse):
    user: UserPublic
