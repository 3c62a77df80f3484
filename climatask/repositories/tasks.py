"""Task persistence. Every list is newest first; id breaks created_at ties."""

from typing import List

from sqlalchemy.orm import selectinload

from climatask.models.task import Task
from climatask.repositories.base import Repository

NEWEST_FIRST = (Task.created_at.desc(), Task.id.desc())


class TaskRepository(Repository[Task]):
    model = Task
    resource = "task"

    async def list_with_user(self) -> List[Task]:
        return await self.find_many(
            order_by=NEWEST_FIRST,
            options=[selectinload(Task.user)],
        )

    async def list_by_user(self, user_id: int) -> List[Task]:
        return await self.find_many(
            where=[Task.user_id == user_id],
            order_by=NEWEST_FIRST,
        )
