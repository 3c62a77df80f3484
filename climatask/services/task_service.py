"""
ClimaTask Backend — Task Service
==================================

What:  CRUD for user-owned tasks, lists ordered newest first.

Partial updates use model_dump(exclude_unset=True): a field missing from the
request body is left alone, which is different from sending
"isCompleted": false.
"""

import logging
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from climatask.exceptions import NotFoundError
from climatask.repositories.tasks import TaskRepository
from climatask.schemas.task import TaskCreate, TaskResponse, TaskUpdate, TaskWithUser

logger = logging.getLogger(__name__)


class TaskService:

    async def create_task(self, db: AsyncSession, payload: TaskCreate) -> TaskResponse:
        tasks = TaskRepository(db)
        task = await tasks.create(**payload.model_dump())
        await tasks.commit()
        logger.info("Task created: id=%s user_id=%s", task.id, task.user_id)
        return TaskResponse.model_validate(task)

    async def list_tasks(self, db: AsyncSession) -> List[TaskWithUser]:
        tasks = await TaskRepository(db).list_with_user()
        return [TaskWithUser.model_validate(task) for task in tasks]

    async def list_user_tasks(self, db: AsyncSession, user_id: int) -> List[TaskResponse]:
        tasks = await TaskRepository(db).list_by_user(user_id)
        return [TaskResponse.model_validate(task) for task in tasks]

    async def get_task(self, db: AsyncSession, task_id: int) -> TaskResponse:
        task = await TaskRepository(db).find_by_id(task_id)
        if task is None:
            raise NotFoundError(resource="task", resource_id=task_id)
        return TaskResponse.model_validate(task)

    async def update_task(self, db: AsyncSession, task_id: int, payload: TaskUpdate) -> TaskResponse:
        changes = payload.model_dump(exclude_unset=True)
        tasks = TaskRepository(db)
        task = await tasks.update(task_id, changes)
        await tasks.commit()
        logger.info("Task updated: id=%s fields=%s", task_id, sorted(changes))
        return TaskResponse.model_validate(task)

    async def delete_task(self, db: AsyncSession, task_id: int) -> TaskResponse:
        tasks = TaskRepository(db)
        task = await tasks.delete(task_id)
        await tasks.commit()
        logger.info("Task deleted: id=%s", task_id)
        return TaskResponse.model_validate(task)
