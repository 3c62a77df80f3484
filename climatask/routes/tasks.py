"""
ClimaTask Backend — Task Route Handlers
=========================================

What:  /tasks CRUD and GET /tasks/user/{user_id}. Lists are newest first.
"""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from climatask.database import get_db_session
from climatask.dependencies import get_task_service
from climatask.schemas.common import ErrorResponse
from climatask.schemas.task import TaskCreate, TaskResponse, TaskUpdate, TaskWithUser
from climatask.services.task_service import TaskService

router = APIRouter(prefix="/tasks", tags=["Tasks"])

_NOT_FOUND = {404: {"description": "Task not found", "model": ErrorResponse}}


@router.post(
    "",
    response_model=TaskResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a task",
)
async def create_task(
    payload: TaskCreate,
    db: AsyncSession = Depends(get_db_session),
    tasks: TaskService = Depends(get_task_service),
) -> TaskResponse:
    return await tasks.create_task(db, payload)


@router.get("", response_model=List[TaskWithUser], summary="List all tasks, newest first")
async def list_tasks(
    db: AsyncSession = Depends(get_db_session),
    tasks: TaskService = Depends(get_task_service),
) -> List[TaskWithUser]:
    return await tasks.list_tasks(db)


# Declared before /{task_id} so "user" is never parsed as a task id
@router.get(
    "/user/{user_id}",
    response_model=List[TaskResponse],
    summary="List one user's tasks, newest first",
)
async def list_user_tasks(
    user_id: int,
    db: AsyncSession = Depends(get_db_session),
    tasks: TaskService = Depends(get_task_service),
) -> List[TaskResponse]:
    return await tasks.list_user_tasks(db, user_id)


@router.get("/{task_id}", response_model=TaskResponse, responses=_NOT_FOUND, summary="Get a task")
async def get_task(
    task_id: int,
    db: AsyncSession = Depends(get_db_session),
    tasks: TaskService = Depends(get_task_service),
) -> TaskResponse:
    return await tasks.get_task(db, task_id)


@router.put(
    "/{task_id}",
    response_model=TaskResponse,
    responses=_NOT_FOUND,
    summary="Update title, description or completion",
)
async def update_task(
    task_id: int,
    payload: TaskUpdate,
    db: AsyncSession = Depends(get_db_session),
    tasks: TaskService = Depends(get_task_service),
) -> TaskResponse:
    """
    Only the fields present in the body change. `title` and `isCompleted`
    may be omitted but not set to null (422).
    """
    return await tasks.update_task(db, task_id, payload)


@router.delete("/{task_id}", response_model=TaskResponse, responses=_NOT_FOUND, summary="Delete a task")
async def delete_task(
    task_id: int,
    db: AsyncSession = Depends(get_db_session),
    tasks: TaskService = Depends(get_task_service),
) -> TaskResponse:
    return await tasks.delete_task(db, task_id)
