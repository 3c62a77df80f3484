"""
ClimaTask Backend — User Route Handlers
=========================================

What:  /users CRUD and POST /login.
How:   Parse the request, delegate to UserService, return its projection.
       Every response model is a public shape; the password hash has no
       field in any of them.
"""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from climatask.database import get_db_session
from climatask.dependencies import get_user_service
from climatask.schemas.common import ErrorResponse
from climatask.schemas.user import (
    LoginRequest,
    UserCreate,
    UserDeleted,
    UserPublic,
    UserUpdate,
)
from climatask.services.user_service import UserService

router =APIRouter(tags=["Users"])


@router.post(
    "/users",
    response_model=UserPublic,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"description": "Email already registered", "model": ErrorResponse}},
    summary="Sign up a new user",
)
async def create_user(
    payload: UserCreate,
    db: AsyncSession = Depends(get_db_session),
    users: UserService = Depends(get_user_service),
) -> UserPublic:
    return await users.create_user(db, payload)


@router.get("/users", response_model=List[UserPublic], summary="List users")
async def list_users(
    db: AsyncSession = Depends(get_db_session),
    users: UserService = Depends(get_user_service),
) -> List[UserPublic]:
    return await users.list_users(db)


@router.get(
    "/users/{user_id}",
    response_model=UserPublic,
    responses={404: {"description": "User not found", "model": ErrorResponse}},
    summary="Get a user by ID",
)
async def get_user(
    user_id: int,
    db: AsyncSession = Depends(get_db_session),
    users: UserService = Depends(get_user_service),
) -> UserPublic:
    return await users.get_user(db, user_id)


@router.put(
    "/users/{user_id}",
    response_model=UserPublic,
    responses={
        400: {"description": "Email belongs to another user", "model": ErrorResponse},
        404: {"description": "User not found", "model": ErrorResponse},
    },
    summary="Partially update a user",
)
async def update_user(
    user_id: int,
    payload: UserUpdate,
    db: AsyncSession = Depends(get_db_session),
    users: UserService = Depends(get_user_service),
) -> UserPublic:
    """
    Omitted or null fields keep their stored values; a new password is
    rehashed before it is stored.
    """
    return await users.update_user(db, user_id, payload)


@router.delete(
    "/users/{user_id}",
    response_model=UserDeleted,
    responses={404: {"description": "User not found", "model": ErrorResponse}},
    summary="Delete a user and everything they own",
)
async def delete_user(
    user_id: int,
    db: AsyncSession = Depends(get_db_session),
    users: UserService = Depends(get_user_service),
) -> UserDeleted:
    return await users.delete_user(db, user_id)


@router.post(
    "/login",
    response_model=UserPublic,
    responses={
        400: {"description": "Wrong password", "model": ErrorResponse},
        404: {"description": "Unknown email", "model": ErrorResponse},
    },
    summary="Check an email/password pair",
)
async def login(
    payload: LoginRequest,
    db: AsyncSession = Depends(get_db_session),
    users: UserService = Depends(get_user_service),
) -> UserPublic:
    """
    Verifies credentials and returns the user. No session or token is issued.
    """
    return await users.login(db, payload)
