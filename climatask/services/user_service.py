"""
ClimaTask Backend — User Service
==================================

What:  Business rules for users: signup, listing, partial update, deletion
       and password login.
How:   Reads and writes through UserRepository and commits each write before
       returning; hashes with bcrypt at the configured cost factor in a worker
       thread, keeping the event loop free while bcrypt runs.
Who:   Called by routes/users.py; one instance per application (app.state).

Rules enforced here:
    - Email must be unused on signup, and on update when it changes (→ 400).
      The pre-check answers the common case; a concurrent signup that slips
      past it hits the UNIQUE index, which is reported the same way.
    - Passwords are stored only as bcrypt hashes; a supplied password on
      update is rehashed, an omitted one leaves the stored hash untouched.
    - Every return value is a UserPublic / UserDeleted projection, so the hash
      cannot leak through any handler.
    - Missing users are reported (→ 404) before any write is attempted.
"""

import logging
from typing import Any, Dict, List

from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from climatask.exceptions import (
    ConflictError,
    DuplicateRecordError,
    InvalidCredentialsError,
    NotFoundError,
)
from climatask.repositories.users import UserRepository
from climatask.schemas.user import (
    LoginRequest,
    UserCreate,
    UserDeleted,
    UserPublic,
    UserUpdate,
)
from climatask.security import DEFAULT_ROUNDS, hash_password, verify_password

logger = logging.getLogger(__name__)


class UserService:
    """
    User operations. Stateless apart from the configured bcrypt cost factor.
    """

    def __init__(self, bcrypt_rounds: int = DEFAULT_ROUNDS):
        self.bcrypt_rounds = bcrypt_rounds

    async def _hash(self, password: str) -> str:
        return await run_in_threadpool(hash_password, password, self.bcrypt_rounds)

    async def create_user(self, db: AsyncSession, payload: UserCreate) -> UserPublic:
        """
        Register a new user.

        Raises:
            ConflictError: email already registered (→ 400), nothing is written
            DatabaseError: persistence failure (→ 500)
        """
        users = UserRepository(db)
        if await users.find_by_email(payload.email) is not None:
            raise ConflictError()

        hashed = await self._hash(payload.password)
        try:
            user = await users.create(email=payload.email, name=payload.name, password=hashed)
            await users.commit()
        except DuplicateRecordError as e:
            logger.info("Signup lost a race for an existing email")
            raise ConflictError() from e

        logger.info("User created: id=%s", user.id)
        return UserPublic.model_validate(user)

    async def list_users(self, db: AsyncSession) -> List[UserPublic]:
        users = await UserRepository(db).list_all()
        return [UserPublic.model_validate(user) for user in users]

    async def get_user(self, db: AsyncSession, user_id: int) -> UserPublic:
        user = await UserRepository(db).find_by_id(user_id)
        if user is None:
            raise NotFoundError(resource="user", resource_id=user_id)
        return UserPublic.model_validate(user)

    async def update_user(
        self, db: AsyncSession, user_id: int, payload: UserUpdate
    ) -> UserPublic:
        """
        Partial update; omitted or null fields keep their stored values.

        Raises:
            NotFoundError: no user with this id (→ 404)
            ConflictError: new email belongs to another user (→ 400)
        """
        users = UserRepository(db)
        user = await users.find_by_id(user_id)
        if user is None:
            raise NotFoundError(resource="user", resource_id=user_id)

        changes: Dict[str, Any] = payload.model_dump(exclude_none=True)

        new_email = changes.get("email")
        if new_email is not None and new_email != user.email:
            if await users.find_by_email(new_email) is not None:
                raise ConflictError()

        if "password" in changes:
            changes["password"] = await self._hash(changes["password"])

        try:
            user = await users.apply(user, changes)
            await users.commit()
        except DuplicateRecordError as e:
            raise ConflictError() from e

        logger.info("User updated: id=%s fields=%s", user.id, sorted(changes))
        return UserPublic.model_validate(user)

    async def delete_user(self, db: AsyncSession, user_id: int) -> UserDeleted:
        """
        Delete a user after confirming it exists.

        A missing id raises NotFoundError before any DELETE is issued.
        """
        users = UserRepository(db)
        user = await users.find_by_id(user_id)
        if user is None:
            raise NotFoundError(resource="user", resource_id=user_id)

        await users.remove(user)
        await users.commit()
        logger.info("User deleted: id=%s", user_id)
        return UserDeleted(id=user.id, email=user.email, name=user.name)

    async def login(self, db: AsyncSession, payload: LoginRequest) -> UserPublic:
        """
        Verify an email/password pair.

        Raises:
            NotFoundError: unknown email (→ 404)
            InvalidCredentialsError: password mismatch (→ 400)
        """
        user = await UserRepository(db).find_by_email(payload.email)
        if user is None:
            raise NotFoundError(resource="user")

        if not await run_in_threadpool(verify_password, payload.password, user.password):
            logger.info("Failed login for user id=%s", user.id)
            raise InvalidCredentialsError()

        return UserPublic.model_validate(user)
