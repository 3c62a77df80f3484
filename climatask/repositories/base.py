"""
ClimaTask Backend — Generic Async Repository
==============================================

What:  Typed CRUD over one ORM model, bound to the request's AsyncSession.
How:   find_by_id / find_unique / find_many read; create / update / delete
       write and flush; services call commit() once their write is complete,
       so a failed commit still reaches the client as an error response.
Who:   Subclassed once per entity; instantiated by services per call.

Error contract:
    - Reads return None / [] when nothing matches.
    - update() and delete() raise RecordNotFoundError (→ 404) when the id has
      no row, so "nothing to change" is distinguishable from a failure.
    - A UNIQUE constraint violation is re-raised as DuplicateRecordError.
    - Any other SQLAlchemyError (IntegrityError on a dangling foreign key,
      pool TimeoutError, lost connection) is logged with its details and
      re-raised as DatabaseError (→ 500) with a generic message.
"""

import logging
from typing import Any, ClassVar, Generic, Iterable, List, Mapping, Optional, Type, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from climatask.database import Base
from climatask.exceptions import DatabaseError, DuplicateRecordError, RecordNotFoundError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


class Repository(Generic[ModelT]):
    """
    Base repository.

    Subclasses set `model` (the ORM class) and `resource` (the noun used in
    not-found messages).
    """

    model: ClassVar[Type[Any]]
    resource: ClassVar[str] = "record"

    def __init__(self, session: AsyncSession):
        self.session = session

    # ── Reads ─────────────────────────────────────────────────────────────

    async def find_by_id(self, record_id: int, options: Iterable[Any] = ()) -> Optional[ModelT]:
        stmt = select(self.model).where(self.model.id == record_id).options(*options)
        result = await self._execute(stmt, action="find_by_id")
        return result.scalar_one_or_none()

    async def find_unique(self, **criteria: Any) -> Optional[ModelT]:
        """Lookup by a unique column, e.g. find_unique(email="a@x.com")."""
        stmt = select(self.model).filter_by(**criteria)
        result = await self._execute(stmt, action="find_unique")
        return result.scalar_one_or_none()

    async def find_many(
        self,
        where: Iterable[Any] = (),
        order_by: Iterable[Any] = (),
        options: Iterable[Any] = (),
    ) -> List[ModelT]:
        stmt = select(self.model).where(*where).order_by(*order_by).options(*options)
        result = await self._execute(stmt, action="find_many")
        return list(result.scalars().all())

    # ── Writes ────────────────────────────────────────────────────────────

    async def create(self, **values: Any) -> ModelT:
        record = self.model(**values)
        self.session.add(record)
        await self._flush(action="create")
        return record

    async def update(self, record_id: int, values: Mapping[str, Any]) -> ModelT:
        record = await self.find_by_id(record_id)
        if record is None:
            raise RecordNotFoundError(resource=self.resource, resource_id=record_id)
        return await self.apply(record, values)

    async def apply(self, record: ModelT, values: Mapping[str, Any]) -> ModelT:
        """Set `values` on an already loaded record and flush."""
        for field, value in values.items():
            setattr(record, field, value)
        await self._flush(action="update")
        return record

    async def delete(self, record_id: int) -> ModelT:
        record = await self.find_by_id(record_id)
        if record is None:
            raise RecordNotFoundError(resource=self.resource, resource_id=record_id)
        return await self.remove(record)

    async def remove(self, record: ModelT) -> ModelT:
        """Delete an already loaded record and flush. Returns the record."""
        await self.session.delete(record)
        await self._flush(action="delete")
        return record

    async def commit(self) -> None:
        """Commit the session's transaction before the response is built."""
        try:
            await self.session.commit()
        except SQLAlchemyError as e:
            raise self._database_error("commit", e) from e

    # ── Internals ─────────────────────────────────────────────────────────

    async def _execute(self, stmt, action: str):
        try:
            return await self.session.execute(stmt)
        except SQLAlchemyError as e:
            raise self._database_error(action, e) from e

    async def _flush(self, action: str) -> None:
        try:
            await self.session.flush()
        except SQLAlchemyError as e:
            raise self._database_error(action, e) from e

    def _database_error(self, action: str, error: SQLAlchemyError) -> DatabaseError:
        logger.error(
            "Database error during %s.%s: %s",
            self.resource,
            action,
            str(error),
            exc_info=True,
        )
        context = {
            "resource": self.resource,
            "action": action,
            "error_type": type(error).__name__,
        }
        if _is_unique_violation(error):
            return DuplicateRecordError(context=context)
        return DatabaseError(context=context)


def _is_unique_violation(error: SQLAlchemyError) -> bool:
    # SQLite: "UNIQUE constraint failed"; asyncpg: UniqueViolationError /
    # "duplicate key value violates unique constraint"
    if not isinstance(error, IntegrityError):
        return False
    orig = getattr(error, "orig", None)
    if type(orig).__name__ == "UniqueViolationError":
        return True
    detail = str(orig if orig is not None else error).lower()
    return "unique" in detail or "duplicate" in detail
