"""
ClimaTask Backend — Database Engine & Session Management
==========================================================

What:  Async SQLAlchemy engine factory, declarative base and the per-request
       session dependency.
How:   create_app() calls build_engine() exactly once and keeps the engine and
       its session factory on `app.state`. Route handlers receive a session
       through FastAPI's Depends(get_db_session), which reads the factory from
       the running application; nothing in the request path touches a
       module-level engine.
Who:   Used by the app factory, route handlers (via DI), Alembic and tests.

Connection Pooling Strategy (PostgreSQL / asyncpg):
    pool_size=10:       Persistent connections shared by all requests
    max_overflow=0:     Hard upper bound; excess requests wait for a slot
    pool_timeout=20s:   How long a waiting request queues before failing (→ 500)
    connect timeout:    asyncpg `timeout` connect argument
    pool_pre_ping:      Validates connections before use
    pool_recycle=3600:  Recycles connections every hour

SQLite (tests / local runs):
    A single StaticPool connection so an in-memory database survives between
    sessions, with foreign keys switched on for every new connection.
"""

import logging
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from climatask.config import Settings

logger = logging.getLogger(__name__)


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    All models share this metadata, which Alembic reads for migrations and the
    test suite uses for create_all().
    """
    pass


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    """SQLite ships with FK enforcement off; turn it on per connection."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


# ── Engine Factory ────────────────────────────────────────────────────────
def build_engine(settings: Settings) -> AsyncEngine:
    """
    Create the async engine (and its connection pool) for one application.

    Args:
        settings: Application settings providing the URL and pool sizing.

    Returns:
        AsyncEngine; connections are opened lazily on first use.
    """
    url = make_url(settings.sqlalchemy_url)
    echo = settings.log_level == "DEBUG"

    if url.get_backend_name() == "sqlite":
        engine = create_async_engine(
            url,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
            echo=echo,
        )
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    logger.info(
        "Creating database engine for %s (pool_size=%d, max_overflow=%d)",
        url.render_as_string(hide_password=True),
        settings.db_pool_size,
        settings.db_max_overflow,
    )
    return create_async_engine(
        url,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_timeout=settings.db_pool_timeout,
        pool_pre_ping=settings.db_pool_pre_ping,
        pool_recycle=3600,
        connect_args={"timeout": settings.db_connect_timeout},
        echo=echo,
    )


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """
    Session factory bound to `engine`.

    expire_on_commit=False keeps ORM attributes readable after a service's
    commit, when the response is being serialized.
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the application's factory
        2. Yields it to the route handler
        3. On error: rolls back the transaction and re-raises
        4. Always: closes the session (returns the connection to the pool)

    Writes are committed by the services (Repository.commit()) before the
    handler returns. The teardown after `yield` runs once the response has
    been sent, so a commit there could fail without the client seeing it.
    Anything left uncommitted is discarded on close.

    Example usage in a route:
        @router.get("/users")
        async def list_users(db: AsyncSession = Depends(get_db_session)):
            ...
    """
    session_factory: async_sessionmaker[AsyncSession] = request.app.state.session_factory
    async with session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def dispose_engine(engine: AsyncEngine) -> None:
    """
    What:  Gracefully closes all connections in the pool.
    When:  Called during application shutdown (lifespan handler).
    """
    await engine.dispose()
