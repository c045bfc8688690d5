"""
PhotoShare Backend — Database Session Management
==================================================

What:  Async SQLAlchemy engine handle, session factory, and FastAPI dependency.
How:   A `Database` object owns one async engine with its connection pool.
       The application lifespan creates it at startup, parks it on
       `app.state.database`, and disposes it at shutdown. Route handlers get a
       per-request session through `get_db_session`.
Who:   Used by route handlers via FastAPI's dependency injection system and
       by tests, which build their own `Database` against a SQLite file.

Transaction model:
    One session per request. Each mutating service call loads the Photo
    aggregate (photo row, its likes, its comments) under a row lock, applies
    the change and commits before the handler builds its response, so the
    read-modify-write lands atomically. `get_db_session` rolls back whatever
    is left if anything raises. No cross-request transactions exist.
"""

from typing import AsyncGenerator, Optional

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from photoshare.config import settings


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares a single metadata object, which Alembic reads for migrations.
    """
    pass


class Database:
    """
    Handle on the persistence layer.

    Lifecycle:
        db = Database(url)        # startup: builds engine + pool (lazy connect)
        async with db.session():  # per request
        await db.dispose()        # shutdown: closes pooled connections
    """

    def __init__(self, url: Optional[str] = None, echo: Optional[bool] = None):
        self.url = url or settings.database_url

        engine_kwargs = {
            "echo": settings.log_level == "DEBUG" if echo is None else echo,
            "pool_pre_ping": settings.db_pool_pre_ping,
        }
        # SQLite (tests, local dev) uses its own pool class without sizing knobs
        if not self.url.startswith("sqlite"):
            engine_kwargs.update(
                pool_size=settings.db_pool_size,
                max_overflow=settings.db_max_overflow,
                pool_recycle=3600,
            )

        self.engine: AsyncEngine = create_async_engine(self.url, **engine_kwargs)

        # expire_on_commit=False: response models are built from ORM objects
        # after the flush, without triggering lazy loads.
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    async def create_all(self) -> None:
        """Create every table registered on Base (tests and DB_CREATE_TABLES only)."""
        # Import models so their tables are registered on Base.metadata
        import photoshare.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def ping(self) -> bool:
        """Lightweight connectivity check used by the health check."""
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True

    async def dispose(self) -> None:
        """Gracefully close all connections in the pool."""
        await self.engine.dispose()


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the application's Database handle
        2. Yields it to the route handler
        3. On error: rolls back and re-raises for the global error handler
        4. Always: closes the session (returns connection to pool)

    Services commit. This dependency's exit code may run after the response
    has been sent, so it never commits.
    """
    database: Database = request.app.state.database
    async with database.session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
