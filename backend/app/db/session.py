"""
Database session configuration.

This module builds the async SQLAlchemy engine and session factory for an
application context, and provides the request-scoped session dependency.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator
from fastapi import Request
from sqlalchemy import event
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import declarative_base
from backend.app.core.config import Settings
from backend.app.core.exceptions import StorageError

# Create declarative base for models
Base = declarative_base()


def _is_sqlite(url: str) -> bool:
    return url.startswith("sqlite")


def build_engine(settings: Settings) -> AsyncEngine:
    """Create the async engine with a bounded driver timeout."""
    if _is_sqlite(settings.database_url):
        engine = create_async_engine(
            settings.database_url,
            echo=settings.db_echo,
            connect_args={"timeout": settings.db_timeout_seconds},
        )

        @event.listens_for(engine.sync_engine, "connect")
        def set_sqlite_pragma(dbapi_conn, connection_record):
            """Enable foreign key constraints for SQLite."""
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return engine

    return create_async_engine(
        settings.database_url,
        echo=settings.db_echo,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        connect_args={"command_timeout": settings.db_timeout_seconds},
    )


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    """
    FastAPI dependency for database sessions.

    Yields an async session from the application context and ensures it's
    properly closed.
    """
    async with request.app.state.context.session_factory() as session:
        try:
            yield session
        finally:
            await session.close()


@asynccontextmanager
async def storage_errors(db: AsyncSession, operation: str):
    """
    Roll back and convert backend failures into StorageError.

    IntegrityError is re-raised unchanged so callers can map constraint
    violations to domain errors.
    """
    try:
        yield
    except IntegrityError:
        await db.rollback()
        raise
    except SQLAlchemyError as exc:
        await db.rollback()
        raise StorageError(operation) from exc
