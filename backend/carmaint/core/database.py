"""
Async SQLAlchemy engine, session factory and the request session dependency.

The engine is the only state shared between requests.
"""

import logging
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    AsyncEngine,
    create_async_engine,
    async_sessionmaker,
)
from sqlalchemy import event
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError
from sqlalchemy.pool import StaticPool

from carmaint.core.config import settings
from carmaint.core.errors import ConflictError, DatabaseError
from carmaint.models.base import Base

logger = logging.getLogger(__name__)


def get_async_engine(database_url: str = settings.database_url) -> AsyncEngine:
    """
    Build the engine for ``database_url``.

    SQLite gets a single shared connection (StaticPool, so an in-memory
    database survives across sessions) with foreign keys switched on.
    Other backends keep the default pool with pre-ping.

    Args:
        database_url: Async SQLAlchemy URL

    Returns:
        AsyncEngine
    """
    is_sqlite = "sqlite" in database_url

    connect_args: dict = {"check_same_thread": False} if is_sqlite else {}

    engine_kwargs = {
        "echo": False,
        "connect_args": connect_args,
    }

    if is_sqlite:
        engine_kwargs["poolclass"] = StaticPool
    else:
        engine_kwargs["pool_pre_ping"] = True

    engine = create_async_engine(database_url, **engine_kwargs)

    # maintenance_records.car_id is only enforced with this pragma on.
    if is_sqlite:
        @event.listens_for(engine.sync_engine, "connect")
        def _set_sqlite_pragma(dbapi_connection, connection_record):  # noqa: ANN001
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


# Disposed by close_db() at shutdown
engine = get_async_engine()


# Async session factory
async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


async def init_db() -> None:
    """
    Initialize the database.

    Creates missing tables when ``settings.create_schema`` is enabled.
    Existing tables are left untouched.
    """
    # Import models so their tables are registered on Base.metadata
    from carmaint import models  # noqa: F401

    if not settings.create_schema:
        logger.info("Schema creation disabled, skipping create_all")
        return

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info("Database schema ready", extra={"tables": sorted(Base.metadata.tables)})


async def close_db() -> None:
    """
    Dispose of the engine and its pooled connections at shutdown.
    """
    await engine.dispose()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Request-scoped session for route dependencies.

    Repositories commit their own writes; on any error the session is
    rolled back and SQLAlchemy failures are re-raised as ConflictError
    (integrity) or DatabaseError (everything else).

    Example:
        DatabaseSession = Annotated[AsyncSession, Depends(get_db)]
    """
    async with async_session_maker() as session:
        try:
            yield session
        except IntegrityError as e:
            await session.rollback()
            logger.error(f"DB integrity error: {e}")
            raise ConflictError("Integrity constraint violated")
        except OperationalError as e:
            await session.rollback()
            logger.error(f"DB operational error: {e}")
            raise DatabaseError("Connection or operational error", "execute")
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"SQLAlchemy error: {e}")
            raise DatabaseError("Database operation failed", "unknown")
        except Exception:
            await session.rollback()
            raise
