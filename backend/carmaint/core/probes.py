"""
Dependency probes used by the readiness endpoint.

A probe never raises: it answers True when the dependency responded
within its time budget and False otherwise, logging the reason.
"""

import asyncio
import logging

from sqlalchemy import text

from carmaint.core.database import async_session_maker

logger = logging.getLogger(__name__)


async def check_database(timeout_seconds: float = 2.0) -> bool:
    """
    Run ``SELECT 1`` against the configured database.

    Args:
        timeout_seconds: Budget for opening a session and running the query

    Returns:
        Whether the database answered in time
    """
    try:
        async with asyncio.timeout(timeout_seconds):
            async with async_session_maker() as session:
                await session.execute(text("SELECT 1"))
    except TimeoutError:
        logger.warning("Database probe timed out", extra={"timeout_seconds": timeout_seconds})
        return False
    except Exception as e:
        logger.error(f"Database probe failed: {e}")
        return False

    return True
