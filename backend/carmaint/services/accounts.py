"""
Login account provisioning.

Creates the configured account at startup if it does not exist yet. When
no password is configured a random one is generated and logged once, so
a fresh deployment is usable without storing a default credential.
"""

import logging
import secrets
from typing import Optional

from starlette.concurrency import run_in_threadpool

from carmaint.core.security import get_password_hash
from carmaint.models.user import User
from carmaint.repositories.user import UserRepository

logger = logging.getLogger(__name__)


async def ensure_user(
    repo: UserRepository,
    username: str,
    password: Optional[str] = None,
) -> tuple[User, bool]:
    """
    Create ``username`` unless it already exists.

    This function is idempotent; an existing account keeps its password.

    Args:
        repo: User repository bound to an open session
        username: Login name to provision
        password: Plain password, or None to generate one

    Returns:
        (user, created) where ``created`` is False if the account existed
    """
    existing = await repo.find_by_username(username)
    if existing is not None:
        logger.info("User already exists, skipping provisioning", extra={"principal": username})
        return existing, False

    if password is None:
        password = secrets.token_urlsafe(16)
        # Printed once so the operator can log in; never stored in clear.
        logger.warning(
            f"Using generated security password: {password}",
            extra={"principal": username},
        )

    hashed_password = await run_in_threadpool(get_password_hash, password)
    user = await repo.save(User(username=username, hashed_password=hashed_password))
    logger.info("User provisioned", extra={"principal": username})
    return user, True
