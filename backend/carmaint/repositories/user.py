"""
User repository for login accounts.
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from carmaint.models.user import User


class UserRepository:
    """Repository for user data access."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_by_username(self, username: str) -> Optional[User]:
        """
        Retrieve a user by username.

        Args:
            username: Login name (exact match)

        Returns:
            User if found, None otherwise
        """
        stmt = select(User).where(User.username == username)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def save(self, user: User) -> User:
        """Insert or update a user and commit."""
        self.session.add(user)
        await self.session.commit()
        await self.session.refresh(user)
        return user
