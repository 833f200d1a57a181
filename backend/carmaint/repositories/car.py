"""
Car repository for car CRUD operations.
"""

from typing import Iterable, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from carmaint.models.car import Car


class CarRepository:
    """
    Repository for car data access.

    Attributes:
        session: SQLAlchemy async session for database operations
    """

    def __init__(self, session: AsyncSession):
        """
        Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_all(self) -> list[Car]:
        """
        Get all cars, ordered by id.

        Returns:
            List of all Car instances
        """
        stmt = select(Car).order_by(Car.id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def find_by_id(self, car_id: int) -> Optional[Car]:
        """
        Retrieve a car by ID.

        Args:
            car_id: Car identifier

        Returns:
            Car instance if found, None otherwise
        """
        stmt = select(Car).where(Car.id == car_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def find_by_ids(self, car_ids: Iterable[int]) -> dict[int, Car]:
        """
        Retrieve several cars in one query.

        Args:
            car_ids: Car identifiers (duplicates are fine)

        Returns:
            Mapping of id to Car for the ids that exist
        """
        ids = set(car_ids)
        if not ids:
            return {}
        stmt = select(Car).where(Car.id.in_(ids))
        result = await self.session.execute(stmt)
        return {car.id: car for car in result.scalars().all()}

    async def save(self, car: Car) -> Car:
        """
        Insert or update a car and commit.

        Args:
            car: Transient or persistent Car instance

        Returns:
            The same instance, refreshed with generated fields
        """
        self.session.add(car)
        await self.session.commit()
        await self.session.refresh(car)
        return car

    async def delete(self, car: Car) -> None:
        """
        Delete a car and commit.

        Args:
            car: Persistent Car instance
        """
        await self.session.delete(car)
        await self.session.commit()
