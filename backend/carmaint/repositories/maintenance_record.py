"""
Maintenance record repository.

Records are only ever listed and inserted; there is no update or delete.
"""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from carmaint.models.maintenance_record import MaintenanceRecord


class MaintenanceRecordRepository:
    """
    Repository for maintenance record data access.

    Attributes:
        session: SQLAlchemy async session for database operations
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_all(self) -> list[MaintenanceRecord]:
        """
        Get all maintenance records, ordered by id.

        Returns:
            List of all MaintenanceRecord instances
        """
        stmt = select(MaintenanceRecord).order_by(MaintenanceRecord.id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def save(self, record: MaintenanceRecord) -> MaintenanceRecord:
        """
        Insert a maintenance record and commit.

        Args:
            record: Record with ``car_id`` already set

        Returns:
            The same instance, refreshed with its generated id
        """
        self.session.add(record)
        await self.session.commit()
        await self.session.refresh(record)
        return record

    async def count_by_car(self, car_id: int) -> int:
        """
        Number of records owned by one car.

        Args:
            car_id: Car identifier

        Returns:
            Record count (0 when the car has none or does not exist)
        """
        stmt = (
            select(func.count())
            .select_from(MaintenanceRecord)
            .where(MaintenanceRecord.car_id == car_id)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one()
