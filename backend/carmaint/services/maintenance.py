"""
Maintenance record handling.

Lists every record and attaches new records to an existing car. The
owning car always comes from the caller's path parameter and is looked
up explicitly before anything is written.
"""

import logging

from carmaint.core.errors import ResourceNotFoundError
from carmaint.models.maintenance_record import MaintenanceRecord
from carmaint.repositories.car import CarRepository
from carmaint.repositories.maintenance_record import MaintenanceRecordRepository
from carmaint.schemas.maintenance import (
    MaintenanceRecordCreate,
    MaintenanceRecordResponse,
)

logger = logging.getLogger(__name__)


class MaintenanceService:
    """
    Operations on maintenance records.

    Attributes:
        records: Repository for maintenance records
        cars: Repository used to resolve owning cars
    """

    def __init__(self, records: MaintenanceRecordRepository, cars: CarRepository):
        self.records = records
        self.cars = cars

    async def list_all(self) -> list[MaintenanceRecordResponse]:
        """
        Return every stored record with its car resolved.

        Returns:
            Records ordered by id
        """
        records = await self.records.find_all()
        cars = await self.cars.find_by_ids(record.car_id for record in records)
        return [
            MaintenanceRecordResponse.from_entities(record, cars[record.car_id])
            for record in records
        ]

    async def create(
        self, car_id: int, payload: MaintenanceRecordCreate
    ) -> MaintenanceRecordResponse:
        """
        Attach a new record to an existing car.

        Args:
            car_id: Identifier of the owning car
            payload: Record fields (date, description, cost)

        Returns:
            The stored record with its generated id and owning car

        Raises:
            ResourceNotFoundError: If no car has ``car_id``; nothing is stored
        """
        car = await self.cars.find_by_id(car_id)
        if car is None:
            raise ResourceNotFoundError("Car", str(car_id))

        record = MaintenanceRecord(
            date=payload.date,
            description=payload.description,
            cost=payload.cost,
            car_id=car.id,
        )
        record = await self.records.save(record)

        logger.info(
            "Maintenance record created: %r",
            record,
            extra={"car_id": car.id, "record_id": record.id},
        )
        return MaintenanceRecordResponse.from_entities(record, car)
