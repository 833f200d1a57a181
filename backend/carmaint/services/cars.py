"""
Car handling.

Deleting a car that still owns maintenance records is refused with a
conflict; the records and the car are left as they were.
"""

import logging

from carmaint.core.errors import ConflictError, ResourceNotFoundError
from carmaint.models.car import Car
from carmaint.repositories.car import CarRepository
from carmaint.repositories.maintenance_record import MaintenanceRecordRepository
from carmaint.schemas.car import CarCreate, CarResponse

logger = logging.getLogger(__name__)


class CarService:
    """
    Operations on cars.

    Attributes:
        cars: Repository for cars
        records: Repository used to check for owned records before deletion
    """

    def __init__(self, cars: CarRepository, records: MaintenanceRecordRepository):
        self.cars = cars
        self.records = records

    async def list_all(self) -> list[CarResponse]:
        cars = await self.cars.find_all()
        return [CarResponse.model_validate(car) for car in cars]

    async def get(self, car_id: int) -> CarResponse:
        car = await self._get_or_raise(car_id)
        return CarResponse.model_validate(car)

    async def create(self, payload: CarCreate) -> CarResponse:
        car = await self.cars.save(
            Car(make=payload.make, model=payload.model, year=payload.year)
        )
        logger.info("Car created: %r", car, extra={"car_id": car.id})
        return CarResponse.model_validate(car)

    async def update(self, car_id: int, payload: CarCreate) -> CarResponse:
        """
        Replace make, model and year of an existing car.

        Raises:
            ResourceNotFoundError: If no car has ``car_id``
        """
        car = await self._get_or_raise(car_id)
        car.make = payload.make
        car.model = payload.model
        car.year = payload.year
        car = await self.cars.save(car)
        logger.info("Car updated: %r", car, extra={"car_id": car.id})
        return CarResponse.model_validate(car)

    async def delete(self, car_id: int) -> None:
        """
        Delete a car that owns no maintenance records.

        Raises:
            ResourceNotFoundError: If no car has ``car_id``
            ConflictError: If the car still owns records
        """
        car = await self._get_or_raise(car_id)

        owned = await self.records.count_by_car(car_id)
        if owned:
            raise ConflictError(
                f"Car '{car_id}' has {owned} maintenance record(s) and cannot be deleted"
            )

        await self.cars.delete(car)
        logger.info("Car deleted", extra={"car_id": car_id})

    async def _get_or_raise(self, car_id: int) -> Car:
        car = await self.cars.find_by_id(car_id)
        if car is None:
            raise ResourceNotFoundError("Car", str(car_id))
        return car
