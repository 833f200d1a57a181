"""
Pydantic schemas for maintenance records.

The request body never carries the owning car; it comes from the URL.
"""

import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from carmaint.models.car import Car
from carmaint.models.maintenance_record import MaintenanceRecord
from carmaint.schemas.car import CarResponse


class MaintenanceRecordCreate(BaseModel):
    """
    Request schema for adding a record to a car.

    Attributes:
        date: Date the service was performed (ISO 8601)
        description: What was done (1-255 chars)
        cost: Amount paid, a finite number of zero or more
    """
    date: datetime.date
    description: str = Field(..., min_length=1, max_length=255)
    cost: float = Field(..., ge=0, allow_inf_nan=False)

    @field_validator("description")
    @classmethod
    def strip_description(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"date": "2024-01-15", "description": "Oil change", "cost": 49.99}
        }
    )


class MaintenanceRecordResponse(BaseModel):
    """
    A stored record with its owning car resolved.

    Attributes:
        id: Store-generated identifier
        date: Date the service was performed
        description: What was done
        cost: Amount paid
        car: The owning car
    """
    id: int
    date: datetime.date
    description: str
    cost: float
    car: CarResponse

    @classmethod
    def from_entities(cls, record: MaintenanceRecord, car: Car) -> "MaintenanceRecordResponse":
        """Build the response from a record and the car it points at."""
        return cls(
            id=record.id,
            date=record.date,
            description=record.description,
            cost=record.cost,
            car=CarResponse.model_validate(car),
        )
