from datetime import date

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CarCreate(BaseModel):
    """
    Request schema for creating or replacing a car.

    Attributes:
        make: Manufacturer (1-100 chars)
        model: Model name (1-100 chars)
        year: Model year, 1900 up to next calendar year
    """
    make: str = Field(..., min_length=1, max_length=100, description="Manufacturer")
    model: str = Field(..., min_length=1, max_length=100, description="Model name")
    year: int = Field(..., ge=1900, description="Model year")

    @field_validator("make", "model")
    @classmethod
    def strip_and_require(cls, v: str) -> str:
        """Reject values that are only whitespace."""
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v

    @field_validator("year")
    @classmethod
    def not_too_far_ahead(cls, v: int) -> int:
        """Next year's models are allowed, nothing later."""
        latest = date.today().year + 1
        if v > latest:
            raise ValueError(f"year cannot be later than {latest}")
        return v

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"make": "Toyota", "model": "Corolla", "year": 2018}
        }
    )


class CarResponse(BaseModel):
    id: int
    make: str
    model: str
    year: int

    model_config = ConfigDict(from_attributes=True)
