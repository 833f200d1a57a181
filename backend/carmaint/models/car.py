"""
Car model.

A car is the parent entity; maintenance records point at it
through ``maintenance_records.car_id``.
"""

from sqlalchemy import Column, Integer, String

from carmaint.models.base import Base, ReprMixin


class Car(Base, ReprMixin):
    """
    A tracked vehicle.

    Attributes:
        id: Integer primary key, assigned by the database on insert
        make: Manufacturer (e.g. "Toyota")
        model: Model name (e.g. "Corolla")
        year: Model year
    """

    __tablename__ = "cars"
    __repr_fields__ = ("id", "make", "model", "year")

    id = Column(
        Integer,
        primary_key=True,
        autoincrement=True,
        doc="Store-generated identifier"
    )

    make = Column(
        String(100),
        nullable=False,
        doc="Manufacturer"
    )

    model = Column(
        String(100),
        nullable=False,
        doc="Model name"
    )

    year = Column(
        Integer,
        nullable=False,
        doc="Model year"
    )
