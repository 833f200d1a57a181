"""
Maintenance record model.

Each record belongs to exactly one car. The link is a plain foreign key
column; the owning car is loaded with an explicit repository lookup
rather than an ORM relationship.
"""

from sqlalchemy import Column, Date, Float, ForeignKey, Index, Integer, String

from carmaint.models.base import Base, ReprMixin


class MaintenanceRecord(Base, ReprMixin):
    """
    A dated, costed service performed on a car.

    Attributes:
        id: Integer primary key, assigned by the database on insert
        date: Calendar date of the service
        description: Free-text label
        cost: Non-negative amount (no currency)
        car_id: Owning car; deleting a car that still has records is refused
    """

    __tablename__ = "maintenance_records"
    __repr_fields__ = ("id", "car_id", "date", "description")

    id = Column(
        Integer,
        primary_key=True,
        autoincrement=True,
        doc="Store-generated identifier"
    )

    date = Column(
        Date,
        nullable=False,
        doc="Date the service was performed"
    )

    description = Column(
        String(255),
        nullable=False,
        doc="What was done"
    )

    cost = Column(
        Float,
        nullable=False,
        default=0.0,
        doc="Amount paid"
    )

    car_id = Column(
        Integer,
        ForeignKey("cars.id", ondelete="RESTRICT"),
        nullable=False,
        doc="Owning car"
    )

    __table_args__ = (
        Index("idx_maintenance_records_car_id", "car_id"),
    )
