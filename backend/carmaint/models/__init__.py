"""
SQLAlchemy ORM models for the car maintenance API.

This module exports all database models and the declarative base.
Import models from this module to ensure they're registered with SQLAlchemy.
"""

from carmaint.models.base import Base, TimestampMixin, ReprMixin
from carmaint.models.car import Car
from carmaint.models.maintenance_record import MaintenanceRecord
from carmaint.models.user import User

# Export all models
__all__ = [
    # Base classes
    "Base",
    "TimestampMixin",
    "ReprMixin",
    # Models
    "Car",
    "MaintenanceRecord",
    "User",
]
