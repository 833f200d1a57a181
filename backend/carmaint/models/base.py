"""
Declarative base and shared mixins for the ORM models.
"""

from datetime import datetime, timezone

from sqlalchemy import Column, String, text
from sqlalchemy.orm import declarative_base


Base = declarative_base()


def utc_now_iso() -> str:
    """Current UTC time as an ISO 8601 string, e.g. "2025-01-15T10:30:45+00:00"."""
    return datetime.now(timezone.utc).isoformat()


class TimestampMixin:
    """
    ``created_at`` / ``updated_at`` columns stored as ISO 8601 text.

    ``updated_at`` is refreshed by SQLAlchemy on every ORM update.
    """

    created_at = Column(
        String,
        nullable=False,
        default=utc_now_iso,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    updated_at = Column(
        String,
        nullable=False,
        default=utc_now_iso,
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=utc_now_iso,
    )


class ReprMixin:
    """
    Readable ``repr`` built from the columns listed in ``__repr_fields__``.

    Example:
        >>> Car(id=1, make="Toyota", model="Corolla", year=2018)
        Car(id=1, make='Toyota', model='Corolla', year=2018)
    """

    __repr_fields__ = ("id",)

    def __repr__(self) -> str:
        attrs = ", ".join(
            f"{name}={getattr(self, name)!r}" for name in self.__repr_fields__
        )
        return f"{type(self).__name__}({attrs})"
