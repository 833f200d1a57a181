"""
User model for authentication.

Accounts are checked by HTTP Basic and form login. A single account
is provisioned at startup from configuration.
"""

from sqlalchemy import Column, Integer, String

from carmaint.models.base import Base, ReprMixin, TimestampMixin


class User(Base, ReprMixin, TimestampMixin):
    """
    Login account.

    Attributes:
        id: Integer primary key
        username: Unique username for login
        hashed_password: Bcrypt-hashed password (never store plaintext)
        created_at: Timestamp when the account was created (from TimestampMixin)
        updated_at: Timestamp when the account was last updated (from TimestampMixin)

    hashed_password is left out of repr() so it never reaches the logs.
    """

    __tablename__ = "users"
    __repr_fields__ = ("id", "username")

    id = Column(Integer, primary_key=True, autoincrement=True)

    username = Column(
        String(255),
        nullable=False,
        unique=True,
        index=True,
        doc="Unique username for authentication"
    )

    hashed_password = Column(
        String,
        nullable=False,
        doc="Bcrypt-hashed password (never store plaintext)"
    )
