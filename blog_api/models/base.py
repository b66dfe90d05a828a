"""SQLAlchemy declarative Base and shared model columns."""

import uuid

from sqlalchemy import Column, DateTime, Uuid, func
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""

    pass


def uuid_pk() -> Column:
    """uuid4 primary key column; callers may also assign the id before flush."""
    return Column(Uuid, primary_key=True, default=uuid.uuid4)


class TimestampMixin:
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
