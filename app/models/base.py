"""Declarative base and shared columns for all models."""

import uuid
from datetime import datetime, UTC

from sqlalchemy import DateTime
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utcnow() -> datetime:
    return datetime.now(UTC).replace(tzinfo=None)


def new_id() -> str:
    """Opaque primary key; random so ids cannot be enumerated"""
    return str(uuid.uuid4())


class Base(DeclarativeBase):
    pass


class TimestampMixin:
    """Created / updated timestamps added to every table"""

    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=utcnow, onupdate=utcnow, nullable=False
    )
