"""Base model class for all SQLAlchemy models."""

from datetime import datetime

from sqlalchemy import DateTime
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from core.utils import utc_now


class Base(DeclarativeBase):
    """Declarative base shared by all models."""

    pass


class TimestampMixin:
    """Row-level created_at / updated_at.

    Stamped in Python with microsecond resolution; SQLite's CURRENT_TIMESTAMP
    only resolves whole seconds, which is too coarse to order rows by.
    Deletes are hard deletes; there is no soft-delete or archive tier.
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now
    )
