"""
SQLAlchemy declarative base and common mixins.

Dependencies: sqlalchemy
System role: Foundation for the registry ORM models
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Declarative base; models inheriting it are created by create_all."""

    pass


def new_document_id() -> str:
    return str(uuid.uuid4())


class StringIdMixin:
    """
    Mixin providing a string primary key.

    Document ids are opaque strings shared with the external upload layer
    and stored verbatim in chunk metadata; new rows get a UUID4 string.
    """

    id: Mapped[str] = mapped_column(
        String(64),
        primary_key=True,
        default=new_document_id,
        nullable=False,
    )


class TimestampMixin:
    """
    Mixin providing UTC created_at / updated_at columns.

    updated_at is refreshed on every ORM update via onupdate.
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
