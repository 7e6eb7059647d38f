"""
Base configurations and mixins for database models.

Every content record carries a 24-character hex identifier and application-side
creation/update timestamps. Timestamps are generated in Python with microsecond
precision so that the "newest first" tie-break between projects is stable on every
backend, including SQLite.
"""

from datetime import UTC, datetime

from sqlalchemy import Column, DateTime, String, inspect
from sqlalchemy.orm import declarative_base

from app.utils.object_id import new_object_id


def utc_now() -> datetime:
    return datetime.now(UTC)


class CustomBase:
    """
    Custom base class for SQLAlchemy models with dictionary serialization.

    ``to_dict`` converts datetime values to ISO strings so records can be logged or
    returned without further conversion.
    """

    def to_dict(self) -> dict:
        d = {}
        if not self:
            return d
        for column in inspect(self).mapper.column_attrs:
            value = getattr(self, column.key)
            if isinstance(value, datetime):
                d[column.key] = value.isoformat()
            else:
                d[column.key] = value
        return d


Base = declarative_base(cls=CustomBase)


class TimestampMixin:
    """
    Adds created_at/updated_at columns.

    created_at is set once on insert; updated_at is refreshed on every ORM update.
    """

    created_at = Column(
        DateTime(timezone=True),
        default=utc_now,
        nullable=False,
        index=True,
        comment="Timestamp when the record was created",
    )
    updated_at = Column(
        DateTime(timezone=True),
        default=utc_now,
        onupdate=utc_now,
        nullable=False,
        comment="Timestamp when the record was last updated",
    )


class ObjectIdMixin:
    """Adds a 24-character hex primary key in the ObjectId layout."""

    id = Column(
        String(24),
        primary_key=True,
        default=new_object_id,
        comment="Primary key, 24 lowercase hex characters",
    )


__all__ = ["Base", "TimestampMixin", "ObjectIdMixin", "utc_now"]
