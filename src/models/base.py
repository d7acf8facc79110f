"""Base model classes shared by all tables."""

from typing import Optional
from datetime import datetime, timezone
from sqlmodel import Field, SQLModel
from sqlalchemy import DateTime


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


class TimestampMixin(SQLModel):
    """Creation and update timestamps, stored with time zone."""

    created_at: datetime = Field(
        default_factory=utc_now,
        sa_type=DateTime(timezone=True),
        nullable=False
    )
    updated_at: Optional[datetime] = Field(default=None, sa_type=DateTime(timezone=True))


class AuditMixin(SQLModel):
    """Tracks which lab user created or last changed a row."""

    created_by: Optional[int] = Field(default=None)
    updated_by: Optional[int] = Field(default=None)


class BaseModel(TimestampMixin, AuditMixin):
    """Base for every table model."""

    def touch(self, updated_by: Optional[int] = None) -> None:
        """Mark the row as updated now."""
        self.updated_at = utc_now()
        if updated_by is not None:
            self.updated_by = updated_by
