"""Shared columns for table models."""
from datetime import datetime, timezone
from uuid import UUID, uuid4
from sqlmodel import Field, SQLModel


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class BaseUUIDModel(SQLModel):
    """UUID primary key plus creation time; every table inherits it."""
    id: UUID = Field(default_factory=uuid4, primary_key=True, index=True, nullable=False)
    created_at: datetime = Field(default_factory=utc_now, nullable=False)
