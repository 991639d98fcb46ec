"""
User model - YouTubers and editors.
"""
from typing import TYPE_CHECKING, List, Optional

from sqlmodel import Field, Relationship, SQLModel, Column
from sqlalchemy import Enum as SAEnum

from edio.models.base import BaseUUIDModel
from edio.models.enums import UserRole

if TYPE_CHECKING:
    from edio.models.project import Project


class UserBase(SQLModel):
    """Shared user properties."""
    email: str = Field(
        max_length=255,
        unique=True,
        index=True,
        nullable=False
    )
    name: Optional[str] = Field(default=None, max_length=255)
    avatar_url: Optional[str] = Field(default=None, max_length=500)
    role: UserRole = Field(
        default=UserRole.YOUTUBER,
        sa_column=Column(
            SAEnum(
                UserRole,
                name="user_role",
                values_callable=lambda x: [e.value for e in x],
            ),
            nullable=False,
        ),
    )


class User(UserBase, BaseUUIDModel, table=True):
    """
    User database model.
    Table: users

    The id matches the subject claim of the identity provider's tokens.
    """
    __tablename__ = "users"

    projects: List["Project"] = Relationship(back_populates="owner")
