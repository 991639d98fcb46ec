"""
Project model - a unit of collaboration between a YouTuber and editors.
"""

from datetime import datetime
from typing import TYPE_CHECKING, Optional
from uuid import UUID

from sqlmodel import Field, Relationship, SQLModel, Column
from sqlalchemy import Enum as SAEnum, UniqueConstraint

from edio.models.base import BaseUUIDModel, utc_now
from edio.models.enums import ProjectStatus, PublishingStatus

if TYPE_CHECKING:
    from edio.models.user import User


class ProjectBase(SQLModel):
    """Shared project properties."""

    title: str = Field(max_length=255, nullable=False)
    video_title: Optional[str] = Field(default=None, max_length=255)
    description: Optional[str] = Field(default=None)
    youtube_channel_id: Optional[str] = Field(default=None, max_length=100)
    status: ProjectStatus = Field(
        default=ProjectStatus.PENDING,
        sa_column=Column(
            SAEnum(
                ProjectStatus,
                name="project_status",
                values_callable=lambda x: [e.value for e in x],
            ),
            nullable=False,
        ),
    )
    publishing_status: PublishingStatus = Field(
        default=PublishingStatus.IDLE,
        sa_column=Column(
            SAEnum(
                PublishingStatus,
                name="publishing_status",
                values_callable=lambda x: [e.value for e in x],
            ),
            nullable=False,
        ),
    )


class Project(ProjectBase, BaseUUIDModel, table=True):
    """
    Project database model.

    Table: projects

    publishing_status is only ever written through the publishing
    tracker's compare-and-set; everything else goes through update_project.
    """

    __tablename__ = "projects"

    owner_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)

    updated_at: datetime = Field(
        default_factory=utc_now, nullable=False, sa_column_kwargs={"onupdate": utc_now}
    )

    owner: Optional["User"] = Relationship(back_populates="projects")


class ProjectEditor(BaseUUIDModel, table=True):
    """
    Editor assigned to a project.

    Table: project_editors
    """

    __tablename__ = "project_editors"
    __table_args__ = (UniqueConstraint("project_id", "editor_id"),)

    project_id: UUID = Field(foreign_key="projects.id", nullable=False, index=True)
    editor_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)
