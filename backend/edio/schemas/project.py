"""Project-related schemas."""

from datetime import datetime
from typing import List, Optional
from uuid import UUID
from pydantic import BaseModel, ConfigDict, Field, field_validator

from edio.models.enums import ProjectStatus, PublishingStatus


class ProjectCreateRequest(BaseModel):
    """Request body for creating a new project."""

    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = Field(default=None, max_length=255, alias="projectTitle")
    video_title: Optional[str] = Field(default=None, max_length=255, alias="videoTitle")
    description: Optional[str] = None
    youtube_channel_id: Optional[str] = Field(default=None, max_length=100)

    @field_validator("title", mode="before")
    @classmethod
    def strip_title(cls, v):
        """Blank titles count as missing; the route answers 400."""
        if isinstance(v, str):
            return v.strip() or None
        return v


class ProjectUpdateRequest(BaseModel):
    """Partial update of a project's descriptive fields and review status."""

    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = Field(default=None, max_length=255, min_length=1)
    video_title: Optional[str] = Field(default=None, max_length=255, alias="videoTitle")
    description: Optional[str] = None
    youtube_channel_id: Optional[str] = Field(default=None, max_length=100)
    status: Optional[ProjectStatus] = None

    @field_validator("title", mode="before")
    @classmethod
    def strip_title(cls, v):
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator("title", "status")
    @classmethod
    def reject_null(cls, v, info):
        # Omit a field to leave it unchanged; null would clear a NOT NULL column
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return v


class ProjectCreateResponse(BaseModel):
    projectId: UUID


class ProjectResponse(BaseModel):
    """Project response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    owner_id: UUID
    title: str
    video_title: Optional[str] = None
    description: Optional[str] = None
    youtube_channel_id: Optional[str] = None
    status: ProjectStatus
    publishing_status: PublishingStatus
    created_at: datetime
    updated_at: datetime


class ProjectListResponse(BaseModel):
    """The caller's projects."""

    projects: List[ProjectResponse]
    isCreator: bool


class PublishingStatusResponse(BaseModel):
    status: PublishingStatus


class PublishingStatusUpdateRequest(BaseModel):
    """Reported by the publish job as it progresses."""

    status: PublishingStatus


class PublishResponse(BaseModel):
    success: bool
    status: PublishingStatus


class ProjectEditorRequest(BaseModel):
    """Assign an editor, or pass "unassigned" to remove all editors."""

    editorId: str = Field(..., min_length=1)


class ProjectEditorsResponse(BaseModel):
    editors: List[UUID]
