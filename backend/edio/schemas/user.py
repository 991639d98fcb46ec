"""User profile schemas."""

from uuid import UUID
from typing import Optional
from pydantic import BaseModel, Field

from edio.models.enums import UserRole


class UserProfileResponse(BaseModel):
    id: UUID
    email: Optional[str] = None
    name: Optional[str] = None
    role: UserRole


class UserProfileUpdateRequest(BaseModel):
    name: Optional[str] = Field(default=None, max_length=255)


class UserProfileCreateRequest(BaseModel):
    """Role selection on first sign-in."""
    role: UserRole
    name: Optional[str] = Field(default=None, max_length=255)
