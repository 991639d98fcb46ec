"""
SQLModel ORM models for the application.
All models are exported here for convenient imports:
    from edio.models import User, Project, PublishingStatus, ...
"""

from edio.models.enums import ProjectStatus, PublishingStatus, UserRole
from edio.models.base import BaseUUIDModel, utc_now
from edio.models.user import User
from edio.models.project import Project, ProjectEditor

__all__ = [
    # Enums
    "ProjectStatus",
    "PublishingStatus",
    "UserRole",
    # Base
    "BaseUUIDModel",
    "utc_now",
    # Tables
    "User",
    "Project",
    "ProjectEditor",
]
