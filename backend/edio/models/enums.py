"""
Database ENUM types matching PostgreSQL definitions.
These enums are used for type safety in SQLModel classes.
"""
from enum import Enum


class UserRole(str, Enum):
    """Account roles."""
    YOUTUBER = "youtuber"
    EDITOR = "editor"


class ProjectStatus(str, Enum):
    """Review workflow status of a project's edit."""
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    IN_REVIEW = "in_review"
    NEEDS_CHANGES = "needs_changes"
    APPROVED = "approved"
    REJECTED = "rejected"


class PublishingStatus(str, Enum):
    """
    Publish-to-YouTube lifecycle.

    idle -> publishing -> completed | failed, failed -> publishing.
    completed is terminal.
    """
    IDLE = "idle"
    PUBLISHING = "publishing"
    COMPLETED = "completed"
    FAILED = "failed"
