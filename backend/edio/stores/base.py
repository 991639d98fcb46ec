"""Project and user store ports."""

from abc import ABC, abstractmethod
from typing import Any, List, Optional
from uuid import UUID

from edio.models import Project, PublishingStatus, User, UserRole


# Columns callers may change through update_project
UPDATABLE_FIELDS = frozenset(
    {"title", "video_title", "description", "youtube_channel_id", "status"}
)

# Subset of UPDATABLE_FIELDS backed by NOT NULL columns
REQUIRED_FIELDS = frozenset({"title", "status"})


class ProjectStore(ABC):
    """
    Persistent record store for projects.

    Implementations raise StoreUnavailableError for any backend failure
    and return None / False for a missing project.
    """

    @abstractmethod
    async def create_project(
        self,
        owner_id: UUID,
        title: str,
        video_title: Optional[str] = None,
        description: Optional[str] = None,
        youtube_channel_id: Optional[str] = None,
    ) -> Project:
        """Create a project in review status pending and publishing status idle."""

    @abstractmethod
    async def get_project(self, project_id: UUID) -> Optional[Project]:
        ...

    @abstractmethod
    async def list_projects_for_owner(self, owner_id: UUID) -> List[Project]:
        """List an owner's projects, most recently updated first."""

    @abstractmethod
    async def update_project(self, project_id: UUID, **fields: Any) -> Optional[Project]:
        """Update descriptive fields. publishing_status is not accepted here."""

    @abstractmethod
    async def get_publishing_status(self, project_id: UUID) -> Optional[PublishingStatus]:
        ...

    @abstractmethod
    async def compare_and_set_publishing_status(
        self,
        project_id: UUID,
        expected: PublishingStatus,
        new: PublishingStatus,
    ) -> bool:
        """
        Atomically set publishing_status to new if it currently equals expected.

        Returns False when the project is missing or holds another value.
        """

    # Editor assignments

    @abstractmethod
    async def set_project_editor(self, project_id: UUID, editor_id: Optional[UUID]) -> None:
        """Replace the project's editors with editor_id, or clear them when None."""

    @abstractmethod
    async def list_editor_ids(self, project_id: UUID) -> List[UUID]:
        ...

    @abstractmethod
    async def list_projects_for_editor(self, editor_id: UUID) -> List[Project]:
        """Projects the editor is assigned to, most recently updated first."""


class UserStore(ABC):
    """Profiles of authenticated users, keyed by the token subject."""

    @abstractmethod
    async def get_user(self, user_id: UUID) -> Optional[User]:
        ...

    @abstractmethod
    async def create_user(
        self,
        user_id: UUID,
        email: str,
        role: UserRole,
        name: Optional[str] = None,
    ) -> User:
        """Create a profile; raises ValueError if one already exists."""

    @abstractmethod
    async def update_name(self, user_id: UUID, name: str) -> Optional[User]:
        ...


def check_updatable(fields: dict) -> None:
    """Reject updates outside the descriptive columns, or nulls in required ones."""
    unknown = set(fields) - UPDATABLE_FIELDS
    if unknown:
        raise ValueError(f"Fields cannot be updated: {', '.join(sorted(unknown))}")
    nulled = sorted(name for name in REQUIRED_FIELDS & set(fields) if fields[name] is None)
    if nulled:
        raise ValueError(f"Fields cannot be null: {', '.join(nulled)}")
