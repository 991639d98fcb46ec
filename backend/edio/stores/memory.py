"""In-process stores for tests and local development."""

import asyncio
from typing import Any, Dict, List, Optional, Set
from uuid import UUID

from edio.models import Project, PublishingStatus, User, UserRole, utc_now
from edio.stores.base import ProjectStore, UserStore, check_updatable


def _newest_first(projects) -> List[Project]:
    return sorted(projects, key=lambda p: p.updated_at, reverse=True)


class InMemoryProjectStore(ProjectStore):
    """
    Dict-backed store.

    Writes are serialized by a single lock so compare-and-set behaves
    like a conditional UPDATE against one row.
    """

    def __init__(self) -> None:
        self._projects: Dict[UUID, Project] = {}
        self._editors: Dict[UUID, Set[UUID]] = {}
        self._lock = asyncio.Lock()

    async def create_project(
        self,
        owner_id: UUID,
        title: str,
        video_title: Optional[str] = None,
        description: Optional[str] = None,
        youtube_channel_id: Optional[str] = None,
    ) -> Project:
        project = Project(
            owner_id=owner_id,
            title=title,
            video_title=video_title,
            description=description,
            youtube_channel_id=youtube_channel_id,
        )
        async with self._lock:
            self._projects[project.id] = project
        return project

    async def get_project(self, project_id: UUID) -> Optional[Project]:
        return self._projects.get(project_id)

    async def list_projects_for_owner(self, owner_id: UUID) -> List[Project]:
        return _newest_first(p for p in self._projects.values() if p.owner_id == owner_id)

    async def update_project(self, project_id: UUID, **fields: Any) -> Optional[Project]:
        check_updatable(fields)
        async with self._lock:
            project = self._projects.get(project_id)
            if project is None:
                return None
            for name, value in fields.items():
                setattr(project, name, value)
            project.updated_at = utc_now()
        return project

    async def get_publishing_status(self, project_id: UUID) -> Optional[PublishingStatus]:
        project = self._projects.get(project_id)
        return project.publishing_status if project else None

    async def compare_and_set_publishing_status(
        self,
        project_id: UUID,
        expected: PublishingStatus,
        new: PublishingStatus,
    ) -> bool:
        async with self._lock:
            project = self._projects.get(project_id)
            if project is None or project.publishing_status != expected:
                return False
            project.publishing_status = new
            project.updated_at = utc_now()
            return True

    async def set_project_editor(self, project_id: UUID, editor_id: Optional[UUID]) -> None:
        async with self._lock:
            if editor_id is None:
                self._editors.pop(project_id, None)
            else:
                self._editors[project_id] = {editor_id}

    async def list_editor_ids(self, project_id: UUID) -> List[UUID]:
        return sorted(self._editors.get(project_id, ()), key=str)

    async def list_projects_for_editor(self, editor_id: UUID) -> List[Project]:
        return _newest_first(
            self._projects[pid]
            for pid, editors in self._editors.items()
            if editor_id in editors and pid in self._projects
        )


class InMemoryUserStore(UserStore):
    """Dict-backed user profiles."""

    def __init__(self) -> None:
        self._users: Dict[UUID, User] = {}

    async def get_user(self, user_id: UUID) -> Optional[User]:
        return self._users.get(user_id)

    async def create_user(
        self,
        user_id: UUID,
        email: str,
        role: UserRole,
        name: Optional[str] = None,
    ) -> User:
        if user_id in self._users:
            raise ValueError("User profile already exists")
        user = User(id=user_id, email=email, role=role, name=name)
        self._users[user_id] = user
        return user

    async def update_name(self, user_id: UUID, name: str) -> Optional[User]:
        user = self._users.get(user_id)
        if user:
            user.name = name
        return user
