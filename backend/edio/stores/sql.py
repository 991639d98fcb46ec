"""PostgreSQL-backed project and user stores."""

from typing import Any, List, Optional
from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from edio.exceptions import StoreUnavailableError
from edio.models import Project, ProjectEditor, PublishingStatus, User, UserRole, utc_now
from edio.stores.base import ProjectStore, UserStore, check_updatable
from edio.utils.logging import get_logger

logger = get_logger(__name__)


class SqlProjectStore(ProjectStore):
    """Project store over an async SQLAlchemy session."""

    def __init__(self, session: AsyncSession):
        self.session = session

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
        try:
            self.session.add(project)
            await self.session.commit()
            await self.session.refresh(project)
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise StoreUnavailableError("Failed to create project", cause=e) from e
        return project

    async def get_project(self, project_id: UUID) -> Optional[Project]:
        stmt = select(Project).where(Project.id == project_id)
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            raise StoreUnavailableError("Failed to read project", cause=e) from e
        return result.scalar_one_or_none()

    async def list_projects_for_owner(self, owner_id: UUID) -> List[Project]:
        stmt = (
            select(Project)
            .where(Project.owner_id == owner_id)
            .order_by(Project.updated_at.desc())
        )
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            raise StoreUnavailableError("Failed to list projects", cause=e) from e
        return list(result.scalars().all())

    async def update_project(self, project_id: UUID, **fields: Any) -> Optional[Project]:
        check_updatable(fields)
        try:
            project = await self.session.get(Project, project_id)
            if project is None:
                return None
            for name, value in fields.items():
                setattr(project, name, value)
            await self.session.commit()
            await self.session.refresh(project)
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise StoreUnavailableError("Failed to update project", cause=e) from e
        return project

    async def get_publishing_status(self, project_id: UUID) -> Optional[PublishingStatus]:
        stmt = select(Project.publishing_status).where(Project.id == project_id)
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            raise StoreUnavailableError("Failed to read publishing status", cause=e) from e
        return result.scalar_one_or_none()

    async def compare_and_set_publishing_status(
        self,
        project_id: UUID,
        expected: PublishingStatus,
        new: PublishingStatus,
    ) -> bool:
        # Conditional UPDATE: the row lock taken by the UPDATE makes a second
        # writer from the same starting state match zero rows.
        stmt = (
            update(Project)
            .where(Project.id == project_id, Project.publishing_status == expected)
            .values(publishing_status=new, updated_at=utc_now())
        )
        try:
            result = await self.session.execute(stmt)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise StoreUnavailableError("Failed to write publishing status", cause=e) from e

        swapped = result.rowcount == 1
        logger.debug(
            "Publishing status compare-and-set",
            project_id=str(project_id),
            expected=expected.value,
            new=new.value,
            swapped=swapped,
        )
        return swapped

    async def set_project_editor(self, project_id: UUID, editor_id: Optional[UUID]) -> None:
        try:
            await self.session.execute(
                delete(ProjectEditor).where(ProjectEditor.project_id == project_id)
            )
            if editor_id is not None:
                self.session.add(ProjectEditor(project_id=project_id, editor_id=editor_id))
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise StoreUnavailableError("Failed to assign project editor", cause=e) from e

    async def list_editor_ids(self, project_id: UUID) -> List[UUID]:
        stmt = select(ProjectEditor.editor_id).where(ProjectEditor.project_id == project_id)
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            raise StoreUnavailableError("Failed to read project editors", cause=e) from e
        return sorted(result.scalars().all(), key=str)

    async def list_projects_for_editor(self, editor_id: UUID) -> List[Project]:
        stmt = (
            select(Project)
            .join(ProjectEditor, ProjectEditor.project_id == Project.id)
            .where(ProjectEditor.editor_id == editor_id)
            .order_by(Project.updated_at.desc())
        )
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            raise StoreUnavailableError("Failed to list projects", cause=e) from e
        return list(result.scalars().all())


class SqlUserStore(UserStore):
    """User profiles over an async SQLAlchemy session."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_user(self, user_id: UUID) -> Optional[User]:
        stmt = select(User).where(User.id == user_id)
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            raise StoreUnavailableError("Failed to read user profile", cause=e) from e
        return result.scalar_one_or_none()

    async def create_user(
        self,
        user_id: UUID,
        email: str,
        role: UserRole,
        name: Optional[str] = None,
    ) -> User:
        user = User(id=user_id, email=email, role=role, name=name)
        try:
            self.session.add(user)
            await self.session.commit()
            await self.session.refresh(user)
        except IntegrityError as e:
            await self.session.rollback()
            raise ValueError("User profile already exists") from e
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise StoreUnavailableError("Failed to create user profile", cause=e) from e
        return user

    async def update_name(self, user_id: UUID, name: str) -> Optional[User]:
        try:
            user = await self.session.get(User, user_id)
            if user:
                user.name = name
                await self.session.commit()
                await self.session.refresh(user)
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise StoreUnavailableError("Failed to update user profile", cause=e) from e
        return user
