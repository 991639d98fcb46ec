"""SqlProjectStore and SqlUserStore against a throwaway SQLite database."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Awaitable, Callable
from uuid import uuid4

import pytest
from sqlalchemy import text
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlmodel import SQLModel

from edio.exceptions import StoreUnavailableError
from edio.models import ProjectStatus, PublishingStatus, User, UserRole
from edio.stores import SqlProjectStore, SqlUserStore

Scenario = Callable[[async_sessionmaker], Awaitable[None]]


@pytest.fixture()
def run_sql(tmp_path: Path) -> Callable[[Scenario], None]:
    """Run a scenario against fresh tables; one session per store call."""

    def run(scenario: Scenario) -> None:
        async def main():
            engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'edio.db'}")
            async with engine.begin() as conn:
                await conn.run_sync(SQLModel.metadata.create_all)
            try:
                await scenario(async_sessionmaker(engine, expire_on_commit=False))
            finally:
                await engine.dispose()

        asyncio.run(main())

    return run


async def _owner(sessions: async_sessionmaker, role: UserRole = UserRole.YOUTUBER) -> User:
    async with sessions() as session:
        return await SqlUserStore(session).create_user(
            uuid4(), f"{uuid4().hex}@example.com", role, name="Someone"
        )


def test_create_and_read_project(run_sql) -> None:
    async def scenario(sessions):
        owner = await _owner(sessions)
        async with sessions() as session:
            created = await SqlProjectStore(session).create_project(
                owner_id=owner.id, title="Studio tour", youtube_channel_id="UC9"
            )
        async with sessions() as session:
            store = SqlProjectStore(session)
            fetched = await store.get_project(created.id)
            listed = await store.list_projects_for_owner(owner.id)
            missing = await store.get_project(uuid4())

        assert fetched.title == "Studio tour"
        assert fetched.status is ProjectStatus.PENDING
        assert fetched.publishing_status is PublishingStatus.IDLE
        assert [p.id for p in listed] == [created.id]
        assert missing is None

    run_sql(scenario)


def test_compare_and_set(run_sql) -> None:
    async def scenario(sessions):
        owner = await _owner(sessions)
        async with sessions() as session:
            project = await SqlProjectStore(session).create_project(owner_id=owner.id, title="Launch")

        async with sessions() as session:
            won = await SqlProjectStore(session).compare_and_set_publishing_status(
                project.id, PublishingStatus.IDLE, PublishingStatus.PUBLISHING
            )
        async with sessions() as session:
            stale = await SqlProjectStore(session).compare_and_set_publishing_status(
                project.id, PublishingStatus.IDLE, PublishingStatus.PUBLISHING
            )
        async with sessions() as session:
            missing = await SqlProjectStore(session).compare_and_set_publishing_status(
                uuid4(), PublishingStatus.IDLE, PublishingStatus.PUBLISHING
            )
        async with sessions() as session:
            status = await SqlProjectStore(session).get_publishing_status(project.id)

        assert won is True
        assert stale is False
        assert missing is False
        assert status is PublishingStatus.PUBLISHING

    run_sql(scenario)


@pytest.mark.parametrize(
    "fields",
    [{"publishing_status": PublishingStatus.COMPLETED}, {"title": None}, {"status": None}],
)
def test_update_project_rejects_protected_fields(run_sql, fields) -> None:
    async def scenario(sessions):
        owner = await _owner(sessions)
        async with sessions() as session:
            project = await SqlProjectStore(session).create_project(owner_id=owner.id, title="Launch")

        async with sessions() as session:
            with pytest.raises(ValueError):
                await SqlProjectStore(session).update_project(project.id, **fields)

        async with sessions() as session:
            unchanged = await SqlProjectStore(session).get_project(project.id)

        assert unchanged.title == "Launch"
        assert unchanged.status is ProjectStatus.PENDING
        assert unchanged.publishing_status is PublishingStatus.IDLE

    run_sql(scenario)


def test_update_project(run_sql) -> None:
    async def scenario(sessions):
        owner = await _owner(sessions)
        async with sessions() as session:
            project = await SqlProjectStore(session).create_project(owner_id=owner.id, title="Launch")

        async with sessions() as session:
            updated = await SqlProjectStore(session).update_project(
                project.id, title="Launch day", status=ProjectStatus.APPROVED
            )
        async with sessions() as session:
            missing = await SqlProjectStore(session).update_project(uuid4(), title="x")

        assert updated.title == "Launch day"
        assert updated.status is ProjectStatus.APPROVED
        assert missing is None

    run_sql(scenario)


def test_editor_assignment(run_sql) -> None:
    async def scenario(sessions):
        owner = await _owner(sessions)
        first = await _owner(sessions, UserRole.EDITOR)
        second = await _owner(sessions, UserRole.EDITOR)
        async with sessions() as session:
            project = await SqlProjectStore(session).create_project(owner_id=owner.id, title="Collab")

        async with sessions() as session:
            await SqlProjectStore(session).set_project_editor(project.id, first.id)
        async with sessions() as session:
            await SqlProjectStore(session).set_project_editor(project.id, second.id)
        async with sessions() as session:
            store = SqlProjectStore(session)
            assigned = await store.list_editor_ids(project.id)
            first_sees = await store.list_projects_for_editor(first.id)
            second_sees = await store.list_projects_for_editor(second.id)
        async with sessions() as session:
            await SqlProjectStore(session).set_project_editor(project.id, None)
        async with sessions() as session:
            cleared = await SqlProjectStore(session).list_editor_ids(project.id)

        assert assigned == [second.id]
        assert first_sees == []
        assert [p.id for p in second_sees] == [project.id]
        assert cleared == []

    run_sql(scenario)


def test_user_store(run_sql) -> None:
    async def scenario(sessions):
        user = await _owner(sessions, UserRole.EDITOR)

        async with sessions() as session:
            with pytest.raises(ValueError):
                await SqlUserStore(session).create_user(user.id, "dupe@example.com", UserRole.YOUTUBER)
        async with sessions() as session:
            renamed = await SqlUserStore(session).update_name(user.id, "Renamed")
        async with sessions() as session:
            users = SqlUserStore(session)
            fetched = await users.get_user(user.id)
            nobody = await users.update_name(uuid4(), "Nobody")

        assert renamed.name == "Renamed"
        assert fetched.role is UserRole.EDITOR
        assert fetched.name == "Renamed"
        assert nobody is None

    run_sql(scenario)


def test_backend_errors_become_store_unavailable(run_sql) -> None:
    async def scenario(sessions):
        owner = await _owner(sessions)
        async with sessions() as session:
            await session.execute(text("DROP TABLE project_editors"))
            await session.commit()

        async with sessions() as session:
            with pytest.raises(StoreUnavailableError):
                await SqlProjectStore(session).list_projects_for_editor(owner.id)
        async with sessions() as session:
            with pytest.raises(StoreUnavailableError):
                await SqlProjectStore(session).set_project_editor(uuid4(), owner.id)

    run_sql(scenario)


def test_schema_tables() -> None:
    import edio.models as models

    assert set(SQLModel.metadata.tables) == {"users", "projects", "project_editors"}
    assert sorted(models.__all__) == sorted(
        ["ProjectStatus", "PublishingStatus", "UserRole", "BaseUUIDModel", "utc_now", "User", "Project", "ProjectEditor"]
    )
