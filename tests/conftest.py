from __future__ import annotations

import os
from typing import Iterator
from uuid import uuid4

import pytest

# Settings are read at import time
os.environ.setdefault("STORE_BACKEND", "memory")
os.environ.setdefault("DEBUG", "false")

from fastapi.testclient import TestClient

from edio.api.deps import get_project_store, get_user_store
from edio.auth import CurrentUser, get_current_user
from edio.database import get_session
from edio.main import app
from edio.models import User, UserRole
from edio.services.publishing_service import PublishingStatusTracker
from edio.stores import InMemoryProjectStore, InMemoryUserStore


class Caller:
    """Holds the identity the overridden session resolver returns."""

    def __init__(self, user: CurrentUser) -> None:
        self.user = user


async def _no_session():
    yield None


@pytest.fixture()
def store() -> InMemoryProjectStore:
    return InMemoryProjectStore()


@pytest.fixture()
def tracker(store: InMemoryProjectStore) -> PublishingStatusTracker:
    return PublishingStatusTracker(store, timeout=1.0)


@pytest.fixture()
def youtuber() -> CurrentUser:
    return CurrentUser(user_id=uuid4(), role=UserRole.YOUTUBER, email="creator@example.com", name="Creator")


@pytest.fixture()
def editor() -> CurrentUser:
    return CurrentUser(user_id=uuid4(), role=UserRole.EDITOR, email="editor@example.com", name="Editor")


@pytest.fixture()
def user_store(youtuber: CurrentUser, editor: CurrentUser) -> InMemoryUserStore:
    """Profiles for the youtuber and editor fixtures."""
    users = InMemoryUserStore()
    for person in (youtuber, editor):
        users._users[person.user_id] = User(
            id=person.user_id, email=person.email, name=person.name, role=person.role
        )
    return users


@pytest.fixture()
def caller(youtuber: CurrentUser) -> Caller:
    return Caller(youtuber)


@pytest.fixture()
def client(
    store: InMemoryProjectStore, user_store: InMemoryUserStore, caller: Caller
) -> Iterator[TestClient]:
    app.dependency_overrides[get_session] = _no_session
    app.dependency_overrides[get_project_store] = lambda: store
    app.dependency_overrides[get_user_store] = lambda: user_store
    app.dependency_overrides[get_current_user] = lambda: caller.user
    try:
        yield TestClient(app, raise_server_exceptions=False)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def anonymous_client(
    store: InMemoryProjectStore, user_store: InMemoryUserStore
) -> Iterator[TestClient]:
    app.dependency_overrides[get_session] = _no_session
    app.dependency_overrides[get_project_store] = lambda: store
    app.dependency_overrides[get_user_store] = lambda: user_store
    try:
        yield TestClient(app, raise_server_exceptions=False)
    finally:
        app.dependency_overrides.clear()
