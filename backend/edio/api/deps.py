"""Shared request dependencies."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from edio.config import settings
from edio.database import get_session
from edio.services.publishing_service import PublishingStatusTracker
from edio.stores import (
    InMemoryProjectStore,
    InMemoryUserStore,
    ProjectStore,
    SqlProjectStore,
    SqlUserStore,
    UserStore,
)

# Process-wide stores used when store_backend is "memory"
memory_store = InMemoryProjectStore()
memory_user_store = InMemoryUserStore()


async def get_project_store(
    session: AsyncSession = Depends(get_session),
) -> ProjectStore:
    """Select the configured project store for this request."""
    if settings.store_backend == "memory":
        return memory_store
    return SqlProjectStore(session)


async def get_user_store(
    session: AsyncSession = Depends(get_session),
) -> UserStore:
    """Select the configured user store for this request."""
    if settings.store_backend == "memory":
        return memory_user_store
    return SqlUserStore(session)


async def get_tracker(
    store: ProjectStore = Depends(get_project_store),
) -> PublishingStatusTracker:
    return PublishingStatusTracker(store)
