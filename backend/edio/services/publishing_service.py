"""
Publishing status tracker.

Owns the publish-to-YouTube lifecycle of a project:

    idle -> publishing -> completed
                      +-> failed -> publishing (retry)

completed is terminal. The actual upload job lives outside this service;
it reports progress through transition().
"""

import asyncio
from typing import Awaitable, Dict, FrozenSet, Optional, TypeVar, Union
from uuid import UUID

from edio.config import settings
from edio.exceptions import (
    EdioError,
    InvalidTransitionError,
    ProjectNotFoundError,
    StoreUnavailableError,
)
from edio.models import PublishingStatus
from edio.stores import ProjectStore
from edio.utils.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

VALID_TRANSITIONS: Dict[PublishingStatus, FrozenSet[PublishingStatus]] = {
    PublishingStatus.IDLE: frozenset({PublishingStatus.PUBLISHING}),
    PublishingStatus.PUBLISHING: frozenset(
        {PublishingStatus.COMPLETED, PublishingStatus.FAILED}
    ),
    PublishingStatus.FAILED: frozenset({PublishingStatus.PUBLISHING}),
    PublishingStatus.COMPLETED: frozenset(),
}


def allowed_transitions(current: PublishingStatus) -> FrozenSet[PublishingStatus]:
    """States reachable in one step from current."""
    return VALID_TRANSITIONS[current]


def is_valid_transition(current: PublishingStatus, requested: PublishingStatus) -> bool:
    return requested in VALID_TRANSITIONS[current]


def is_terminal(state: PublishingStatus) -> bool:
    return not VALID_TRANSITIONS[state]


def parse_project_id(project_id: Union[str, UUID]) -> UUID:
    """Parse a project id; anything that is not a UUID cannot name a project."""
    if isinstance(project_id, UUID):
        return project_id
    if not project_id:
        raise ProjectNotFoundError(str(project_id))
    try:
        return UUID(str(project_id))
    except ValueError:
        raise ProjectNotFoundError(str(project_id))


class PublishingStatusTracker:
    """
    Reads and transitions a project's publishing status.

    Every store call is bounded by a timeout. Failures are raised, never
    retried.
    """

    def __init__(self, store: ProjectStore, timeout: Optional[float] = None):
        self.store = store
        self.timeout = settings.store_timeout_seconds if timeout is None else timeout

    async def _call(self, awaitable: Awaitable[T], project_id: UUID, operation: str) -> T:
        try:
            return await asyncio.wait_for(awaitable, timeout=self.timeout)
        except asyncio.TimeoutError as e:
            logger.error(
                "Project store timed out",
                project_id=str(project_id),
                operation=operation,
                timeout=self.timeout,
            )
            raise StoreUnavailableError(f"Project store timed out during {operation}", cause=e) from e
        except EdioError:
            raise
        except Exception as e:
            logger.exception(
                "Project store failed",
                project_id=str(project_id),
                operation=operation,
                error=str(e),
            )
            raise StoreUnavailableError(f"Project store failed during {operation}", cause=e) from e

    async def get_status(self, project_id: Union[str, UUID]) -> PublishingStatus:
        """
        Get the persisted publishing status of a project.

        Raises:
            ProjectNotFoundError: No project with that id.
            StoreUnavailableError: The store read failed or timed out.
        """
        pid = parse_project_id(project_id)
        status = await self._call(self.store.get_publishing_status(pid), pid, "read")
        if status is None:
            raise ProjectNotFoundError(str(pid))
        return PublishingStatus(status)

    async def transition(
        self,
        project_id: Union[str, UUID],
        requested: Union[str, PublishingStatus],
    ) -> PublishingStatus:
        """
        Move a project to the requested publishing status.

        The write is a compare-and-set against the state just read, so two
        concurrent callers starting from the same state cannot both succeed;
        the loser gets InvalidTransitionError naming the state it lost to.

        Raises:
            ProjectNotFoundError: No project with that id.
            InvalidTransitionError: requested is not reachable from the current state.
            StoreUnavailableError: The store failed or timed out.
        """
        return await self._apply(parse_project_id(project_id), PublishingStatus(requested))

    async def _apply(
        self,
        pid: UUID,
        requested: PublishingStatus,
        source: Optional[PublishingStatus] = None,
    ) -> PublishingStatus:
        current = await self.get_status(pid)
        if not is_valid_transition(current, requested) or (
            source is not None and current != source
        ):
            logger.warning(
                "Rejected publishing status transition",
                project_id=str(pid),
                from_status=current.value,
                to_status=requested.value,
            )
            raise InvalidTransitionError(current, requested)

        swapped = await self._call(
            self.store.compare_and_set_publishing_status(pid, current, requested),
            pid,
            "write",
        )
        if not swapped:
            latest = await self.get_status(pid)
            logger.warning(
                "Publishing status changed concurrently",
                project_id=str(pid),
                expected=current.value,
                found=latest.value,
                to_status=requested.value,
            )
            raise InvalidTransitionError(latest, requested)

        logger.info(
            "Publishing status transitioned",
            project_id=str(pid),
            from_status=current.value,
            to_status=requested.value,
        )
        return requested

    # Events

    async def start(self, project_id: Union[str, UUID]) -> PublishingStatus:
        """idle -> publishing"""
        return await self._event(project_id, PublishingStatus.IDLE, PublishingStatus.PUBLISHING)

    async def succeed(self, project_id: Union[str, UUID]) -> PublishingStatus:
        """publishing -> completed"""
        return await self._event(project_id, PublishingStatus.PUBLISHING, PublishingStatus.COMPLETED)

    async def fail(self, project_id: Union[str, UUID]) -> PublishingStatus:
        """publishing -> failed"""
        return await self._event(project_id, PublishingStatus.PUBLISHING, PublishingStatus.FAILED)

    async def retry(self, project_id: Union[str, UUID]) -> PublishingStatus:
        """failed -> publishing"""
        return await self._event(project_id, PublishingStatus.FAILED, PublishingStatus.PUBLISHING)

    async def _event(
        self,
        project_id: Union[str, UUID],
        source: PublishingStatus,
        target: PublishingStatus,
    ) -> PublishingStatus:
        # publishing is reachable from both idle and failed, so an event
        # also pins the source state it fires from.
        return await self._apply(parse_project_id(project_id), target, source=source)
