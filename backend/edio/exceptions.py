"""Domain errors raised by the publishing tracker and project stores."""

from typing import Optional

from edio.models.enums import PublishingStatus


class EdioError(Exception):
    """Base class for all domain errors."""


class ProjectNotFoundError(EdioError):
    """No project exists with the given id."""

    def __init__(self, project_id: str):
        self.project_id = project_id
        super().__init__(f"Project not found: {project_id}")


class InvalidTransitionError(EdioError):
    """The requested publishing status is unreachable from the current one."""

    def __init__(self, current: PublishingStatus, requested: PublishingStatus):
        self.current = current
        self.requested = requested
        super().__init__(
            f"Cannot transition publishing status from {current.value} to {requested.value}"
        )


class StoreUnavailableError(EdioError):
    """The project store failed, timed out, or refused the operation."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        self.cause = cause
        super().__init__(message)
