"""Publishing status endpoints."""

from fastapi import APIRouter, Depends, HTTPException

from edio.api.deps import get_tracker
from edio.api.v1.projects import load_project
from edio.auth import CurrentUser, get_current_user
from edio.exceptions import (
    InvalidTransitionError,
    ProjectNotFoundError,
    StoreUnavailableError,
)
from edio.models import ProjectStatus, PublishingStatus
from edio.schemas.project import (
    PublishingStatusResponse,
    PublishingStatusUpdateRequest,
    PublishResponse,
)
from edio.services.publishing_service import PublishingStatusTracker
from edio.utils.logging import get_logger

router = APIRouter()
logger = get_logger(__name__)

# Outcomes the upload job may report; every other move goes through POST .../publish
REPORTABLE_STATUSES = frozenset({PublishingStatus.COMPLETED, PublishingStatus.FAILED})


@router.get("/{project_id}/publish/status", response_model=PublishingStatusResponse)
async def get_publishing_status(
    project_id: str,
    user: CurrentUser = Depends(get_current_user),
    tracker: PublishingStatusTracker = Depends(get_tracker),
):
    """Current publishing status, polled by the project page."""
    try:
        status = await tracker.get_status(project_id)
    except ProjectNotFoundError:
        raise HTTPException(status_code=404, detail="Project not found")
    except StoreUnavailableError as e:
        logger.error("Error fetching publishing status", project_id=project_id, error=str(e))
        raise HTTPException(status_code=500, detail="Failed to fetch publishing status")

    return PublishingStatusResponse(status=status)


@router.patch("/{project_id}/publish/status", response_model=PublishingStatusResponse)
async def update_publishing_status(
    project_id: str,
    request: PublishingStatusUpdateRequest,
    user: CurrentUser = Depends(get_current_user),
    tracker: PublishingStatusTracker = Depends(get_tracker),
):
    """
    Record publish progress.

    Called on behalf of the owner by the upload job to move a publishing
    project to completed or failed. Starting and retrying go through
    POST .../publish, which checks approval and channel first.
    """
    project = await load_project(tracker.store, project_id)

    if project.owner_id != user.user_id:
        raise HTTPException(status_code=403, detail="Unauthorized")

    if request.status not in REPORTABLE_STATUSES:
        raise HTTPException(
            status_code=409,
            detail="Publishing can only be started through the publish endpoint",
        )

    try:
        status = await tracker.transition(project.id, request.status)
    except ProjectNotFoundError:
        raise HTTPException(status_code=404, detail="Project not found")
    except InvalidTransitionError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except StoreUnavailableError as e:
        logger.error("Error updating publishing status", project_id=project_id, error=str(e))
        raise HTTPException(status_code=500, detail="Failed to update publishing status")

    return PublishingStatusResponse(status=status)


@router.post("/{project_id}/publish", response_model=PublishResponse)
async def publish_project(
    project_id: str,
    user: CurrentUser = Depends(get_current_user),
    tracker: PublishingStatusTracker = Depends(get_tracker),
):
    """
    Start publishing an approved project to its YouTube channel.

    A failed publish may be started again; the upload itself runs outside
    this service and reports back through PATCH .../publish/status.
    """
    project = await load_project(tracker.store, project_id)

    if project.owner_id != user.user_id:
        raise HTTPException(status_code=403, detail="Unauthorized")

    if project.status != ProjectStatus.APPROVED:
        raise HTTPException(
            status_code=400, detail="Project must be approved before publishing"
        )

    if not project.youtube_channel_id:
        raise HTTPException(
            status_code=400,
            detail="YouTube channel must be selected before publishing",
        )

    try:
        if project.publishing_status == PublishingStatus.FAILED:
            status = await tracker.retry(project.id)
        else:
            status = await tracker.start(project.id)
    except ProjectNotFoundError:
        raise HTTPException(status_code=404, detail="Project not found")
    except InvalidTransitionError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except StoreUnavailableError as e:
        logger.error("Error starting publish", project_id=project_id, error=str(e))
        raise HTTPException(status_code=500, detail="Failed to start publishing")

    logger.info("Publish started", project_id=project_id, channel=project.youtube_channel_id)
    return PublishResponse(success=True, status=status)
