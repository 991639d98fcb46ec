"""Project management endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException

from edio.api.deps import get_project_store, get_user_store
from edio.auth import CurrentUser, get_current_user, require_youtuber
from edio.exceptions import ProjectNotFoundError, StoreUnavailableError
from edio.models import Project, UserRole
from edio.schemas.project import (
    ProjectCreateRequest,
    ProjectCreateResponse,
    ProjectEditorRequest,
    ProjectEditorsResponse,
    ProjectListResponse,
    ProjectResponse,
    ProjectUpdateRequest,
)
from edio.services.publishing_service import parse_project_id
from edio.stores import ProjectStore, UserStore
from edio.utils.logging import get_logger

router = APIRouter()
logger = get_logger(__name__)

# editorId value that removes every editor from a project
UNASSIGNED = "unassigned"


async def load_project(store: ProjectStore, project_id: str) -> Project:
    """Fetch a project or raise 404."""
    try:
        project = await store.get_project(parse_project_id(project_id))
    except ProjectNotFoundError:
        project = None
    except StoreUnavailableError as e:
        logger.error("Error fetching project", project_id=project_id, error=str(e))
        raise HTTPException(status_code=500, detail="Failed to fetch project")

    if project is None:
        raise HTTPException(status_code=404, detail="Project not found")
    return project


async def ensure_can_view(store: ProjectStore, project: Project, user: CurrentUser) -> None:
    """Allow the owner and assigned editors; anyone else gets 403."""
    if project.owner_id == user.user_id:
        return
    try:
        editors = await store.list_editor_ids(project.id)
    except StoreUnavailableError as e:
        logger.error("Error fetching project editors", project_id=str(project.id), error=str(e))
        raise HTTPException(status_code=500, detail="Failed to fetch project")
    if user.user_id not in editors:
        raise HTTPException(status_code=403, detail="Unauthorized")


@router.post("", response_model=ProjectCreateResponse)
async def create_project(
    request: ProjectCreateRequest,
    user: CurrentUser = Depends(require_youtuber),
    store: ProjectStore = Depends(get_project_store),
):
    """
    Create a new project owned by the caller.

    Starts in review status pending and publishing status idle.
    """
    if not request.title:
        raise HTTPException(status_code=400, detail="Project title is required")

    try:
        project = await store.create_project(
            owner_id=user.user_id,
            title=request.title,
            video_title=request.video_title,
            description=request.description,
            youtube_channel_id=request.youtube_channel_id,
        )
    except StoreUnavailableError as e:
        logger.error("Error creating project", error=str(e))
        raise HTTPException(status_code=500, detail="Failed to create project")

    logger.info("Project created", project_id=str(project.id))
    return ProjectCreateResponse(projectId=project.id)


@router.get("", response_model=ProjectListResponse)
async def list_projects(
    user: CurrentUser = Depends(get_current_user),
    store: ProjectStore = Depends(get_project_store),
):
    """
    List the caller's projects, most recently updated first.

    Creators see the projects they own; editors see the ones assigned to them.
    """
    try:
        if user.is_youtuber:
            items = await store.list_projects_for_owner(user.user_id)
        else:
            items = await store.list_projects_for_editor(user.user_id)
    except StoreUnavailableError as e:
        logger.error("Error fetching projects", error=str(e))
        raise HTTPException(status_code=500, detail="Failed to fetch projects")

    return ProjectListResponse(
        projects=[ProjectResponse.model_validate(p) for p in items],
        isCreator=user.is_youtuber,
    )


@router.get("/{project_id}", response_model=ProjectResponse)
async def get_project(
    project_id: str,
    user: CurrentUser = Depends(get_current_user),
    store: ProjectStore = Depends(get_project_store),
):
    """Get project details."""
    project = await load_project(store, project_id)
    await ensure_can_view(store, project, user)
    return ProjectResponse.model_validate(project)


@router.patch("/{project_id}", response_model=ProjectResponse)
async def update_project(
    project_id: str,
    request: ProjectUpdateRequest,
    user: CurrentUser = Depends(get_current_user),
    store: ProjectStore = Depends(get_project_store),
):
    """Update title, video title, description, channel or review status."""
    project = await load_project(store, project_id)

    if project.owner_id != user.user_id:
        raise HTTPException(status_code=403, detail="Unauthorized")

    fields = request.model_dump(exclude_unset=True)
    if not fields:
        return ProjectResponse.model_validate(project)

    try:
        updated = await store.update_project(project.id, **fields)
    except StoreUnavailableError as e:
        logger.error("Error updating project", project_id=project_id, error=str(e))
        raise HTTPException(status_code=500, detail="Failed to update project")

    if updated is None:
        raise HTTPException(status_code=404, detail="Project not found")

    logger.info("Project updated", project_id=project_id, fields=sorted(fields))
    return ProjectResponse.model_validate(updated)


@router.get("/{project_id}/editors", response_model=ProjectEditorsResponse)
async def list_project_editors(
    project_id: str,
    user: CurrentUser = Depends(get_current_user),
    store: ProjectStore = Depends(get_project_store),
):
    """Editors assigned to a project."""
    project = await load_project(store, project_id)
    await ensure_can_view(store, project, user)

    try:
        editors = await store.list_editor_ids(project.id)
    except StoreUnavailableError as e:
        logger.error("Error fetching project editors", project_id=project_id, error=str(e))
        raise HTTPException(status_code=500, detail="Failed to fetch project editors")

    return ProjectEditorsResponse(editors=editors)


@router.put("/{project_id}/editor")
async def assign_project_editor(
    project_id: str,
    request: ProjectEditorRequest,
    user: CurrentUser = Depends(get_current_user),
    store: ProjectStore = Depends(get_project_store),
    users: UserStore = Depends(get_user_store),
):
    """
    Assign an editor to a project, replacing any current one.

    Only the owner may assign; editorId "unassigned" clears the assignment.
    """
    project = await load_project(store, project_id)

    if project.owner_id != user.user_id:
        raise HTTPException(status_code=403, detail="Unauthorized")

    editor_id = None
    if request.editorId != UNASSIGNED:
        try:
            editor_id = UUID(request.editorId)
        except ValueError:
            raise HTTPException(status_code=400, detail="Editor not found or not authorized")

        try:
            editor = await users.get_user(editor_id)
        except StoreUnavailableError as e:
            logger.error("Error fetching editor", editor_id=request.editorId, error=str(e))
            raise HTTPException(status_code=500, detail="Failed to update editor")

        if editor is None or editor.role != UserRole.EDITOR:
            raise HTTPException(status_code=400, detail="Editor not found or not authorized")

    try:
        await store.set_project_editor(project.id, editor_id)
    except StoreUnavailableError as e:
        logger.error("Error updating project editor", project_id=project_id, error=str(e))
        raise HTTPException(status_code=500, detail="Failed to update editor")

    logger.info(
        "Project editor updated",
        project_id=project_id,
        editor_id=str(editor_id) if editor_id else None,
    )
    return {"success": True}
