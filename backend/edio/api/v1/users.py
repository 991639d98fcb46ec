"""User profile endpoints."""

from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException

from edio.api.deps import get_user_store
from edio.auth import CurrentUser, get_current_user, get_token_claims, user_id_from_claims
from edio.exceptions import StoreUnavailableError
from edio.schemas.user import (
    UserProfileCreateRequest,
    UserProfileResponse,
    UserProfileUpdateRequest,
)
from edio.stores import UserStore
from edio.utils.logging import get_logger

router = APIRouter()
logger = get_logger(__name__)


@router.get("/profile", response_model=UserProfileResponse)
async def get_profile(user: CurrentUser = Depends(get_current_user)):
    """The caller's profile."""
    return UserProfileResponse(
        id=user.user_id, email=user.email, name=user.name, role=user.role
    )


@router.post("/profile", response_model=UserProfileResponse, status_code=201)
async def create_profile(
    request: UserProfileCreateRequest,
    claims: Dict[str, Any] = Depends(get_token_claims),
    users: UserStore = Depends(get_user_store),
):
    """
    Create the caller's profile with the role they picked.

    The id and email come from the token; a profile can only be created once.
    """
    user_id = user_id_from_claims(claims)
    email = claims.get("email")
    if not email:
        raise HTTPException(status_code=400, detail="Token has no email claim")

    metadata = claims.get("user_metadata") or {}
    name = (request.name or metadata.get("full_name") or metadata.get("name") or "").strip()

    try:
        user = await users.create_user(
            user_id=user_id, email=email, role=request.role, name=name or None
        )
    except ValueError:
        raise HTTPException(status_code=409, detail="User profile already exists")
    except StoreUnavailableError as e:
        logger.error("Error creating user profile", error=str(e))
        raise HTTPException(status_code=500, detail="Could not create user profile")

    logger.info("User profile created", user_id=str(user.id), role=user.role.value)
    return UserProfileResponse(id=user.id, email=user.email, name=user.name, role=user.role)


@router.patch("/profile", response_model=UserProfileResponse)
async def update_profile(
    request: UserProfileUpdateRequest,
    user: CurrentUser = Depends(get_current_user),
    users: UserStore = Depends(get_user_store),
):
    """Rename the caller."""
    name = (request.name or "").strip()
    if not name:
        raise HTTPException(status_code=400, detail="Name is required")

    try:
        updated = await users.update_name(user.user_id, name)
    except StoreUnavailableError as e:
        logger.error("Error updating user profile", error=str(e))
        raise HTTPException(status_code=500, detail="Failed to update profile")

    if updated is None:
        raise HTTPException(status_code=404, detail="User profile not found")

    return UserProfileResponse(
        id=updated.id, email=updated.email, name=updated.name, role=updated.role
    )
