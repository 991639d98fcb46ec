"""
Session resolution for FastAPI.
Validates bearer JWTs from the hosted identity service and loads the
caller's profile and role.
"""

from typing import Any, Dict, Optional
from uuid import UUID

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from edio.api.deps import get_user_store
from edio.config import settings
from edio.exceptions import StoreUnavailableError
from edio.models import UserRole
from edio.stores import UserStore
from edio.utils.logging import bind_context, get_logger

logger = get_logger(__name__)

# HTTP Bearer token extraction
security = HTTPBearer(auto_error=False)


class CurrentUser:
    """Represents an authenticated user and their role."""

    def __init__(
        self,
        user_id: UUID,
        role: UserRole,
        email: Optional[str] = None,
        name: Optional[str] = None,
    ):
        self.user_id = user_id
        self.role = role
        self.email = email
        self.name = name

    @property
    def is_youtuber(self) -> bool:
        return self.role == UserRole.YOUTUBER


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def check_auth_config() -> None:
    """
    Refuse to run outside debug without a token secret.

    Called from the application lifespan.
    """
    if not settings.jwt_secret and not settings.debug:
        raise RuntimeError("JWT_SECRET must be set when DEBUG is false")


def decode_token(token: str) -> Dict[str, Any]:
    """
    Decode a bearer token into its claims.

    Verifies the HS256 signature and audience when jwt_secret is configured.
    Without a secret the claims are read unverified, in debug only; otherwise
    every token is rejected.

    Raises jwt.PyJWTError on any decoding or verification failure.
    """
    if settings.jwt_secret:
        return jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=["HS256"],
            audience=settings.jwt_audience,
        )
    if not settings.debug:
        raise jwt.InvalidTokenError("JWT secret is not configured")
    return jwt.decode(token, options={"verify_signature": False})


def user_id_from_claims(claims: Dict[str, Any]) -> UUID:
    """Extract the user id from the subject claim."""
    sub = claims.get("sub")
    if not sub:
        raise _unauthorized("Invalid token: missing user ID")
    try:
        return UUID(str(sub))
    except ValueError:
        raise _unauthorized("Invalid token: malformed user ID")


async def get_token_claims(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Dict[str, Any]:
    """
    Dependency validating the bearer token.

    Raises HTTPException 401 if the token is missing or invalid.
    """
    if not credentials:
        raise _unauthorized("Not authenticated")

    try:
        claims = decode_token(credentials.credentials)
    except jwt.PyJWTError as e:
        logger.warning("Token validation failed", error=str(e))
        raise _unauthorized("Invalid token")

    user_id_from_claims(claims)
    return claims


async def get_current_user(
    claims: Dict[str, Any] = Depends(get_token_claims),
    users: UserStore = Depends(get_user_store),
) -> CurrentUser:
    """
    Dependency resolving the caller once per request.

    Raises HTTPException 401 if the user has no profile yet.
    """
    user_id = user_id_from_claims(claims)

    try:
        user = await users.get_user(user_id)
    except StoreUnavailableError as e:
        logger.error("Error fetching user profile", user_id=str(user_id), error=str(e))
        raise HTTPException(status_code=500, detail="Failed to fetch user profile")

    if user is None:
        logger.warning("User profile not found", user_id=str(user_id))
        raise _unauthorized("User profile not found")

    bind_context(user_id=str(user_id))
    logger.debug("User authenticated", user_id=str(user_id), role=user.role.value)

    return CurrentUser(
        user_id=user.id,
        role=user.role,
        email=user.email or claims.get("email"),
        name=user.name,
    )


async def require_youtuber(
    user: CurrentUser = Depends(get_current_user),
) -> CurrentUser:
    """Only content creators may create and publish projects."""
    if not user.is_youtuber:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only content creators can create projects",
        )
    return user
