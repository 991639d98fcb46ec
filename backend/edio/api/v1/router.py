"""Main API router aggregating all sub-routers."""
from fastapi import APIRouter

from edio.api.v1.projects import router as projects_router
from edio.api.v1.publishing import router as publishing_router
from edio.api.v1.users import router as users_router

api_router = APIRouter()

api_router.include_router(projects_router, prefix="/projects", tags=["Projects"])
api_router.include_router(publishing_router, prefix="/projects", tags=["Publishing"])
api_router.include_router(users_router, prefix="/user", tags=["User"])
