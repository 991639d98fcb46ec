"""Health check endpoint."""
from fastapi import APIRouter

from edio.config import settings
from edio.database import check_db_connection

router = APIRouter()


@router.get("/health")
async def health_check():
    """
    Health check endpoint.

    Returns 200 with "degraded" when the database is unreachable.
    The in-memory store needs no database.
    """
    if settings.store_backend == "memory":
        return {"status": "healthy", "database": "not configured", "version": "1.0.0"}

    db_ok = await check_db_connection()

    return {
        "status": "healthy" if db_ok else "degraded",
        "database": "connected" if db_ok else "disconnected",
        "version": "1.0.0"
    }
