"""
Health check endpoint for service monitoring.

Provides basic health status and optional database connectivity check.
"""

from fastapi import APIRouter

from honorboard.models.db import SupabaseDAL

router = APIRouter(tags=["health"])


@router.get("/health")
async def health():
    """
    Check service health and database connectivity.

    Returns:
        ok: Always true if the service is running
        db: True if Supabase is configured and reachable
    """
    dal = SupabaseDAL.from_env()
    return {"ok": True, "db": bool(dal and dal.ping())}
