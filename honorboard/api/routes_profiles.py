"""
Profile honor board endpoint.

Non-demo boards are only served to authenticated users; the session guard
answers 401 with the login path to redirect to.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from honorboard.api.deps import require_session
from honorboard.models.db import SupabaseDAL
from honorboard.services.honor_board import HonorBoard, load_honor_board

router = APIRouter(prefix="/profiles", tags=["profiles"])


@router.get("/{user_id}/honor", response_model=HonorBoard, dependencies=[Depends(require_session)])
async def get_honor_board(
    user_id: str,
    username: str = Query(..., description="Display name shown on the board"),
    avatar_url: Optional[str] = Query(None),
    demo: bool = Query(False, description="Serve demo data"),
):
    """Build the honor board for a profile."""
    dal = SupabaseDAL.from_env()
    if not dal and not demo:
        raise HTTPException(status_code=503, detail="Supabase not configured")

    return await load_honor_board(dal, user_id, username, avatar_url=avatar_url, is_demo=demo)
