"""
User statistics endpoint.

Returns the raw honor stats snapshot for a user, without profile identity.
"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query

from honorboard.models.db import SupabaseDAL
from honorboard.services.aggregator import StatsAggregator

router = APIRouter(prefix="/stats", tags=["stats"])


@router.get("/user/{user_id}")
async def get_user_stats(
    user_id: str,
    demo: bool = Query(False, description="Serve demo data"),
):
    """
    Aggregate honor stats for one user.

    Args:
        user_id: Profile identifier (Supabase auth user id)
        demo: Return the canned demo record instead of querying the store

    Returns:
        user_id: Echo of the requested id
        loading: Always false once the response is sent
        stats: posts_count, comments_count, reactions_count, friends_count, total_reward
    """
    if not user_id:
        raise HTTPException(status_code=400, detail="user_id is required")

    dal = SupabaseDAL.from_env()
    if not dal and not demo:
        raise HTTPException(status_code=503, detail="Supabase not configured")

    aggregator = StatsAggregator(dal)
    await aggregator.aggregate(user_id, is_demo=demo)
    state = aggregator.state

    return {
        "user_id": user_id,
        "loading": state.loading,
        "stats": state.stats.model_dump(),
    }
