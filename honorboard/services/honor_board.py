from __future__ import annotations

from typing import Optional

from pydantic import BaseModel

from honorboard.core.config import settings
from honorboard.models.db import StatsSource
from honorboard.models.stats import AggregationState, UserStats
from honorboard.services.aggregator import StatsAggregator


class HonorBoard(BaseModel):
    user_id: str
    username: str
    display_name: str
    avatar_url: Optional[str] = None
    avatar_fallback: str = ""
    is_demo: bool = False
    loading: bool = False
    stats: UserStats = UserStats()


def build_honor_board(
    user_id: str,
    username: str,
    state: AggregationState,
    avatar_url: Optional[str] = None,
    is_demo: bool = False,
) -> HonorBoard:
    """Combine identity and an aggregation snapshot into the rendered board."""
    name = username or ""
    return HonorBoard(
        user_id=user_id,
        username=name,
        display_name=name.upper(),
        avatar_url=settings.DEMO_AVATAR_URL if is_demo else avatar_url,
        avatar_fallback=name[:1].upper(),
        is_demo=is_demo,
        loading=state.loading,
        stats=state.stats,
    )


async def load_honor_board(
    source: Optional[StatsSource],
    user_id: str,
    username: str,
    avatar_url: Optional[str] = None,
    is_demo: bool = False,
) -> HonorBoard:
    """Run one aggregation to completion and return the board."""
    aggregator = StatsAggregator(source)
    await aggregator.aggregate(user_id, is_demo)
    return build_honor_board(user_id, username, aggregator.state, avatar_url=avatar_url, is_demo=is_demo)
