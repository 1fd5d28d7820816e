"""
Honor board records.

`UserStats` is the published snapshot; `AggregationState` pairs it with the
loading flag and the generation of the request that produced it.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, NonNegativeInt

DEMO_POSTS = 1000
DEMO_COMMENTS = 2000
DEMO_REACTIONS = 5000
DEMO_FRIENDS = 5000


class UserStats(BaseModel):
    model_config = ConfigDict(frozen=True)

    posts_count: NonNegativeInt = 0
    comments_count: NonNegativeInt = 0
    reactions_count: NonNegativeInt = 0
    friends_count: NonNegativeInt = 0
    total_reward: NonNegativeInt = 0

    @classmethod
    def demo(cls, total_reward: int) -> "UserStats":
        """Canned illustrative record served in demo mode."""
        return cls(
            posts_count=DEMO_POSTS,
            comments_count=DEMO_COMMENTS,
            reactions_count=DEMO_REACTIONS,
            friends_count=DEMO_FRIENDS,
            total_reward=total_reward,
        )


class AggregationRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    user_id: str
    is_demo: bool = False


class AggregationState(BaseModel):
    model_config = ConfigDict(frozen=True)

    stats: UserStats = UserStats()
    loading: bool = False
    generation: int = 0
    request: AggregationRequest | None = None
