import asyncio

from honorboard.models.stats import AggregationState, UserStats
from honorboard.services.honor_board import build_honor_board, load_honor_board


class _Store:
    def count_posts(self, user_id):
        return 3

    def count_comments(self, user_id):
        return 7

    def count_reactions(self, user_id):
        return 12

    def count_accepted_friendships(self, user_id):
        return 2


def test_build_uses_demo_avatar_in_demo_mode():
    board = build_honor_board(
        "u1", "alice", AggregationState(), avatar_url="https://cdn/a.png", is_demo=True
    )
    assert board.avatar_url == "/lovable-avatar.jpg"
    assert board.display_name == "ALICE"
    assert board.avatar_fallback == "A"


def test_build_keeps_profile_avatar_outside_demo():
    board = build_honor_board("u1", "bob", AggregationState(), avatar_url="https://cdn/b.png")
    assert board.avatar_url == "https://cdn/b.png"


def test_build_with_empty_username():
    board = build_honor_board("u1", "", AggregationState())
    assert board.display_name == ""
    assert board.avatar_fallback == ""


def test_load_runs_aggregation_to_completion():
    board = asyncio.run(load_honor_board(_Store(), "u1", "carol"))
    assert board.loading is False
    assert board.stats == UserStats(
        posts_count=3, comments_count=7, reactions_count=12, friends_count=2, total_reward=9_999_999
    )
