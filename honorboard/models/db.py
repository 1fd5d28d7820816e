"""
Supabase Data Access Layer (DAL).

Provides the read-only count queries the honor board is built from. Counts
use PostgREST's exact count with a HEAD request, so no rows are transferred.
"""

from __future__ import annotations

from typing import Any, Optional, Protocol

from supabase import Client, create_client

from honorboard.core.config import settings


class StatsSource(Protocol):
    """The four counts the aggregator fans out over."""

    def count_posts(self, user_id: str) -> Optional[int]: ...

    def count_comments(self, user_id: str) -> Optional[int]: ...

    def count_reactions(self, user_id: str) -> Optional[int]: ...

    def count_accepted_friendships(self, user_id: str) -> Optional[int]: ...


class SupabaseDAL:
    """Data access layer for Supabase operations."""

    def __init__(self, url: str, key: str):
        self.client: Client = create_client(url, key)

    @classmethod
    def from_env(cls) -> Optional["SupabaseDAL"]:
        """Create DAL instance from environment variables."""
        if settings.SUPABASE_URL and (
            settings.SUPABASE_SERVICE_ROLE_KEY or settings.SUPABASE_ANON_KEY
        ):
            key = settings.SUPABASE_SERVICE_ROLE_KEY or settings.SUPABASE_ANON_KEY
            return cls(settings.SUPABASE_URL, key)
        return None

    # =========================================================================
    # Count Operations
    # =========================================================================

    def _count_by_user(self, table: str, user_id: str) -> Optional[int]:
        result = (
            self.client
            .table(table)
            .select("*", count="exact", head=True)
            .eq("user_id", user_id)
            .execute()
        )
        return _count_of(result)

    def count_posts(self, user_id: str) -> Optional[int]:
        """Count posts authored by the user."""
        return self._count_by_user("posts", user_id)

    def count_comments(self, user_id: str) -> Optional[int]:
        """Count comments written by the user."""
        return self._count_by_user("comments", user_id)

    def count_reactions(self, user_id: str) -> Optional[int]:
        """Count reactions left by the user."""
        return self._count_by_user("reactions", user_id)

    def count_accepted_friendships(self, user_id: str) -> Optional[int]:
        """
        Count accepted friendships where the user is either endpoint.

        A single OR filter matches each row once, so a self-referential edge
        (user_id == friend_id) is not counted twice.
        """
        result = (
            self.client
            .table("friendships")
            .select("*", count="exact", head=True)
            .or_(f"user_id.eq.{user_id},friend_id.eq.{user_id}")
            .eq("status", "accepted")
            .execute()
        )
        return _count_of(result)

    # =========================================================================
    # Health
    # =========================================================================

    def ping(self) -> bool:
        """Probe known tables until one answers."""
        for table in ("posts", "comments", "reactions", "friendships"):
            try:
                self.client.table(table).select("user_id").limit(1).execute()
                return True
            except Exception:
                continue
        return False


def _count_of(result: Any) -> Optional[int]:
    count = getattr(result, "count", None)
    if count is None and hasattr(result, "model_dump"):
        count = result.model_dump().get("count")
    return count
