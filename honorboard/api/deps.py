"""
Shared route dependencies.
"""

from __future__ import annotations

from typing import Iterator, Optional

from fastapi import Header, HTTPException, Query

from honorboard.core.config import settings
from honorboard.models.db import SupabaseDAL
from honorboard.services.session_guard import BearerSessionProvider, ensure_authenticated


def _bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def _redirect_to_login() -> None:
    raise HTTPException(
        status_code=401,
        detail={
            "error": {"code": "UNAUTHENTICATED", "message": "Sign in required", "details": {}},
            "redirect_to": settings.LOGIN_PATH,
        },
    )


def require_session(
    demo: bool = Query(False, description="Serve demo data"),
    authorization: Optional[str] = Header(default=None),
) -> Iterator[None]:
    """
    Gate the request on a valid Supabase session for its whole lifetime.

    Demo boards are public and skip the check.
    """
    if demo:
        yield
        return

    dal = SupabaseDAL.from_env()
    if not dal:
        raise HTTPException(status_code=503, detail="Supabase not configured")

    provider = BearerSessionProvider(dal.client.auth, _bearer_token(authorization))
    with ensure_authenticated(provider, _redirect_to_login):
        yield
