"""
Session guard for pages that require an authenticated user.

`ensure_authenticated` is scoped to the lifetime of the hosting page or
request: it subscribes to session changes, checks presence once, re-checks on
every change, and releases the subscription exactly once on exit. A check that
cannot be completed counts as "no session".
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Any, Callable, Iterator, Optional

SessionCallback = Callable[[], None]


class Subscription(ABC):
    @abstractmethod
    def unsubscribe(self) -> None:
        pass


class NullSubscription(Subscription):
    """Subscription for providers without a change stream."""

    def unsubscribe(self) -> None:
        pass


class SessionProvider(ABC):
    """Read-only view of the authentication collaborator."""

    @abstractmethod
    def get_current_session(self) -> Optional[Any]:
        """Return the current session, or None when there is none."""
        pass

    @abstractmethod
    def on_session_change(self, callback: SessionCallback) -> Subscription:
        """Invoke callback on every session change until unsubscribed."""
        pass


class SupabaseSessionProvider(SessionProvider):
    """Session state of a Supabase auth client (`client.auth`)."""

    def __init__(self, auth: Any):
        self.auth = auth

    def get_current_session(self) -> Optional[Any]:
        return self.auth.get_session()

    def on_session_change(self, callback: SessionCallback) -> Subscription:
        # gotrue calls back with (event, session); presence is re-read by the guard
        return self.auth.on_auth_state_change(lambda event, session: callback())


class BearerSessionProvider(SessionProvider):
    """
    Request-scoped session resolved from a bearer access token.

    There is no change stream within a single request, so subscriptions are
    no-ops.
    """

    def __init__(self, auth: Any, access_token: Optional[str]):
        self.auth = auth
        self.access_token = access_token

    def get_current_session(self) -> Optional[Any]:
        if not self.access_token:
            return None
        resp = self.auth.get_user(self.access_token)
        return getattr(resp, "user", None) if resp is not None else None

    def on_session_change(self, callback: SessionCallback) -> Subscription:
        return NullSubscription()


def has_session(provider: SessionProvider) -> bool:
    """Presence check; any failure counts as no session."""
    try:
        return provider.get_current_session() is not None
    except Exception as e:
        logging.warning("Session check failed, treating as unauthenticated: %s", e)
        return False


@contextmanager
def ensure_authenticated(
    provider: SessionProvider,
    on_unauthenticated: Callable[[], None],
) -> Iterator[Subscription]:
    """
    Guard the enclosed block on the presence of a session.

    `on_unauthenticated` runs immediately if there is no session, and again on
    every change notification that leaves no session. It may be invoked more
    than once.
    """

    def recheck() -> None:
        if not has_session(provider):
            on_unauthenticated()

    subscription = provider.on_session_change(recheck)
    try:
        recheck()
        yield subscription
    finally:
        subscription.unsubscribe()
