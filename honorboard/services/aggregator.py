"""
Honor stats aggregation.

One `StatsAggregator` owns the stats snapshot for one consumer. Each call to
`aggregate` (or `request`) starts a new generation; the four count queries run
concurrently off the event loop and are joined before anything is published.
A result is published only if its generation is still the current one, so a
superseded request can never overwrite newer state.

Failed queries are logged and count as 0 for their own field; the fields whose
queries succeeded keep their values.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, List, Optional

from honorboard.core.config import settings
from honorboard.models.db import StatsSource
from honorboard.models.stats import AggregationRequest, AggregationState, UserStats

Listener = Callable[[AggregationState], None]


class StatsAggregator:
    def __init__(
        self,
        source: Optional[StatsSource],
        demo_delay: Optional[float] = None,
        total_reward: Optional[int] = None,
        query_timeout: Optional[float] = None,
    ):
        self.source = source
        self.demo_delay = settings.DEMO_DELAY_SECONDS if demo_delay is None else demo_delay
        self.total_reward = settings.TOTAL_REWARD if total_reward is None else total_reward
        self.query_timeout = settings.QUERY_TIMEOUT_SECONDS if query_timeout is None else query_timeout

        self._generation = 0
        self._state = AggregationState()
        self._listeners: List[Listener] = []
        self._task: Optional[asyncio.Task] = None

    # =========================================================================
    # Published State
    # =========================================================================

    @property
    def state(self) -> AggregationState:
        return self._state

    @property
    def stats(self) -> UserStats:
        return self._state.stats

    @property
    def loading(self) -> bool:
        return self._state.loading

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a callback for every published state; returns its unsubscribe."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _publish(self, state: AggregationState) -> None:
        self._state = state
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                logging.exception("Honor stats listener failed")

    # =========================================================================
    # Request Lifecycle
    # =========================================================================

    def _begin(self, request: AggregationRequest) -> int:
        """Start a new generation and publish the zeroed loading state."""
        self._generation += 1
        self._publish(AggregationState(
            stats=UserStats(),
            loading=True,
            generation=self._generation,
            request=request,
        ))
        return self._generation

    async def aggregate(self, user_id: str, is_demo: bool = False) -> UserStats:
        """
        Aggregate honor stats for one user and publish them.

        Returns the stats computed by this call. They are published only when
        no newer request was started in the meantime.
        """
        request = AggregationRequest(user_id=user_id, is_demo=is_demo)
        return await self._run(self._begin(request), request)

    def request(self, user_id: str, is_demo: bool = False) -> asyncio.Task:
        """Schedule an aggregation, cancelling the previous in-flight one."""
        # Fails before any state change when there is no running loop
        asyncio.get_running_loop()
        if self._task is not None and not self._task.done():
            self._task.cancel()
        request = AggregationRequest(user_id=user_id, is_demo=is_demo)
        generation = self._begin(request)
        self._task = asyncio.create_task(self._run(generation, request))
        return self._task

    async def _run(self, generation: int, request: AggregationRequest) -> UserStats:
        stats = UserStats(total_reward=self.total_reward)
        try:
            if request.is_demo:
                await asyncio.sleep(self.demo_delay)
                stats = UserStats.demo(self.total_reward)
            else:
                stats = await self._fetch(request.user_id)
        except Exception as e:
            logging.error("Honor stats aggregation failed for %s: %s", request.user_id, e)
        finally:
            # Runs on cancellation too, so the current request never stays loading
            if generation == self._generation:
                self._publish(AggregationState(
                    stats=stats,
                    loading=False,
                    generation=generation,
                    request=request,
                ))
            else:
                logging.debug(
                    "Discarding superseded honor stats for %s (generation %d, current %d)",
                    request.user_id, generation, self._generation,
                )
        return stats

    # =========================================================================
    # Fan-out / Fan-in
    # =========================================================================

    async def _fetch(self, user_id: str) -> UserStats:
        if self.source is None:
            raise RuntimeError("Stats source not configured")

        queries = {
            "posts_count": self.source.count_posts,
            "comments_count": self.source.count_comments,
            "reactions_count": self.source.count_reactions,
            "friends_count": self.source.count_accepted_friendships,
        }
        results = await asyncio.gather(
            *(self._query(fn, user_id) for fn in queries.values()),
            return_exceptions=True,
        )

        counts = {}
        for field, result in zip(queries, results):
            if isinstance(result, BaseException):
                logging.error("Honor stats query %s failed for %s: %r", field, user_id, result)
                counts[field] = 0
                continue
            try:
                counts[field] = max(0, int(result or 0))
            except (TypeError, ValueError):
                logging.error("Honor stats query %s returned a non-integer count for %s: %r", field, user_id, result)
                counts[field] = 0
        return UserStats(**counts, total_reward=self.total_reward)

    async def _query(self, fn: Callable[[str], Optional[int]], user_id: str) -> Optional[int]:
        call = asyncio.to_thread(fn, user_id)
        if self.query_timeout:
            return await asyncio.wait_for(call, timeout=self.query_timeout)
        return await call
