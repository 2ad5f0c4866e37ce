from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Awaitable, Callable, TypeVar

from quotaguard.config import FRESHNESS_WINDOW_SEC, MINIMUM_DELAY_SEC
from quotaguard.core.context import CallContext
from quotaguard.core.quota import Clock, QuotaSnapshot, QuotaState, utcnow
from quotaguard.domain.errors import QuotaExhausted

if TYPE_CHECKING:
    from quotaguard.config import Settings

T = TypeVar("T")

Sleep = Callable[[CallContext, float], None]
AsyncSleep = Callable[[float], Awaitable[None]]


def _context_sleep(ctx: CallContext, seconds: float) -> None:
    ctx.sleep(seconds)


class CallCoordinator:
    """Paces and retries calls against a remote quota tracked by a QuotaState.

    Before each attempt the latest snapshot is consulted: a fresh snapshot with
    at most one request left causes a pause. Remote reports carry the
    pre-request count, so ``remaining == 1`` already means the window is spent.
    An attempt that raises QuotaExhausted is repeated after a pause that doubles
    every time; any other outcome is handed back to the caller unchanged.
    """

    def __init__(
        self,
        quota: QuotaState,
        min_delay_sec: float = MINIMUM_DELAY_SEC,
        freshness_window_sec: float = FRESHNESS_WINDOW_SEC,
        clock: Clock = utcnow,
    ) -> None:
        self.quota = quota
        self.min_delay_sec = min_delay_sec
        self.freshness_window_sec = freshness_window_sec
        self._clock = clock

    @classmethod
    def from_settings(cls, settings: Settings, quota: QuotaState) -> CallCoordinator:
        return cls(
            quota,
            min_delay_sec=settings.min_delay_sec,
            freshness_window_sec=settings.freshness_window_sec,
        )

    def should_pause(self, snapshot: QuotaSnapshot, retrying: bool) -> bool:
        if retrying:
            return True
        return snapshot.is_fresh(self.freshness_window_sec, self._clock()) and snapshot.remaining <= 1

    def call(self, ctx: CallContext, work: Callable[[], T]) -> T:
        """Run ``work`` once it is likely to be accepted, retrying on QuotaExhausted.

        Raises the context's error if ``ctx`` ends during a pause.
        """
        return self._call(ctx, work, _context_sleep)

    def _call(self, ctx: CallContext, work: Callable[[], T], sleep: Sleep) -> T:
        delay = self.min_delay_sec
        retrying = False

        while True:
            if self.should_pause(self.quota.get(), retrying):
                sleep(ctx, delay)
                delay *= 2

            try:
                return work()
            except QuotaExhausted:
                retrying = True

    async def acall(self, work: Callable[[], Awaitable[T]]) -> T:
        """Asyncio form of ``call``; cancellation and timeouts come from the awaiting task."""
        return await self._acall(work, asyncio.sleep)

    async def _acall(self, work: Callable[[], Awaitable[T]], sleep: AsyncSleep) -> T:
        delay = self.min_delay_sec
        retrying = False

        while True:
            if self.should_pause(self.quota.get(), retrying):
                await sleep(delay)
                delay *= 2

            try:
                return await work()
            except QuotaExhausted:
                retrying = True
