from __future__ import annotations

import functools
from typing import Any, Callable, Mapping, TypeVar

from quotaguard.config import Settings, get_settings
from quotaguard.core.context import CallContext
from quotaguard.core.coordinator import CallCoordinator
from quotaguard.core.quota import QuotaState
from quotaguard.integrations.http_executor import RequestExecutor
from quotaguard.services.quota import get_shared_quota

T = TypeVar("T")


def rate_limited(coordinator: CallCoordinator) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Decorate ``fn(ctx, *args, **kwargs)`` so every invocation goes through ``coordinator``."""

    def decorator(fn: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(fn)
        def wrapper(ctx: CallContext, *args: Any, **kwargs: Any) -> T:
            return coordinator.call(ctx, lambda: fn(ctx, *args, **kwargs))

        return wrapper

    return decorator


class RateLimitedExecutor:
    def __init__(self, executor: RequestExecutor, coordinator: CallCoordinator) -> None:
        self.executor = executor
        self.coordinator = coordinator
        self._get = rate_limited(coordinator)(executor.get)

    @property
    def quota(self) -> QuotaState:
        return self.coordinator.quota

    def get(self, ctx: CallContext, path: str, params: Mapping[str, Any] | None = None) -> Any:
        return self._get(ctx, path, params)


def build_client(settings: Settings | None = None, quota: QuotaState | None = None) -> RateLimitedExecutor:
    settings = settings or get_settings()
    quota = quota or get_shared_quota()
    executor = RequestExecutor(settings, quota=quota)
    return RateLimitedExecutor(executor, CallCoordinator.from_settings(settings, quota))
