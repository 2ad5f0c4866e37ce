from __future__ import annotations

from functools import lru_cache
from typing import Any

from quotaguard.config import get_settings
from quotaguard.core.quota import QuotaState, utcnow


@lru_cache
def get_shared_quota() -> QuotaState:
    return QuotaState()


def get_quota_state() -> dict[str, Any]:
    settings = get_settings()
    snapshot = get_shared_quota().get()
    return {
        **snapshot.to_dict(),
        "fresh": snapshot.is_fresh(settings.freshness_window_sec, utcnow()),
        "freshness_window_sec": settings.freshness_window_sec,
        "min_delay_sec": settings.min_delay_sec,
    }
