from __future__ import annotations

import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable

Clock = Callable[[], datetime]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class QuotaSnapshot:
    """Last reported usage of the remote quota window.

    ``observed_at`` is ``None`` until the first report arrives.
    """

    total: int = 0
    used: int = 0
    remaining: int = 0
    observed_at: datetime | None = None

    def is_fresh(self, window_sec: float, now: datetime) -> bool:
        if self.observed_at is None:
            return False
        return (now - self.observed_at).total_seconds() < window_sec

    def to_dict(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "used": self.used,
            "remaining": self.remaining,
            "observed_at": self.observed_at.isoformat() if self.observed_at is not None else None,
        }


class QuotaState:
    """Lock-guarded holder of the latest QuotaSnapshot, shared by every caller of one quota."""

    def __init__(self, clock: Clock = utcnow) -> None:
        self._clock = clock
        self._lock = threading.Lock()
        self._snapshot = QuotaSnapshot()

    def update(self, total: int, used: int, remaining: int) -> QuotaSnapshot:
        """Record the values reported with a response; values are stored as given."""
        with self._lock:
            self._snapshot = QuotaSnapshot(
                total=total,
                used=used,
                remaining=remaining,
                observed_at=self._clock(),
            )
            return self._snapshot

    def get(self) -> QuotaSnapshot:
        with self._lock:
            return self._snapshot
