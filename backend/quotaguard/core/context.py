from __future__ import annotations

import threading
import time


class ContextError(Exception):
    pass


class Cancelled(ContextError):
    def __init__(self) -> None:
        super().__init__("context canceled")


class DeadlineExceeded(ContextError):
    def __init__(self) -> None:
        super().__init__("context deadline exceeded")


class CallContext:
    """Cancellation and deadline signal handed to every rate-limited call.

    Waits are cooperative: ``sleep`` blocks on an event that ``cancel`` sets, so
    another thread can end the wait immediately.
    """

    def __init__(self, timeout: float | None = None) -> None:
        self._cancelled = threading.Event()
        self._deadline = time.monotonic() + timeout if timeout is not None else None

    @classmethod
    def background(cls) -> CallContext:
        return cls()

    @classmethod
    def with_timeout(cls, seconds: float) -> CallContext:
        return cls(timeout=seconds)

    def __enter__(self) -> CallContext:
        return self

    def __exit__(self, *_exc: object) -> None:
        self.cancel()

    def cancel(self) -> None:
        self._cancelled.set()

    def remaining(self) -> float | None:
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    def err(self) -> ContextError | None:
        if self._cancelled.is_set():
            return Cancelled()
        if self._deadline is not None and time.monotonic() >= self._deadline:
            return DeadlineExceeded()
        return None

    def done(self) -> bool:
        return self.err() is not None

    def sleep(self, seconds: float) -> None:
        """Wait ``seconds``, raising the context error as soon as the context ends."""
        err = self.err()
        if err is not None:
            raise err

        remaining = self.remaining()
        if remaining is not None and remaining < seconds:
            if self._cancelled.wait(remaining):
                raise Cancelled()
            raise DeadlineExceeded()

        if self._cancelled.wait(seconds):
            raise Cancelled()
