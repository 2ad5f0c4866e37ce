from __future__ import annotations


class ApiError(Exception):
    """Error reported by the remote API or raised while configuring a client for it."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message.lower()


class QuotaExhausted(ApiError):
    """The remote service rejected the request because the quota window is used up."""

    def __init__(self, message: str = "too many requests") -> None:
        super().__init__(message)


class Unauthorized(ApiError):
    def __init__(self, message: str = "unauthorized") -> None:
        super().__init__(message)


class UnexpectedStatus(ApiError):
    def __init__(self, status_code: int, reason: str = "") -> None:
        super().__init__(f"unknown error: {status_code} {reason}".rstrip())
        self.status_code = status_code


class UserAgentInvalid(ApiError):
    def __init__(self, message: str = "invalid user-agent") -> None:
        super().__init__(message)
