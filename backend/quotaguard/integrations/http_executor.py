from __future__ import annotations

import logging
from typing import Any, Mapping

import requests

from quotaguard.config import Settings, get_settings
from quotaguard.core.context import CallContext, DeadlineExceeded
from quotaguard.core.quota import QuotaState
from quotaguard.domain.errors import QuotaExhausted, Unauthorized, UnexpectedStatus, UserAgentInvalid

logger = logging.getLogger(__name__)


def _int_header(headers: Mapping[str, str], name: str) -> int:
    raw = headers.get(name)
    if raw is None:
        return 0
    try:
        return int(raw.strip())
    except ValueError:
        return 0


class RequestExecutor:
    """Performs one GET against the remote API and reports its quota headers."""

    def __init__(
        self,
        settings: Settings | None = None,
        quota: QuotaState | None = None,
        session: Any = None,
    ) -> None:
        self.settings = settings or get_settings()
        if not self.settings.user_agent:
            raise UserAgentInvalid()

        self.quota = quota
        # plain requests.get per call unless the caller supplies a session
        self.session = session or requests
        self.headers = {"User-Agent": self.settings.user_agent}
        # some endpoints (search) only answer authenticated requests
        if self.settings.api_token:
            self.headers["Authorization"] = f"Discogs token={self.settings.api_token}"

    def _timeout(self, ctx: CallContext) -> float:
        remaining = ctx.remaining()
        if remaining is None:
            return self.settings.request_timeout_sec
        return min(self.settings.request_timeout_sec, remaining)

    def record_quota(self, headers: Mapping[str, str]) -> None:
        if self.quota is None:
            return
        self.quota.update(
            _int_header(headers, self.settings.header_total),
            _int_header(headers, self.settings.header_used),
            _int_header(headers, self.settings.header_remaining),
        )

    def get(self, ctx: CallContext, path: str, params: Mapping[str, Any] | None = None) -> Any:
        err = ctx.err()
        if err is not None:
            raise err

        timeout = self._timeout(ctx)
        if timeout <= 0:
            raise DeadlineExceeded()

        url = f"{self.settings.api_base_url}{path}"
        logger.debug("GET %s params=%s", url, params)
        response = self.session.get(
            url,
            params=params,
            headers=self.headers,
            timeout=timeout,
        )
        self.record_quota(response.headers)

        if response.status_code == 401:
            raise Unauthorized()
        if response.status_code == 429:
            logger.warning("Quota exhausted for GET %s", url)
            raise QuotaExhausted()
        if response.status_code != 200:
            raise UnexpectedStatus(response.status_code, response.reason or "")

        return response.json()
