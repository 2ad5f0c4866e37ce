from dataclasses import dataclass
from functools import lru_cache
import os

MINIMUM_DELAY_SEC = 2.5
FRESHNESS_WINDOW_SEC = 10.0


@dataclass(frozen=True)
class Settings:
    app_name: str
    app_env: str
    api_base_url: str
    user_agent: str
    api_token: str
    request_timeout_sec: float
    min_delay_sec: float
    freshness_window_sec: float
    header_total: str
    header_used: str
    header_remaining: str
    log_level: str


def _str_env(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip()


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    return float(raw.strip())


@lru_cache
def get_settings() -> Settings:
    # Delay and freshness defaults are tuned against Discogs, which reports the
    # pre-request remaining count.
    return Settings(
        app_name=os.getenv("APP_NAME", "quotaguard"),
        app_env=os.getenv("APP_ENV", "development"),
        api_base_url=_str_env("API_BASE_URL", "https://api.discogs.com").rstrip("/"),
        user_agent=_str_env("API_USER_AGENT", "quotaguard/0.1"),
        api_token=_str_env("API_TOKEN", ""),
        request_timeout_sec=_float_env("REQUEST_TIMEOUT_SEC", 20.0),
        min_delay_sec=_float_env("QUOTA_MIN_DELAY_SEC", MINIMUM_DELAY_SEC),
        freshness_window_sec=_float_env("QUOTA_FRESHNESS_SEC", FRESHNESS_WINDOW_SEC),
        header_total=_str_env("QUOTA_HEADER_TOTAL", "X-Discogs-Ratelimit"),
        header_used=_str_env("QUOTA_HEADER_USED", "X-Discogs-Ratelimit-Used"),
        header_remaining=_str_env("QUOTA_HEADER_REMAINING", "X-Discogs-Ratelimit-Remaining"),
        log_level=_str_env("LOG_LEVEL", "INFO").upper(),
    )
