"""Crawler configuration and request-rate quotas."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta

DEFAULT_USER_AGENT = "IronSpider/0.0.1"
DEFAULT_REQUEST_TIMEOUT = 3.0


def _positive_count(count: int) -> int:
    if isinstance(count, bool) or not isinstance(count, int) or count <= 0:
        raise ValueError(f"quota count must be a positive integer, got {count!r}")
    return count


def _seconds(period: float | timedelta) -> float:
    if isinstance(period, timedelta):
        return period.total_seconds()
    return float(period)


@dataclass(frozen=True)
class Quota:
    """A request budget: one permit every ``replenish_interval`` seconds, bursting to ``max_burst``."""

    replenish_interval: float
    max_burst: int = 1

    def __post_init__(self) -> None:
        if self.replenish_interval <= 0:
            raise ValueError("replenish interval must be positive")
        _positive_count(self.max_burst)

    @classmethod
    def per_second(cls, count: int) -> Quota:
        """Allow ``count`` requests per second, all of them at once if idle."""
        count = _positive_count(count)
        return cls(replenish_interval=1.0 / count, max_burst=count)

    @classmethod
    def per_minute(cls, count: int) -> Quota:
        """Allow ``count`` requests per minute, all of them at once if idle."""
        count = _positive_count(count)
        return cls(replenish_interval=60.0 / count, max_burst=count)

    @classmethod
    def with_period(cls, period: float | timedelta) -> Quota:
        """Allow one request per ``period`` (seconds or a timedelta)."""
        seconds = _seconds(period)
        if seconds <= 0:
            raise ValueError("quota period must be positive")
        return cls(replenish_interval=seconds, max_burst=1)


@dataclass
class Configuration:
    """Settings for the engine and its downloader. Durations are in seconds."""

    downloader_request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    downloader_delay: float = 0.0
    downloader_request_quota: Quota | None = None
    user_agent: str | None = DEFAULT_USER_AGENT
    http_error_allow_codes: set[int] = field(default_factory=set)