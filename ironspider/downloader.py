"""Fetches requests over HTTP, honouring an optional request-rate quota."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable, Iterable
from typing import Optional

import httpx

from ironspider.config import Quota
from ironspider.request import Request, Response

logger = logging.getLogger(__name__)


class RateLimiter:
    """Spaces out permits according to a quota (generic cell rate algorithm)."""

    def __init__(
        self,
        quota: Quota,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._interval = quota.replenish_interval
        self._tolerance = quota.replenish_interval * (quota.max_burst - 1)
        self._clock = clock
        self._sleep = sleep
        self._theoretical_arrival = clock()
        self._lock = asyncio.Lock()

    async def until_ready(self) -> None:
        """Wait until the quota allows one more request, then take the permit."""
        async with self._lock:
            now = self._clock()
            arrival = max(self._theoretical_arrival, now)
            wait = arrival - self._tolerance - now
            if wait > 0:
                await self._sleep(wait)
            self._theoretical_arrival = arrival + self._interval


class Downloader:
    """Sends requests with a shared HTTP client and turns replies into responses."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        quota: Optional[Quota] = None,
        http_error_allow_codes: Optional[Iterable[int]] = None,
    ) -> None:
        self._client = client
        self._active_requests = 0
        self._limiter = RateLimiter(quota) if quota is not None else None
        self._allowed_codes = frozenset(http_error_allow_codes or ())

    def is_idle(self) -> bool:
        """True when no request is in flight."""
        return self._active_requests == 0

    async def fetch(self, request: Request) -> Optional[Response]:
        """Download ``request``; None when it fails or returns a disallowed error status."""
        if self._limiter is not None:
            await self._limiter.until_ready()

        self._active_requests += 1
        try:
            reply = await self._client.request(
                request.method,
                request.url,
                headers=dict(request.headers or {}),
                content=request.body.encode() if request.body else None,
            )
        except httpx.TimeoutException as exc:
            logger.error("Timeout: %s -> %s", request.url, exc)
            return None
        except httpx.ConnectError as exc:
            logger.error(
                "Connection error (maybe server not started): %s -> %s", request.url, exc
            )
            return None
        except (httpx.InvalidURL, httpx.UnsupportedProtocol, httpx.LocalProtocolError) as exc:
            logger.error("Bad request formation: %s -> %s", request.url, exc)
            return None
        except (httpx.DecodingError, httpx.ReadError, httpx.StreamError) as exc:
            logger.error("Body error: %s -> %s", request.url, exc)
            return None
        except httpx.HTTPError as exc:
            logger.error("Request failed (other): %s -> %r", request.url, exc)
            return None
        finally:
            self._active_requests -= 1

        status = reply.status_code
        if status < 400 or status in self._allowed_codes:
            return Response(status=status, body=reply.text, request=request)
        logger.error("Status error [%d]: %s", status, reply.url)
        return None