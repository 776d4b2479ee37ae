"""Requests queued for download and the responses they produce."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from ironspider.spider import Spider


@dataclass
class Request:
    """A URL to fetch, together with the spider that will parse the result."""

    spider: Spider
    url: str
    method: str = "GET"
    headers: Optional[Mapping[str, str]] = None
    body: Optional[str] = None
    meta: Optional[dict[str, str]] = None


@dataclass
class Response:
    """A downloaded page: its HTTP status, decoded body and originating request."""

    status: int
    body: str
    request: Request