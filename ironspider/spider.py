"""The spider interface and the results a spider's parser returns."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Optional

from ironspider.request import Request, Response

logger = logging.getLogger(__name__)


@dataclass
class SpiderResult:
    """New requests to crawl and items to send through the pipelines."""

    requests: list[Request] = field(default_factory=list)
    items: list[Any] = field(default_factory=list)

    @classmethod
    def requests_only(cls, requests: list[Request]) -> SpiderResult:
        return cls(requests=list(requests))

    @classmethod
    def items_only(cls, items: list[Any]) -> SpiderResult:
        return cls(items=list(items))

    @classmethod
    def empty(cls) -> SpiderResult:
        return cls()


class Spider(ABC):
    """Base class for crawlers: supplies start requests and parses responses."""

    @property
    @abstractmethod
    def name(self) -> str:
        """A short identifier for the spider."""

    @abstractmethod
    def start_urls(self) -> list[Request]:
        """Requests the crawl begins with."""

    @abstractmethod
    def parse(self, response: Response) -> SpiderResult:
        """Turn a response into follow-up requests and scraped items."""

    def close(self) -> None:
        """Called once when the engine stops."""
        logger.debug("Closing spider: %s", self.name)

    def request(
        self,
        url: str,
        method: str = "GET",
        headers: Optional[Mapping[str, str]] = None,
        body: Optional[str] = None,
        meta: Optional[dict[str, str]] = None,
    ) -> Request:
        """Build a request whose response will be parsed by this spider."""
        return Request(
            spider=self,
            url=url,
            method=method,
            headers=headers,
            body=body,
            meta=meta,
        )