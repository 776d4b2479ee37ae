"""A sample spider that walks a chain of numbered article pages."""

from __future__ import annotations

import argparse
import asyncio
import dataclasses
import logging
import re
import threading
from dataclasses import dataclass
from typing import Optional

from bs4 import BeautifulSoup

from ironspider.config import Configuration
from ironspider.engine import Engine
from ironspider.pipeline import Pipeline, PipelineManager
from ironspider.request import Request, Response
from ironspider.scheduler import SimpleScheduler
from ironspider.spider import Spider, SpiderResult

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:5000"
_U32_MAX = 2**32 - 1
_NUMBER = re.compile(r"\d+")


@dataclass
class ArticleItem:
    title: str
    author: str


def extract_number(s: str) -> Optional[int]:
    """The first run of digits in ``s`` as an unsigned 32-bit number, if any."""
    match = _NUMBER.search(s)
    if match is None:
        return None
    value = int(match.group())
    return value if value <= _U32_MAX else None


class ExampleSpider(Spider):
    """Follows article pages downwards from their number until article 1."""

    def __init__(self, base_url: str = DEFAULT_BASE_URL) -> None:
        self.base_url = base_url.rstrip("/")
        self.discovered: set[str] = set()
        self._lock = threading.Lock()

    @property
    def name(self) -> str:
        return "example_spider"

    @staticmethod
    def parse_article_html(html: str) -> Optional[ArticleItem]:
        """Extract title and author from the first ``article`` element."""
        document = BeautifulSoup(html, "html.parser")
        article = document.select_one("article")
        author = document.select_one("article > author")
        if article is None or author is None:
            return None
        article_text = article.get_text().strip()
        author_text = author.get_text().strip()
        title = article_text.replace(author_text, "").strip()
        return ArticleItem(title=title, author=author_text)

    def mark_discovered(self, url: str) -> None:
        with self._lock:
            self.discovered.add(url)

    def is_discovered(self, url: str) -> bool:
        with self._lock:
            return url in self.discovered

    def discovered_count(self) -> int:
        with self._lock:
            return len(self.discovered)

    def _article(self, number: int) -> Request:
        return self.request(f"{self.base_url}/article/{number}")

    def start_urls(self) -> list[Request]:
        return [self._article(4), self._article(5), self._article(3)]

    def parse(self, response: Response) -> SpiderResult:
        item = self.parse_article_html(response.body)
        if item is None:
            logger.info("Empty response")
            return SpiderResult.empty()
        number = extract_number(item.title)
        if number is None:
            return SpiderResult.empty()
        self.mark_discovered(response.request.url)
        if number == 1:
            return SpiderResult.items_only([item])
        if number == 0:
            raise OverflowError("article number 0 has no predecessor")
        return SpiderResult(requests=[self._article(number - 1)], items=[item])


def _print_article(item: Optional[ArticleItem]) -> Optional[ArticleItem]:
    logger.info("Article item pipeline: %r", item)
    return item


def _transform_article(item: Optional[ArticleItem]) -> Optional[ArticleItem]:
    logger.info("Transforming item: %r", item)
    if item is None:
        return None
    return dataclasses.replace(item, author="Transformed author")


def main(argv: Optional[list[str]] = None) -> int:
    """Crawl the article chain and report how many pages were discovered."""
    parser = argparse.ArgumentParser(description="Crawl a chain of article pages.")
    parser.add_argument("--base-url", default=DEFAULT_BASE_URL)
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)

    spider = ExampleSpider(args.base_url)
    pipelines = PipelineManager()
    pipelines.add_pipeline(ArticleItem, Pipeline(_print_article, ArticleItem), 30)
    pipelines.add_pipeline(ArticleItem, Pipeline(_transform_article, ArticleItem), 10)

    config = Configuration(downloader_request_timeout=10.0, http_error_allow_codes={404})
    engine = Engine(SimpleScheduler(), [spider], pipelines, config)
    asyncio.run(engine.start())

    logger.info("Discovered: %d url(s)", spider.discovered_count())
    return 0