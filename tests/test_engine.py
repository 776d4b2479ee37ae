import asyncio
import logging
from dataclasses import dataclass

import httpx
import pytest
import respx

from ironspider.config import Configuration
from ironspider.engine import Engine
from ironspider.pipeline import Pipeline, PipelineManager
from ironspider.scheduler import SimpleScheduler
from ironspider.spider import Spider, SpiderResult

BASE = "http://crawl.test"


@dataclass
class Page:
    url: str
    body: str


class LinkSpider(Spider):
    def __init__(self, start=("a",)):
        self._start = start
        self.closed = 0

    @property
    def name(self):
        return "links"

    def start_urls(self):
        return [self.request(f"{BASE}/{path}") for path in self._start]

    def parse(self, response):
        links = response.body.split()
        return SpiderResult(
            requests=[self.request(f"{BASE}/{link}") for link in links],
            items=[Page(response.request.url, response.body)],
        )

    def close(self):
        self.closed += 1


class FailingSpider(LinkSpider):
    def parse(self, response):
        raise RuntimeError("parse broke")


def collecting_pipelines():
    collected = []

    def collect(item):
        collected.append(item)
        return item

    manager = PipelineManager()
    manager.add_pipeline(Page, Pipeline(collect, Page), 0)
    return manager, collected


async def run(engine):
    await asyncio.wait_for(engine.start(), timeout=10)


@pytest.mark.asyncio
async def test_engine_follows_links_and_processes_items():
    spider = LinkSpider()
    pipelines, collected = collecting_pipelines()
    with respx.mock:
        respx.get(f"{BASE}/a").mock(return_value=httpx.Response(200, text="b c"))
        respx.get(f"{BASE}/b").mock(return_value=httpx.Response(200, text=""))
        respx.get(f"{BASE}/c").mock(return_value=httpx.Response(200, text=""))
        engine = Engine(SimpleScheduler(), [spider], pipelines)
        await run(engine)
    assert sorted(page.url for page in collected) == [f"{BASE}/a", f"{BASE}/b", f"{BASE}/c"]
    assert engine.completed()
    assert spider.closed == 1


@pytest.mark.asyncio
async def test_engine_with_no_start_urls_finishes():
    spider = LinkSpider(start=())
    pipelines, collected = collecting_pipelines()
    engine = Engine(SimpleScheduler(), [spider], pipelines)
    await run(engine)
    assert collected == []
    assert spider.closed == 1


@pytest.mark.asyncio
async def test_engine_skips_disallowed_status():
    spider = LinkSpider()
    pipelines, collected = collecting_pipelines()
    with respx.mock:
        respx.get(f"{BASE}/a").mock(return_value=httpx.Response(404, text="gone"))
        engine = Engine(SimpleScheduler(), [spider], pipelines)
        await run(engine)
    assert collected == []
    assert spider.closed == 1


@pytest.mark.asyncio
async def test_engine_parses_allowed_error_status():
    spider = LinkSpider()
    pipelines, collected = collecting_pipelines()
    config = Configuration(http_error_allow_codes={404})
    with respx.mock:
        respx.get(f"{BASE}/a").mock(return_value=httpx.Response(404, text=""))
        engine = Engine(SimpleScheduler(), [spider], pipelines, config)
        await run(engine)
    assert collected == [Page(f"{BASE}/a", "")]


@pytest.mark.asyncio
async def test_engine_survives_failing_parse(caplog):
    caplog.set_level(logging.ERROR)
    spider = FailingSpider()
    pipelines, collected = collecting_pipelines()
    with respx.mock:
        respx.get(f"{BASE}/a").mock(return_value=httpx.Response(200, text="b"))
        engine = Engine(SimpleScheduler(), [spider], pipelines)
        await run(engine)
    assert collected == []
    assert spider.closed == 1
    assert any("Task failed" in record.getMessage() for record in caplog.records)


@pytest.mark.asyncio
async def test_engine_closes_scheduler_after_run():
    scheduler = SimpleScheduler()
    pipelines, _ = collecting_pipelines()
    engine = Engine(scheduler, [LinkSpider(start=())], pipelines)
    await run(engine)
    assert await scheduler.dequeue() is None


def test_stop_closes_every_spider():
    spiders = [LinkSpider(), LinkSpider()]
    pipelines, _ = collecting_pipelines()
    engine = Engine(SimpleScheduler(), spiders, pipelines)
    engine.stop()
    assert [spider.closed for spider in spiders] == [1, 1]


def test_engine_uses_default_configuration():
    pipelines, _ = collecting_pipelines()
    engine = Engine(SimpleScheduler(), [], pipelines)
    assert engine.config == Configuration()
    assert engine.completed()