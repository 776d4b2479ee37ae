"""The crawl loop: moves requests from the scheduler through download, parsing and pipelines."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Sequence
from typing import Optional

import httpx

from ironspider.config import Configuration
from ironspider.downloader import Downloader
from ironspider.pipeline import PipelineManager
from ironspider.request import Request
from ironspider.scheduler import Scheduler, SchedulerClosedError
from ironspider.spider import Spider, SpiderResult

logger = logging.getLogger(__name__)


class Engine:
    """Runs spiders until every request has been downloaded and handled."""

    def __init__(
        self,
        scheduler: Scheduler,
        spiders: Sequence[Spider],
        pipelines: PipelineManager,
        config: Optional[Configuration] = None,
    ) -> None:
        self.config = config if config is not None else Configuration()
        self._scheduler = scheduler
        self._spiders = list(spiders)
        self._pipelines = pipelines
        self._client = httpx.AsyncClient(timeout=self.config.downloader_request_timeout)
        self._downloader = Downloader(
            self._client,
            self.config.downloader_request_quota,
            set(self.config.http_error_allow_codes),
        )
        self._tasks: set[asyncio.Task] = set()

    def _enqueue_start_urls(self) -> None:
        for spider in self._spiders:
            for request in spider.start_urls():
                try:
                    self._scheduler.enqueue(request)
                except SchedulerClosedError as exc:
                    logger.error("Failed to queue request to scheduler: %r", exc)

    async def _handle_request(self, request: Request) -> None:
        response = await self._downloader.fetch(request)
        result = (
            request.spider.parse(response) if response is not None else SpiderResult.empty()
        )
        for follow_up in result.requests:
            try:
                self._scheduler.enqueue(follow_up)
            except SchedulerClosedError:
                logger.warning("Failed to enqueue request")
        for item in result.items:
            self._pipelines.process_item(item)

    def _spawn(self, request: Request) -> None:
        self._tasks.add(asyncio.ensure_future(self._handle_request(request)))

    def _finish(self) -> None:
        logger.info("No more tasks, downloader idle, and scheduler empty — exiting loop")
        self.stop()

    def stop(self) -> None:
        """Tell every spider that the crawl is over."""
        logger.info("Stopping engine!")
        for spider in self._spiders:
            spider.close()

    def completed(self) -> bool:
        """True when nothing is running, downloading or waiting in the scheduler."""
        return not self._tasks and self._downloader.is_idle() and self._scheduler.is_empty()

    async def start(self) -> None:
        """Crawl from the spiders' start requests until no work is left."""
        logger.info("Starting engine with %d spiders", len(self._spiders))
        self._enqueue_start_urls()

        dequeue: Optional[asyncio.Future] = None
        scheduler_drained = False
        try:
            if self.completed():
                self._finish()
                return
            while True:
                if dequeue is None and not scheduler_drained:
                    dequeue = asyncio.ensure_future(self._scheduler.dequeue())
                waiting = set(self._tasks)
                if dequeue is not None:
                    waiting.add(dequeue)
                if not waiting:
                    self._finish()
                    break

                done, _ = await asyncio.wait(waiting, return_when=asyncio.FIRST_COMPLETED)
                finished = [task for task in done if task in self._tasks]

                if dequeue is not None and dequeue in done:
                    request = dequeue.result()
                    dequeue = None
                    if request is None:
                        scheduler_drained = True
                        if self.completed():
                            self._finish()
                            break
                    else:
                        logger.debug("Dequeued: %s", request.url)
                        self._spawn(request)

                for task in finished:
                    self._tasks.discard(task)
                    error = task.exception()
                    if error is None:
                        logger.debug("Task finished")
                    else:
                        logger.error("Task failed: %r", error)

                if finished and self.completed():
                    self._finish()
                    break
        finally:
            leftovers = list(self._tasks)
            if dequeue is not None:
                leftovers.append(dequeue)
            for pending in leftovers:
                pending.cancel()
            for pending in leftovers:
                with contextlib.suppress(asyncio.CancelledError, Exception):
                    await pending
            self._tasks.clear()
            self._scheduler.close_init_sender()
            await self._client.aclose()
            logger.info("Engine finished crawling.")