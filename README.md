# ironspider

A small asynchronous crawling framework built on `asyncio` and `httpx`. You
describe what to fetch and how to read it in a `Spider`. The `Engine` does the
rest:

- a `SimpleScheduler` (`ironspider.scheduler`) queues requests first in, first out,
- a `Downloader` (`ironspider.downloader`) fetches them over HTTP, with an
  optional rate limit given as a `Quota`,
- your spider's `parse` turns each `Response` into new requests and items,
- a `PipelineManager` (`ironspider.pipeline`) passes each item through the
  pipelines registered for its exact type.

The crawl ends when the scheduler is empty, the downloader is idle and no task
is left running. Every spider's `close()` is then called, and the HTTP client
is closed.

## Installation

```
pip install ironspider
```

## Writing a spider

Subclass `ironspider.spider.Spider` and provide `name`, `start_urls()` and
`parse(response)`. Use `self.request(url, ...)` to build requests that come
back to this spider; `method`, `headers`, `body` and `meta` are optional.

```python
import asyncio

from ironspider.config import Configuration
from ironspider.engine import Engine
from ironspider.pipeline import Pipeline, PipelineManager
from ironspider.scheduler import SimpleScheduler
from ironspider.spider import Spider, SpiderResult


class PageSpider(Spider):
    @property
    def name(self):
        return "pages"

    def start_urls(self):
        return [self.request("http://localhost:5000/")]

    def parse(self, response):
        return SpiderResult.items_only([response.body])


def show(item):
    print(item)
    return item


pipelines = PipelineManager()
pipelines.add_pipeline(str, Pipeline(show), 10)

engine = Engine(
    SimpleScheduler(),
    [PageSpider()],
    pipelines,
    Configuration(http_error_allow_codes={404}),
)
asyncio.run(engine.start())
```

`parse` returns a `SpiderResult` with two lists, `requests` and `items`. Build
one directly, or with `SpiderResult.requests_only(...)`,
`SpiderResult.items_only(...)` or `SpiderResult.empty()`.

A `Response` carries the HTTP `status`, the decoded `body` and the `request`
that produced it.

## Downloading

`Downloader.fetch` returns `None`, and logs an error, when the request times
out, cannot connect, is malformed, fails while reading the body, or gets a
status of 400 or above that is not in `http_error_allow_codes`. Redirects are
not followed. `Downloader.is_idle()` tells whether a request is in flight.

A `Quota` sets the request rate: `Quota.per_second(n)` and `Quota.per_minute(n)`
allow `n` requests per period with bursts of up to `n`; `Quota.with_period(p)`
allows one request every `p` seconds (a number or a `timedelta`). Counts and
periods must be positive, otherwise `ValueError` is raised. The `RateLimiter`
in `ironspider.downloader` applies it.

## Pipelines

A `Pipeline` wraps a function that takes an item, or `None`, and returns an
item or `None`. If it is given an `item_type`, an item of another type reaches
the function as `None`. `PipelineManager.add_pipeline(item_type, pipeline,
priority)` registers a pipeline for one item type; pipelines run from the lowest
priority to the highest, and each one's output is the next one's input.
Negative priorities raise `ValueError`. `process_item` returns the final value;
an item whose type has no pipelines is logged with a warning and `None` is
returned.

## Scheduler

`SimpleScheduler.enqueue` adds a request, `dequeue()` waits for the next one,
and `is_empty()` tells whether any are waiting. After `close_init_sender()`,
`dequeue()` returns `None` once the queue is drained, and `enqueue` raises
`SchedulerClosedError`.

## Configuration

`Configuration` (`ironspider.config`) holds:

- `downloader_request_timeout`: seconds, default 3,
- `downloader_delay`: seconds, default 0,
- `downloader_request_quota`: a `Quota` or `None` (the default, no limit),
- `user_agent`: default `"IronSpider/0.0.1"`,
- `http_error_allow_codes`: error statuses whose responses are still passed to
  the spider; empty by default.

## Example

`ironspider.example` holds a spider that follows a chain of article pages
served at `<base-url>/article/<n>`, starting from articles 4, 5 and 3 and going
from each article to the one numbered below it, down to article 1. Each article
becomes an `ArticleItem` with a `title` and an `author`. Run it with:

```
ironspider-example
ironspider-example --base-url http://localhost:5000
```

It logs each item, the number of URLs discovered at the end, and allows 404
responses through to the spider.

## Limitations

- `downloader_delay` and `user_agent` are stored in `Configuration` but the
  engine and downloader do not apply them.
- Requests are not deduplicated: a URL enqueued twice is fetched twice.
- Nothing is stored: items exist only as long as the pipelines keep them.