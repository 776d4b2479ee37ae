"""Asynchronous web crawling with spiders, a scheduler, a rate-limited downloader and item pipelines."""

__version__ = "0.1.0"

__all__ = [
    "config",
    "downloader",
    "engine",
    "example",
    "pipeline",
    "request",
    "scheduler",
    "spider",
]