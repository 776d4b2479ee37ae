"""Item pipelines: handlers chained per item type and ordered by priority."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Optional

logger = logging.getLogger(__name__)

Handler = Callable[[Optional[Any]], Optional[Any]]


class Pipeline:
    """A single processing step that receives an item (or None) and returns one (or None)."""

    def __init__(self, handler: Handler, item_type: Optional[type] = None) -> None:
        self.handler = handler
        self.item_type = item_type

    def try_process(self, item: Optional[Any]) -> Optional[Any]:
        """Run the handler; an item of the wrong type reaches it as None."""
        if item is not None and self.item_type is not None and not isinstance(item, self.item_type):
            item = None
        return self.handler(item)


@dataclass
class _Prioritized:
    priority: int
    pipeline: Pipeline


class PipelineManager:
    """Routes items to the pipelines registered for their exact type."""

    def __init__(self) -> None:
        self._pipelines: dict[type, list[_Prioritized]] = {}

    def add_pipeline(self, item_type: type, pipeline: Pipeline, priority: int) -> None:
        """Register ``pipeline`` for ``item_type``; lower priorities run first."""
        if priority < 0:
            raise ValueError("pipeline priority must not be negative")
        entries = self._pipelines.setdefault(item_type, [])
        entries.append(_Prioritized(priority, pipeline))
        entries.sort(key=lambda entry: entry.priority)

    def process_item(self, item: Any) -> Optional[Any]:
        """Pass ``item`` through its type's pipelines in order and return the final value."""
        entries = self._pipelines.get(type(item))
        if entries is None:
            logger.warning("No pipeline for type %s", type(item).__name__)
            return None
        current: Optional[Any] = item
        for entry in entries:
            current = entry.pipeline.try_process(current)
        return current