"""Handlers that turn raw API responses into live cached objects."""

from __future__ import annotations

import logging
from typing import Any, Dict

from .models import Thread
from .store import ThreadStore

logger = logging.getLogger(__name__)


class ThreadCreateHandler:
    """Materializes a freshly created thread into the shared store."""

    def __init__(self, store: ThreadStore) -> None:
        self._store = store

    def handle(self, data: Dict[str, Any]) -> Thread:
        existing = self._store.has(int(data["id"]))
        thread = self._store.materialize(data, cache=True)
        if not existing:
            logger.info(
                "Created thread %s (%s) under channel %s",
                thread.id,
                thread.name,
                thread.parent_id,
            )
        return thread


__all__ = ["ThreadCreateHandler"]
