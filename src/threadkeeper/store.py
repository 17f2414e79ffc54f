"""
Client-wide thread arena.

``ThreadStore`` holds every thread the client has observed, keyed by id and
kept in insertion order. Alongside the records it maintains a per-parent index
of thread ids so each :class:`~threadkeeper.managers.threads.ThreadManager`
can expose a filtered view of its own channel's threads without keeping a
second copy of the data.

Two write paths exist:

``add``
    Idempotent insert of an already-built :class:`Thread`. An existing entry
    for the same id wins and is returned unchanged.
``materialize``
    Obtain-or-create from a raw payload. Existing entries are patched in place
    when ``cache`` is true. Merges are last-write-wins by arrival order.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterator, List

from .models import Thread

logger = logging.getLogger(__name__)


class ThreadStore:
    """Ordered id -> :class:`Thread` mapping shared by every thread manager."""

    def __init__(self) -> None:
        self._records: dict[int, Thread] = {}
        self._by_parent: dict[int | None, set[int]] = {}

    # ------------------------------------------------------------------ #
    # WRITE helpers
    # ------------------------------------------------------------------ #

    def add(self, thread: Thread) -> Thread:
        """Insert ``thread`` unless its id is already cached; return the cached one."""

        existing = self._records.get(thread.id)
        if existing is not None:
            return existing
        self._records[thread.id] = thread
        self._index(thread)
        return thread

    def materialize(
        self,
        payload: Dict[str, Any],
        *,
        guild_id: int | None = None,
        cache: bool = True,
    ) -> Thread:
        """Return the thread for ``payload``, creating or refreshing it."""

        thread_id = int(payload["id"])
        existing = self._records.get(thread_id)
        if existing is not None:
            if cache:
                previous_parent = existing.parent_id
                existing.patch(payload)
                if existing.parent_id != previous_parent:
                    self._unindex(thread_id, previous_parent)
                    self._index(existing)
            return existing

        thread = Thread.from_payload(payload, guild_id=guild_id)
        if cache:
            self.add(thread)
        else:
            logger.debug("Built uncached thread %s", thread_id)
        return thread

    def remove(self, thread_id: int) -> Thread | None:
        """Drop ``thread_id`` from the arena if present."""

        thread = self._records.pop(thread_id, None)
        if thread is not None:
            self._unindex(thread_id, thread.parent_id)
        return thread

    def clear(self) -> None:
        self._records.clear()
        self._by_parent.clear()

    # ------------------------------------------------------------------ #
    # READ helpers
    # ------------------------------------------------------------------ #

    def get(self, thread_id: int) -> Thread | None:
        return self._records.get(thread_id)

    def has(self, thread_id: int) -> bool:
        return thread_id in self._records

    def ids_for_parent(self, parent_id: int) -> set[int]:
        """Return a copy of the ids indexed under ``parent_id``."""

        return set(self._by_parent.get(parent_id, ()))

    def list_for_parent(self, parent_id: int) -> List[Thread]:
        """Return threads under ``parent_id`` in insertion order."""

        ids = self._by_parent.get(parent_id)
        if not ids:
            return []
        return [thread for tid, thread in self._records.items() if tid in ids]

    def __contains__(self, thread_id: object) -> bool:
        return thread_id in self._records

    def __iter__(self) -> Iterator[Thread]:
        return iter(list(self._records.values()))

    def __len__(self) -> int:
        return len(self._records)

    # ------------------------------------------------------------------ #
    # INDEX maintenance
    # ------------------------------------------------------------------ #

    def _index(self, thread: Thread) -> None:
        self._by_parent.setdefault(thread.parent_id, set()).add(thread.id)

    def _unindex(self, thread_id: int, parent_id: int | None) -> None:
        ids = self._by_parent.get(parent_id)
        if ids is None:
            return
        ids.discard(thread_id)
        if not ids:
            del self._by_parent[parent_id]


__all__ = ["ThreadStore"]
