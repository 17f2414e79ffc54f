"""
Archive listing cursors.

Discord exposes two archive listings with incompatible ``before`` cursors:

* ``/channels/{id}/threads/archived/{public|private}`` is ordered by archive
  time and takes an ISO-8601 timestamp.
* ``/channels/{id}/users/@me/threads/archived/private`` (threads the caller has
  joined) is ordered by id and takes a snowflake.

:func:`build_archive_request` picks the endpoint and encodes ``before`` for
it. Values that cannot be expressed on the chosen endpoint are dropped rather
than rejected: a thread without a known archive time on the general listing,
or a plain date on the joined listing.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict

from . import routes
from .errors import InvalidArgumentError
from .models import Thread
from .resolvers import DateRef, ThreadRef, classify_before, isoformat

logger = logging.getLogger(__name__)

ARCHIVE_TYPES = ("public", "private")


@dataclass(frozen=True, slots=True)
class ArchiveRequest:
    """Path and query for one archived-thread listing call."""

    path: str
    joined: bool
    query: Dict[str, Any] = field(default_factory=dict)


def uses_joined_listing(thread_type: str, fetch_all: bool) -> bool:
    return thread_type == "private" and not fetch_all


def select_before(
    before: Any, *, joined: bool, lookup: Callable[[int], Thread | None]
) -> str | None:
    """Return the ``before`` query value for the listing, or ``None`` to omit it.

    ``lookup`` finds a cached thread by id within the listing channel only.
    """

    if before is None:
        return None

    ref = classify_before(before)
    if isinstance(ref, DateRef):
        if joined:
            logger.debug("Dropping date cursor %s on joined archive listing", ref.iso)
            return None
        return ref.iso

    if joined:
        return str(ref.id)

    thread = ref.thread if isinstance(ref, ThreadRef) else lookup(ref.id)
    archived_at = thread.archived_at if thread is not None else None
    if archived_at is None:
        logger.debug("No archive timestamp known for thread %s; omitting cursor", ref.id)
        return None
    return isoformat(archived_at)


def build_archive_request(
    channel_id: int,
    *,
    thread_type: str = "public",
    fetch_all: bool = False,
    before: Any = None,
    limit: int | None = None,
    lookup: Callable[[int], Thread | None],
) -> ArchiveRequest:
    """Choose the archive endpoint for ``thread_type`` and encode its query."""

    if thread_type not in ARCHIVE_TYPES:
        raise InvalidArgumentError("type", "'public' or 'private' archive type")

    joined = uses_joined_listing(thread_type, fetch_all)
    if joined:
        path = routes.channel_joined_archived_threads(channel_id)
    else:
        path = routes.channel_archived_threads(channel_id, thread_type)

    query: Dict[str, Any] = {}
    if limit is not None:
        query["limit"] = limit
    cursor = select_before(before, joined=joined, lookup=lookup)
    if cursor is not None:
        query["before"] = cursor
    return ArchiveRequest(path=path, joined=joined, query=query)


__all__ = [
    "ARCHIVE_TYPES",
    "ArchiveRequest",
    "build_archive_request",
    "select_before",
    "uses_joined_listing",
]
