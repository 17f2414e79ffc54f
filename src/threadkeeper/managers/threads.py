"""Thread manager for a single parent channel."""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, TYPE_CHECKING

from discord import ChannelType

from .. import routes
from ..errors import InvalidArgumentError
from ..models import FetchedThreads, THREAD_TYPES, Thread
from ..pagination import build_archive_request
from ..resolvers import is_snowflake, resolve_id
from ..store import ThreadStore

if TYPE_CHECKING:  # pragma: no cover - type-checking only
    from ..channel import ParentChannel
    from ..client import ThreadClient

logger = logging.getLogger(__name__)

_UNSET: Any = object()

_ARCHIVED_OPTIONS = frozenset({"type", "fetch_all", "before", "limit"})


def coerce_thread_type(value: Any) -> ChannelType:
    """Return the thread :class:`ChannelType` named by ``value``.

    Accepts a ``ChannelType`` member, its integer value, or its name.
    """
    try:
        if isinstance(value, ChannelType):
            kind = value
        elif isinstance(value, int) and not isinstance(value, bool):
            kind = ChannelType(value)
        elif isinstance(value, str):
            kind = ChannelType[value]
        else:
            raise TypeError(type(value).__name__)
    except (KeyError, TypeError, ValueError) as exc:
        raise InvalidArgumentError("type", "thread ChannelType") from exc

    if kind not in THREAD_TYPES:
        raise InvalidArgumentError("type", "thread ChannelType")
    return kind


def resolve_create_type(
    parent_type: ChannelType,
    *,
    has_start_message: bool,
    requested: ChannelType | None,
) -> ChannelType:
    """
    Decide the type of a thread about to be created.

    =================  =================  ==========================
    start message      parent is news     result
    =================  =================  ==========================
    yes                any                parent default (requested ignored)
    no                 yes                ``news_thread``
    no                 no                 requested or ``public_thread``
    =================  =================  ==========================
    """
    parent_default = (
        ChannelType.news_thread if parent_type == ChannelType.news else ChannelType.public_thread
    )
    if has_start_message or parent_type == ChannelType.news:
        return parent_default
    return requested or parent_default


class ThreadManager:
    """Creates and lists the threads of one parent channel.

    The manager never stores threads itself: :attr:`cache` is a view over the
    client's shared :class:`ThreadStore`, filtered by ``parent_id``.
    """

    def __init__(self, channel: "ParentChannel", client: "ThreadClient") -> None:
        self.channel = channel
        self.client = client

    @property
    def store(self) -> ThreadStore:
        return self.client.threads

    @property
    def cache(self) -> Dict[int, Thread]:
        """Cached threads belonging to :attr:`channel`, in insertion order."""

        return {thread.id: thread for thread in self.store.list_for_parent(self.channel.id)}

    # ------------------------------------------------------------------ #
    # CACHE & RESOLUTION
    # ------------------------------------------------------------------ #

    def add(self, thread: Thread) -> Thread:
        """Insert ``thread`` into the shared store; an existing entry wins."""

        return self.store.add(thread)

    def resolve(self, thread: Any) -> Thread | None:
        """Return the cached thread for a thread resolvable."""

        if isinstance(thread, Thread):
            return thread
        if is_snowflake(thread):
            cached = self.store.get(int(thread))
            if cached is not None and cached.parent_id == self.channel.id:
                return cached
        return None

    def resolve_id(self, thread: Any) -> int | None:
        return resolve_id(thread)

    # ------------------------------------------------------------------ #
    # CREATE
    # ------------------------------------------------------------------ #

    async def create(
        self,
        name: str,
        *,
        auto_archive_duration: int | None = _UNSET,
        start_message: Any = None,
        type: Any = None,
        invitable: bool | None = None,
        rate_limit_per_user: int | None = None,
        reason: str | None = None,
    ) -> Thread:
        """
        Create a thread in :attr:`channel`.

        When ``start_message`` is given Discord derives the thread type from
        the parent channel and ``type`` is ignored. Threads in announcement
        channels are always ``news_thread``. ``invitable`` is only sent for
        private threads.

        :raises InvalidArgumentError: bad ``type`` or unresolvable
            ``start_message``.
        :raises aiohttp.ClientResponseError: the API rejected the request.
        """
        requested = coerce_thread_type(type) if type is not None else None

        start_message_id: int | None = None
        if start_message is not None:
            start_message_id = self.channel.messages.resolve_id(start_message)
            if start_message_id is None:
                raise InvalidArgumentError("start_message", "message resolvable")

        resolved_type = resolve_create_type(
            self.channel.type,
            has_start_message=start_message_id is not None,
            requested=requested,
        )
        if auto_archive_duration is _UNSET:
            auto_archive_duration = self.channel.default_auto_archive_duration

        body = {
            "name": name,
            "auto_archive_duration": auto_archive_duration,
            "type": resolved_type.value,
            "invitable": invitable if resolved_type == ChannelType.private_thread else None,
            "rate_limit_per_user": rate_limit_per_user,
        }
        body = {key: value for key, value in body.items() if value is not None}

        data = await self.client.rest.post(
            routes.threads(self.channel.id, start_message_id),
            body=body,
            reason=reason,
        )
        return self.client.create_handler.handle(data)

    # ------------------------------------------------------------------ #
    # FETCH
    # ------------------------------------------------------------------ #

    async def fetch(
        self,
        selector: Any = None,
        *,
        cache: bool = True,
        force: bool = False,
    ) -> Thread | FetchedThreads | None:
        """
        Fetch one thread or a listing.

        ``selector`` may be ``None`` (active threads), a thread resolvable
        (that single thread), or a mapping with an ``archived`` entry holding
        :meth:`fetch_archived` keyword arguments. ``force`` only applies to
        single-thread fetches.
        """
        if selector is None:
            return await self.fetch_active(cache=cache)

        thread_id = resolve_id(selector)
        if thread_id is not None:
            return await self.client.fetch_channel(thread_id, cache=cache, force=force)

        if isinstance(selector, Mapping) and selector.get("archived") is not None:
            options = dict(selector["archived"])
            unknown = set(options) - _ARCHIVED_OPTIONS
            if unknown:
                raise InvalidArgumentError(
                    "archived", f"mapping of {sorted(_ARCHIVED_OPTIONS)} (got {sorted(unknown)})"
                )
            return await self.fetch_archived(**options, cache=cache)
        return await self.fetch_active(cache=cache)

    async def fetch_archived(
        self,
        *,
        type: str = "public",
        fetch_all: bool = False,
        before: Any = None,
        limit: int | None = None,
        cache: bool = True,
    ) -> FetchedThreads:
        """
        List archived threads of :attr:`channel`.

        ``before`` may be a thread resolvable or a date-like value; see
        :mod:`threadkeeper.pagination` for how it is encoded per listing.
        """
        request = build_archive_request(
            self.channel.id,
            thread_type=type,
            fetch_all=fetch_all,
            before=before,
            limit=limit,
            lookup=self.resolve,
        )
        raw = await self.client.rest.get(request.path, query=request.query)
        result = self.map_threads(
            raw, self.store, parent=self.channel, cache=cache
        )
        logger.info(
            "Fetched %d archived %s thread(s) for channel %s (has_more=%s)",
            len(result.threads),
            type,
            self.channel.id,
            result.has_more,
        )
        return result

    async def fetch_active(self, *, cache: bool = True) -> FetchedThreads:
        """List active threads in the guild that belong to :attr:`channel`."""

        raw = await self.client.rest.get(routes.guild_active_threads(self.channel.guild_id))
        result = self.map_threads(raw, self.store, parent=self.channel, cache=cache)
        logger.info(
            "Fetched %d active thread(s) for channel %s",
            len(result.threads),
            self.channel.id,
        )
        return result

    # ------------------------------------------------------------------ #
    # MAPPING
    # ------------------------------------------------------------------ #

    @staticmethod
    def map_threads(
        raw: Mapping[str, Any],
        store: ThreadStore,
        *,
        parent: "ParentChannel" | None = None,
        guild_id: int | None = None,
        cache: bool = True,
    ) -> FetchedThreads:
        """Turn a thread listing payload into :class:`FetchedThreads`."""

        scope_guild = guild_id if guild_id is not None else getattr(parent, "guild_id", None)
        threads: Dict[int, Thread] = {}
        for payload in raw.get("threads", []):
            thread = store.materialize(payload, guild_id=scope_guild, cache=cache)
            if parent is not None and thread.parent_id != parent.id:
                continue
            threads[thread.id] = thread

        # Member records carry the thread's id as their own id.
        for member in raw.get("members", []):
            thread = store.get(int(member["id"]))
            if thread is not None:
                thread.members.add(member)

        return FetchedThreads(threads=threads, has_more=bool(raw.get("has_more") or False))


__all__ = ["ThreadManager", "coerce_thread_type", "resolve_create_type"]
