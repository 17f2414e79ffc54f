"""Client bootstrap tying the transport, the thread store, and parent channels together."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

from discord import ChannelType
from discord.enums import try_enum

from . import routes
from .channel import ParentChannel
from .events import ThreadCreateHandler
from .models import THREAD_TYPES, Thread
from .store import ThreadStore
from .transport import RestClient

logger = logging.getLogger(__name__)


class ThreadClient:
    """Owns the REST transport and the thread store shared by every channel."""

    def __init__(self, rest: RestClient | None = None, *, store: ThreadStore | None = None) -> None:
        self.rest = rest if rest is not None else RestClient()
        self.threads = store if store is not None else ThreadStore()
        self.create_handler = ThreadCreateHandler(self.threads)
        self._channels: dict[int, ParentChannel] = {}

    def channel(
        self,
        channel_id: int,
        *,
        guild_id: int,
        type: ChannelType = ChannelType.text,
        default_auto_archive_duration: int | None = None,
        name: str = "",
    ) -> ParentChannel:
        """Return the parent channel for ``channel_id``, building it when unknown."""

        existing = self._channels.get(channel_id)
        if existing is not None:
            return existing
        parent = ParentChannel(
            client=self,
            id=channel_id,
            guild_id=guild_id,
            type=type,
            name=name,
            default_auto_archive_duration=default_auto_archive_duration,
        )
        self._channels[channel_id] = parent
        return parent

    async def fetch_parent(self, channel_id: int) -> ParentChannel:
        """Fetch ``channel_id`` from Discord and bind it as a parent channel."""

        data = await self.rest.get(routes.channel(channel_id))
        parent = ParentChannel.from_payload(self, data)
        existing = self._channels.get(parent.id)
        if existing is not None:
            existing.type = parent.type
            existing.name = parent.name
            existing.default_auto_archive_duration = parent.default_auto_archive_duration
            return existing
        self._channels[parent.id] = parent
        return parent

    async def fetch_channel(
        self,
        channel_id: int,
        *,
        cache: bool = True,
        force: bool = False,
    ) -> Thread | None:
        """Return thread ``channel_id``, from the store unless ``force`` is set."""

        if not force:
            existing = self.threads.get(channel_id)
            if existing is not None:
                return existing

        data: dict[str, Any] = await self.rest.get(routes.channel(channel_id))
        if try_enum(ChannelType, data.get("type")) not in THREAD_TYPES:
            logger.warning("Channel %s is not a thread. Skipping.", channel_id)
            return None
        return self.threads.materialize(data, cache=cache)

    async def close(self) -> None:
        await self.rest.close()


@asynccontextmanager
async def connect(token: str | None = None, **rest_options: Any) -> AsyncIterator[ThreadClient]:
    """
    Open a :class:`ThreadClient` for the duration of the block.

    The underlying aiohttp session is closed on exit.
    """

    client = ThreadClient(RestClient(token, **rest_options))
    try:
        yield client
    finally:
        await client.close()


__all__ = ["ThreadClient", "connect"]
