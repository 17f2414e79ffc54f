"""REST paths for the thread endpoints, relative to the API base URL."""

from __future__ import annotations


def channel(channel_id: int) -> str:
    return f"/channels/{channel_id}"


def threads(channel_id: int, message_id: int | None = None) -> str:
    """Thread creation path, optionally started from ``message_id``."""

    if message_id is not None:
        return f"/channels/{channel_id}/messages/{message_id}/threads"
    return f"/channels/{channel_id}/threads"


def channel_archived_threads(channel_id: int, thread_type: str) -> str:
    return f"/channels/{channel_id}/threads/archived/{thread_type}"


def channel_joined_archived_threads(channel_id: int) -> str:
    return f"/channels/{channel_id}/users/@me/threads/archived/private"


def guild_active_threads(guild_id: int) -> str:
    return f"/guilds/{guild_id}/threads/active"


__all__ = [
    "channel",
    "channel_archived_threads",
    "channel_joined_archived_threads",
    "guild_active_threads",
    "threads",
]
