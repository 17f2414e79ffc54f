from __future__ import annotations

"""Dataclass models for threads and thread listings.

Thread payload (as returned by the Discord REST API, trimmed):

```
{"id": "1111111111111111111", "type": 11, "guild_id": "...",
 "parent_id": "...", "owner_id": "...", "name": "food-talk",
 "rate_limit_per_user": 0, "message_count": 3, "member_count": 2,
 "thread_metadata": {"archived": false, "auto_archive_duration": 60,
                     "archive_timestamp": "2023-01-01T00:00:00+00:00",
                     "locked": false, "invitable": true}}
```

Listing payload (active and archived endpoints):

```
{"threads": [<thread>, ...], "members": [<thread member>, ...],
 "has_more": false}
```
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional

from discord import ChannelType
from discord.enums import try_enum
from discord.utils import parse_time, snowflake_time

from .members import ThreadMemberCache

THREAD_TYPES = frozenset(
    {ChannelType.news_thread, ChannelType.public_thread, ChannelType.private_thread}
)


def _optional_int(value: Any) -> Optional[int]:
    return int(value) if value is not None else None


@dataclass(eq=False)
class Thread:
    """A thread channel living under a text or announcement channel."""

    id: int
    type: ChannelType = ChannelType.public_thread
    name: str = ""
    guild_id: Optional[int] = None
    parent_id: Optional[int] = None
    owner_id: Optional[int] = None
    archived: bool = False
    archived_at: Optional[datetime] = None
    auto_archive_duration: Optional[int] = None
    locked: bool = False
    invitable: Optional[bool] = None
    rate_limit_per_user: int = 0
    message_count: Optional[int] = None
    member_count: Optional[int] = None
    members: ThreadMemberCache = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.members = ThreadMemberCache(self.id)

    @classmethod
    def from_payload(cls, payload: Dict[str, Any], *, guild_id: int | None = None) -> "Thread":
        thread = cls(id=int(payload["id"]))
        if guild_id is not None:
            thread.guild_id = guild_id
        thread.patch(payload)
        return thread

    def patch(self, payload: Dict[str, Any]) -> None:
        """Merge the fields present in ``payload`` into this thread."""

        if "type" in payload:
            self.type = try_enum(ChannelType, payload["type"])
        if "name" in payload:
            self.name = payload["name"]
        if payload.get("guild_id") is not None:
            self.guild_id = int(payload["guild_id"])
        if "parent_id" in payload:
            self.parent_id = _optional_int(payload["parent_id"])
        if "owner_id" in payload:
            self.owner_id = _optional_int(payload["owner_id"])
        if "rate_limit_per_user" in payload:
            self.rate_limit_per_user = int(payload["rate_limit_per_user"] or 0)
        if "message_count" in payload:
            self.message_count = payload["message_count"]
        if "member_count" in payload:
            self.member_count = payload["member_count"]

        metadata = payload.get("thread_metadata")
        if metadata:
            self.archived = bool(metadata.get("archived", self.archived))
            self.locked = bool(metadata.get("locked", self.locked))
            if "auto_archive_duration" in metadata:
                self.auto_archive_duration = metadata["auto_archive_duration"]
            if "archive_timestamp" in metadata:
                self.archived_at = parse_time(metadata["archive_timestamp"])
            if "invitable" in metadata:
                self.invitable = metadata["invitable"]

        if payload.get("member"):
            self.members.add({"id": str(self.id), **payload["member"]})

    @property
    def created_at(self) -> datetime:
        return snowflake_time(self.id)

    @property
    def is_private(self) -> bool:
        return self.type == ChannelType.private_thread

    def __repr__(self) -> str:
        return f"<Thread id={self.id} name={self.name!r} parent_id={self.parent_id} archived={self.archived}>"


@dataclass(slots=True)
class FetchedThreads:
    """Threads returned by a listing call, plus a continuation hint."""

    threads: Dict[int, Thread] = field(default_factory=dict)
    has_more: bool = False


__all__ = ["FetchedThreads", "THREAD_TYPES", "Thread"]
