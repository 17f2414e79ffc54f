"""Thread membership records attached to cached threads."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Iterator

from discord.utils import parse_time

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ThreadMember:
    """A user's membership in a thread."""

    thread_id: int
    user_id: int | None
    joined_at: datetime | None = None
    flags: int = 0

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "ThreadMember":
        # Discord reuses the thread id as the member record's ``id``.
        user_id = payload.get("user_id")
        return cls(
            thread_id=int(payload["id"]),
            user_id=int(user_id) if user_id is not None else None,
            joined_at=parse_time(payload.get("join_timestamp")),
            flags=int(payload.get("flags") or 0),
        )


class ThreadMemberCache:
    """Members known for one thread, keyed by user id."""

    def __init__(self, thread_id: int) -> None:
        self.thread_id = thread_id
        self._members: dict[int | None, ThreadMember] = {}

    def add(self, payload: Dict[str, Any]) -> ThreadMember:
        """Insert or refresh the member described by ``payload``."""

        member = ThreadMember.from_payload(payload)
        existing = self._members.get(member.user_id)
        if existing is not None:
            existing.joined_at = member.joined_at or existing.joined_at
            existing.flags = member.flags
            return existing
        self._members[member.user_id] = member
        logger.debug("Attached member %s to thread %s", member.user_id, self.thread_id)
        return member

    def get(self, user_id: int | None) -> ThreadMember | None:
        return self._members.get(user_id)

    def __contains__(self, user_id: object) -> bool:
        return user_id in self._members

    def __iter__(self) -> Iterator[ThreadMember]:
        return iter(list(self._members.values()))

    def __len__(self) -> int:
        return len(self._members)


__all__ = ["ThreadMember", "ThreadMemberCache"]
