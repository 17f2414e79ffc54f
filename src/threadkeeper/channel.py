"""Parent channel model that owns a :class:`ThreadManager`."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, TYPE_CHECKING

from discord import ChannelType
from discord.abc import Snowflake
from discord.enums import try_enum

from .managers.threads import ThreadManager
from .resolvers import is_snowflake

if TYPE_CHECKING:  # pragma: no cover - type-checking only
    from .client import ThreadClient


class MessageResolver:
    """Turns a message resolvable (message object or snowflake) into an id."""

    @staticmethod
    def resolve_id(message: Any) -> int | None:
        if isinstance(message, Snowflake) and not isinstance(message, (str, int)):
            return int(message.id)
        if is_snowflake(message):
            return int(message)
        return None


@dataclass(eq=False)
class ParentChannel:
    """A text or announcement channel that can hold threads."""

    client: "ThreadClient" = field(repr=False)
    id: int
    guild_id: int
    type: ChannelType = ChannelType.text
    name: str = ""
    default_auto_archive_duration: int | None = None
    messages: MessageResolver = field(default_factory=MessageResolver, repr=False)
    threads: ThreadManager = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.threads = ThreadManager(self, self.client)

    @classmethod
    def from_payload(cls, client: "ThreadClient", payload: Dict[str, Any]) -> "ParentChannel":
        return cls(
            client=client,
            id=int(payload["id"]),
            guild_id=int(payload["guild_id"]),
            type=try_enum(ChannelType, payload.get("type", ChannelType.text.value)),
            name=payload.get("name") or "",
            default_auto_archive_duration=payload.get("default_auto_archive_duration"),
        )

    @property
    def is_news(self) -> bool:
        return self.type == ChannelType.news


__all__ = ["MessageResolver", "ParentChannel"]
