"""
Resolution helpers for the values accepted by the thread APIs.

Discord identifiers (snowflakes) travel as 16 to 19 digit strings. Callers may
hand the manager a live :class:`~threadkeeper.models.Thread`, a raw snowflake
(``str`` or ``int``), or for pagination a date-like value. These helpers turn
such values into ids, or classify a ``before`` cursor into one of three
explicit variants so the cursor selector never has to guess:

``ThreadRef``
    A live thread instance.
``SnowflakeRef``
    A raw identifier, possibly naming a thread that is not cached.
``DateRef``
    A point in time parsed from a ``datetime``, ``date``, POSIX timestamp, or
    ISO-8601 string.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any, Union

from .errors import InvalidArgumentError
from .models import Thread

_SNOWFLAKE_RE = re.compile(r"[0-9]{16,19}")


def is_snowflake(value: Any) -> bool:
    """Return ``True`` if ``value`` looks like a Discord identifier."""

    if isinstance(value, bool):
        return False
    if isinstance(value, (str, int)):
        return bool(_SNOWFLAKE_RE.fullmatch(str(value)))
    return False


def resolve_id(value: Any) -> int | None:
    """Return the identifier for a thread resolvable, or ``None``."""

    if isinstance(value, Thread):
        return value.id
    if is_snowflake(value):
        return int(value)
    return None


def isoformat(moment: datetime) -> str:
    """Render ``moment`` the way Discord expects timestamps: UTC, ms, ``Z``."""

    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_date(value: Any) -> datetime:
    """
    Parse a date-like value into an aware UTC ``datetime``.

    Accepts ``datetime`` and ``date`` objects, POSIX timestamps in seconds, and
    ISO-8601 strings. Naive values are taken as UTC.

    :raises InvalidArgumentError: when ``value`` cannot be read as a date.
    """
    try:
        if isinstance(value, datetime):
            moment = value
        elif isinstance(value, date):
            moment = datetime(value.year, value.month, value.day)
        elif isinstance(value, (int, float)) and not isinstance(value, bool):
            moment = datetime.fromtimestamp(value, tz=timezone.utc)
        elif isinstance(value, str):
            moment = datetime.fromisoformat(value.strip())
        else:
            raise TypeError(type(value).__name__)
    except (TypeError, ValueError, OverflowError, OSError) as exc:
        raise InvalidArgumentError(
            "before", "date-like value or thread resolvable"
        ) from exc

    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


@dataclass(frozen=True, slots=True)
class ThreadRef:
    thread: Thread

    @property
    def id(self) -> int:
        return self.thread.id


@dataclass(frozen=True, slots=True)
class SnowflakeRef:
    id: int


@dataclass(frozen=True, slots=True)
class DateRef:
    moment: datetime

    @property
    def iso(self) -> str:
        return isoformat(self.moment)


BeforeRef = Union[ThreadRef, SnowflakeRef, DateRef]


def classify_before(value: Any) -> BeforeRef:
    """
    Classify a pagination ``before`` value.

    Identifiers win over dates: a 16-19 digit string is always a
    :class:`SnowflakeRef`, never a timestamp.
    """
    if isinstance(value, Thread):
        return ThreadRef(value)
    if is_snowflake(value):
        return SnowflakeRef(int(value))
    return DateRef(parse_date(value))


__all__ = [
    "BeforeRef",
    "DateRef",
    "SnowflakeRef",
    "ThreadRef",
    "classify_before",
    "is_snowflake",
    "isoformat",
    "parse_date",
    "resolve_id",
]
