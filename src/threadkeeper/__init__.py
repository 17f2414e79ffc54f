"""Cached, paginated access to Discord threads."""

from .client import ThreadClient, connect
from .channel import ParentChannel
from .errors import InvalidArgumentError, ThreadKeeperError
from .managers import ThreadManager
from .models import FetchedThreads, Thread
from .store import ThreadStore

__all__ = [
    "FetchedThreads",
    "InvalidArgumentError",
    "ParentChannel",
    "Thread",
    "ThreadClient",
    "ThreadKeeperError",
    "ThreadManager",
    "ThreadStore",
    "connect",
]
