"""
Resource managers bound to a parent object.

Modules
=======

``threads``
    Defines :class:`~threadkeeper.managers.threads.ThreadManager`, which
    creates, resolves, and lists the threads of one parent channel on top of
    the client-wide :class:`~threadkeeper.store.ThreadStore`.
"""

from .threads import ThreadManager

__all__ = ["ThreadManager"]
