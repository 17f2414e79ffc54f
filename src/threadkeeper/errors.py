"""Exceptions raised by threadkeeper before a request ever reaches Discord."""

from __future__ import annotations

__all__ = ["ThreadKeeperError", "InvalidArgumentError"]


class ThreadKeeperError(Exception):
    """Base class for errors raised by this package."""

    pass


class InvalidArgumentError(ThreadKeeperError, TypeError):
    """Raised when a caller-supplied value cannot be used to build a request."""

    def __init__(self, argument: str, expected: str) -> None:
        super().__init__(f"Supplied {argument} is not a {expected}.")
        self.argument = argument
        self.expected = expected
