"""Errors raised by player stores and rating sessions."""

from __future__ import annotations


class LadderError(Exception):
    """Base class for ladder failures a caller is expected to handle."""


class PlayerAlreadyExistsError(LadderError):
    def __init__(self, name: str) -> None:
        super().__init__(f"player {name!r} already exists")
        self.name = name


class PlayerNotFoundError(LadderError, LookupError):
    def __init__(self, name: str) -> None:
        super().__init__(f"player {name!r} does not exist")
        self.name = name


class SelfPlayError(LadderError, ValueError):
    def __init__(self, name: str) -> None:
        super().__init__(f"player {name!r} cannot play against themselves")
        self.name = name


class StorageUnavailableError(LadderError):
    """The backing store could not be reached or did not answer in time."""

    def __init__(self, operation: str, reason: str) -> None:
        super().__init__(f"storage unavailable during {operation}: {reason}")
        self.operation = operation


__all__ = [
    "LadderError",
    "PlayerAlreadyExistsError",
    "PlayerNotFoundError",
    "SelfPlayError",
    "StorageUnavailableError",
]
