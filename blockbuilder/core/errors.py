"""Exceptions raised by the block builder core."""

from __future__ import annotations


class BlockBuilderError(Exception):
    """Base class for errors surfaced to the host application."""


class StorageError(BlockBuilderError):
    """Loading or saving a site failed; the message is shown to the user."""

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.path = path

    def __str__(self) -> str:
        if self.path:
            return f"{self.message} ({self.path})"
        return self.message
