"""Storage and export exceptions.

Internal layers raise these; the command boundary turns them into
human-readable error strings for the UI.
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional


class StorageError(Exception):
    """Base exception for local persistence and file export."""


class DirectoryUnavailableError(StorageError):
    """Raised when the platform cannot resolve a required system directory."""

    def __init__(self, what: str, reason: Optional[str] = None) -> None:
        message = f"{what} directory unavailable"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.what = what


class StorageIOError(StorageError):
    """Raised on read/write/create-directory failures at the filesystem."""

    def __init__(self, action: str, path: Path | str, cause: Optional[BaseException] = None) -> None:
        message = f"cannot {action} '{path}'"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)
        self.action = action
        self.path = str(path)


class DecodeError(StorageError):
    """Raised when on-disk JSON does not match the expected shape."""

    def __init__(self, path: Path | str, reason: str) -> None:
        super().__init__(f"invalid JSON in '{path}': {reason}")
        self.path = str(path)


class EncodeError(StorageError):
    """Raised when an in-memory collection cannot be serialized."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"cannot encode collection: {reason}")
