"""Collision-safe export naming.

Picks the first free ``<stem> (n).<ext>`` path in a directory. The check is
point-in-time: another process may create the same name before the caller
writes, so write immediately after resolving.
"""
from __future__ import annotations

from pathlib import Path, PurePosixPath

DEFAULT_STEM = "document-signed"
DEFAULT_EXT = "pdf"
MAX_COLLISION_ATTEMPTS = 999


def split_name(file_name: str) -> tuple[str, str]:
    """Return (stem, extension without dot) with export defaults."""
    pure = PurePosixPath(file_name)
    stem = pure.stem or DEFAULT_STEM
    ext = pure.suffix[1:] if pure.suffix else DEFAULT_EXT
    return stem, ext


def next_available_path(directory: Path | str, file_name: str,
                        max_attempts: int = MAX_COLLISION_ATTEMPTS) -> Path:
    """
    ``<dir>/<name>`` if free, else ``<dir>/<stem> (1).<ext>`` ... up to
    *max_attempts*, else ``<dir>/<stem>-export.<ext>`` (may itself exist).
    """
    directory = Path(directory)
    initial = directory / file_name
    if not initial.exists():
        return initial

    stem, ext = split_name(file_name)
    for idx in range(1, max_attempts + 1):
        candidate = directory / f"{stem} ({idx}).{ext}"
        if not candidate.exists():
            return candidate

    return directory / f"{stem}-export.{ext}"
