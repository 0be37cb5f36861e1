"""
core/common/open_events.py

File-open bridge: turns launch arguments and OS "open with" requests into
OpenPdfEvent notifications for the UI.

Each candidate path is checked once (".pdf" suffix, case-insensitive, and
the file exists right now) and then either forwarded or dropped. Delivery
is fire-and-forget: listener failures are logged, never raised and never
retried. The bridge does not touch the JSON collection files.
"""

from __future__ import annotations

import logging
import os
import threading
from collections import deque
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, List, Optional
from urllib.parse import unquote, urlparse
from urllib.request import url2pathname

logger = logging.getLogger(__name__)

OpenPdfListener = Callable[["OpenPdfEvent"], None]


@dataclass(frozen=True, slots=True)
class OpenPdfEvent:
    """Request to open the PDF at an absolute path."""

    path: str

    def to_dict(self) -> dict:
        return {"path": self.path}


def is_openable_pdf(path: str | os.PathLike) -> bool:
    """True if *path* has a ``.pdf`` extension (any case) and exists now."""
    candidate = Path(path)
    if candidate.suffix.lower() != ".pdf":
        return False
    return candidate.exists()


def file_url_to_path(url: str) -> Optional[str]:
    """Local path for a ``file:`` URL; None for every other scheme."""
    parsed = urlparse(url)
    if parsed.scheme.lower() != "file":
        return None
    if parsed.netloc and parsed.netloc != "localhost":
        # UNC share (Windows only)
        if os.name != "nt":
            return None
        return url2pathname(f"//{parsed.netloc}{parsed.path}")
    return url2pathname(parsed.path) if os.name == "nt" else unquote(parsed.path)


class FileOpenBridge:
    """
    Filters candidate paths and notifies subscribed listeners.

    Startup paths that pass the filter while nobody is listening are kept
    in a pending list which the UI drains once via take_pending_open_paths().
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._listeners: List[OpenPdfListener] = []
        self._pending: List[str] = []

    # ---------- Observers ---------------------------------------------
    def subscribe(self, listener: OpenPdfListener) -> None:
        with self._lock:
            if listener not in self._listeners:
                self._listeners.append(listener)

    def unsubscribe(self, listener: OpenPdfListener) -> None:
        with self._lock:
            try:
                self._listeners.remove(listener)
            except ValueError:
                pass

    # ---------- Triggers ----------------------------------------------
    def run_startup(self, argv: Iterable[str]) -> List[OpenPdfEvent]:
        """
        Process launch arguments (program name already removed).

        The queue lives only for this call; once drained, nothing about the
        startup burst is kept except unclaimed paths in the pending list.
        """
        queue = deque(str(arg) for arg in argv)
        forwarded: List[OpenPdfEvent] = []
        while queue:
            event = self._filter(queue.popleft())
            if event is None:
                continue
            with self._lock:
                listening = bool(self._listeners)
                if not listening:
                    self._pending.append(event.path)
            if not listening:
                logger.warning("No open-pdf listener attached, parking %s", event.path)
                continue
            if self._emit(event):
                forwarded.append(event)
        return forwarded

    def submit(self, candidates: Iterable[str | os.PathLike]) -> List[OpenPdfEvent]:
        """Filter and forward paths delivered while the app is running."""
        forwarded: List[OpenPdfEvent] = []
        for candidate in candidates:
            event = self._filter(candidate)
            if event is not None and self._emit(event):
                forwarded.append(event)
        return forwarded

    def submit_urls(self, urls: Iterable[str]) -> List[OpenPdfEvent]:
        """Like :meth:`submit` for OS notifications carrying URLs."""
        paths = []
        for url in urls:
            path = file_url_to_path(url)
            if path is None:
                logger.debug("Dropping non-file URL %s", url)
                continue
            paths.append(path)
        return self.submit(paths)

    def take_pending_open_paths(self) -> List[str]:
        """Return and clear startup paths nobody was listening for."""
        with self._lock:
            pending, self._pending = self._pending, []
        return pending

    # ---------- Internals ---------------------------------------------
    @staticmethod
    def _filter(candidate: str | os.PathLike) -> Optional[OpenPdfEvent]:
        try:
            ok = is_openable_pdf(candidate)
        except (OSError, ValueError) as exc:
            logger.debug("Dropping %r: %s", candidate, exc)
            return None
        if not ok:
            logger.debug("Dropping %r: not an existing .pdf file", candidate)
            return None
        return OpenPdfEvent(path=os.path.abspath(os.fspath(candidate)))

    def _emit(self, event: OpenPdfEvent) -> bool:
        """Deliver to every listener; False if nobody received it."""
        with self._lock:
            listeners = list(self._listeners)
        if not listeners:
            logger.warning("No open-pdf listener attached, cannot deliver %s", event.path)
            return False

        delivered = False
        for listener in listeners:
            try:
                listener(event)
                delivered = True
            except Exception:
                logger.exception("open-pdf listener failed for %s", event.path)
        if delivered:
            logger.info("Forwarded open-pdf event for %s", event.path)
        return delivered
