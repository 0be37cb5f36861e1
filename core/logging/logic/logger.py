"""
core/logging/logic/logger.py
============================

Process-wide logging setup on top of the standard ``logging`` package.

Call :func:`configure_logging` once early in ``main.py``; everywhere else
use ``logging.getLogger(__name__)``. Console output always, optional
rotating UTF-8 log file in the app-data directory.
"""

from __future__ import annotations

import logging
import sys
import threading
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
LOG_FILE_NAME = "signstamp.log"

_lock = threading.Lock()
_stream_handler: logging.Handler | None = None
_file_handler: RotatingFileHandler | None = None


def default_log_file(paths) -> Path:
    """``<app-data>/logs/signstamp.log`` for the given :class:`AppPaths`."""
    return paths.app_data_dir() / "logs" / LOG_FILE_NAME


def configure_logging(
    level: int | str = logging.INFO,
    log_file: Optional[Path | str] = None,
    *,
    max_bytes: int = 2_000_000,
    backup_count: int = 3,
) -> logging.Logger:
    """
    Install console and (optionally) rotating file handlers on the root logger.

    Safe to call repeatedly: handlers are created once, later calls only
    adjust the level or add the file handler if it was missing.
    """
    global _stream_handler, _file_handler

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root = logging.getLogger()
    formatter = logging.Formatter(LOG_FORMAT)

    with _lock:
        if _stream_handler is None:
            _stream_handler = logging.StreamHandler(stream=sys.stderr)
            _stream_handler.setFormatter(formatter)
            root.addHandler(_stream_handler)
        _stream_handler.setLevel(level)

        if log_file and _file_handler is None:
            file_path = Path(log_file)
            try:
                file_path.parent.mkdir(parents=True, exist_ok=True)
                _file_handler = RotatingFileHandler(
                    filename=str(file_path),
                    maxBytes=max_bytes,
                    backupCount=backup_count,
                    encoding="utf-8",
                )
            except OSError as exc:
                root.warning("File logging disabled, cannot open %s: %s", file_path, exc)
            else:
                _file_handler.setFormatter(formatter)
                root.addHandler(_file_handler)
        if _file_handler is not None:
            _file_handler.setLevel(level)

        # handlers filter; root stays permissive
        if root.level > level or root.level == logging.NOTSET:
            root.setLevel(level)

    return root


def reset_logging() -> None:
    """Detach and close handlers installed by :func:`configure_logging`."""
    global _stream_handler, _file_handler
    root = logging.getLogger()
    with _lock:
        for handler in (_stream_handler, _file_handler):
            if handler is not None:
                root.removeHandler(handler)
                handler.close()
        _stream_handler = None
        _file_handler = None
