"""Direct document I/O.

Path-based load/save of raw PDF bytes for the "open" and "save as" flows,
plus export into the user's downloads directory under a collision-safe name.
No PDF parsing happens here; bytes are passed through untouched.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from core.common.app_paths import AppPaths, sanitize_file_name
from core.common.errors import StorageIOError
from core.config.config_service import ConfigService, config_service

from ..models.loaded_pdf import LoadedPdf
from .export_naming import next_available_path

logger = logging.getLogger(__name__)

PLACEHOLDER_NAME = "document.pdf"


class DocumentIO:
    """Reads and writes PDF bytes on the local filesystem."""

    def __init__(self, paths: Optional[AppPaths] = None, config: Optional[ConfigService] = None) -> None:
        self._config = config or config_service
        self._paths = paths or AppPaths(self._config)

    def save_at(self, path: str | Path, data: bytes) -> str:
        """
        Write *data* to *path*, creating or overwriting the file.

        The parent directory must already exist (it normally comes from a
        native save dialog). Returns the absolute path string.
        """
        target = Path(path)
        try:
            target.write_bytes(data)
        except OSError as exc:
            raise StorageIOError("write", target, exc) from exc
        final = os.path.abspath(target)
        logger.info("Saved document (%d bytes) to %s", len(data), final)
        return final

    def load_from(self, path: str | Path) -> LoadedPdf:
        """Read the file at *path*; the display name is its last component."""
        target = Path(path)
        try:
            data = target.read_bytes()
        except OSError as exc:
            raise StorageIOError("read", target, exc) from exc
        name = target.name or PLACEHOLDER_NAME
        logger.debug("Loaded document %s (%d bytes)", target, len(data))
        return LoadedPdf(data=data, name=name)

    def export_to_downloads(self, data: bytes, desired_name: str) -> str:
        """
        Sanitize *desired_name*, pick a free name in the downloads directory
        and write *data* there. Returns the final path.
        """
        export_cfg = self._config.export
        file_name = sanitize_file_name(desired_name, default=export_cfg.default_file_name)
        downloads = self._paths.downloads_dir()
        target = next_available_path(downloads, file_name, max_attempts=export_cfg.max_collision_attempts)
        try:
            target.write_bytes(data)
        except OSError as exc:
            raise StorageIOError("write", target, exc) from exc
        logger.info("Exported document (%d bytes) to %s", len(data), target)
        return str(target)
