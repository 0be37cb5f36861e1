"""
===============================================================================
App Paths – resolve per-user storage locations
-------------------------------------------------------------------------------
Purpose:
    Centralize path selection for the local asset stores and PDF export.
    - Per-user app-data directory holding signatures.json / snippets.json
    - User downloads directory used by "export to downloads"
    - OS-portable file name sanitation for exported PDFs

Notes:
    Nothing here creates directories. The JSON store creates its parent
    directory lazily on first save; the downloads directory is expected to
    exist already.
===============================================================================
"""
from __future__ import annotations

import os
import shlex
import sys
from enum import Enum
from pathlib import Path, PurePosixPath
from typing import Optional

from core.common.errors import DirectoryUnavailableError
from core.config.config_service import ConfigService, config_service

DEFAULT_EXPORT_NAME = "document-signed.pdf"
PDF_SUFFIX = ".pdf"


class CollectionKind(str, Enum):
    """Persisted collections and their fixed file names."""
    SIGNATURES = "signatures"
    SNIPPETS = "snippets"

    @property
    def file_name(self) -> str:
        return f"{self.value}.json"


def _expand(path: str) -> Path:
    """Expand ~ and environment variables; return as Path."""
    return Path(os.path.expandvars(os.path.expanduser(path)))


def _home() -> Path:
    try:
        return Path.home()
    except RuntimeError as exc:
        raise DirectoryUnavailableError("home", str(exc)) from exc


def _read_user_dirs(config_home: Path) -> dict[str, str]:
    """Parse ``user-dirs.dirs`` (XDG_*_DIR="$HOME/..." lines)."""
    path = config_home / "user-dirs.dirs"
    try:
        text = path.read_text(encoding="utf-8")
    except OSError:
        return {}
    result: dict[str, str] = {}
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, _, raw = line.partition("=")
        try:
            parts = shlex.split(raw)
        except ValueError:
            continue
        if parts:
            result[key.strip()] = parts[0]
    return result


class AppPaths:
    """Resolves the app-data and downloads directories for the current user."""

    def __init__(self, config: Optional[ConfigService] = None, platform: str = sys.platform) -> None:
        self._config = config or config_service
        self._platform = platform

    @property
    def app_name(self) -> str:
        return self._config.general.app_name or "SignStamp"

    # --- Public API ---------------------------------------------------------

    def app_data_dir(self) -> Path:
        """
        Return the per-user application data directory.

        Order:
            1) [Paths] app_data_dir from config
            2) macOS: ~/Library/Application Support/<app>
               Windows: %APPDATA%/<app> (fallback ~/AppData/Roaming/<app>)
               other: $XDG_DATA_HOME/<app> (fallback ~/.local/share/<app>)
        """
        override = (self._config.paths.app_data_dir or "").strip()
        if override:
            return _expand(override)

        if self._platform == "darwin":
            return _home() / "Library" / "Application Support" / self.app_name
        if self._platform.startswith("win"):
            appdata = os.environ.get("APPDATA")
            base = Path(appdata) if appdata else _home() / "AppData" / "Roaming"
            return base / self.app_name
        xdg = os.environ.get("XDG_DATA_HOME", "").strip()
        base = Path(xdg) if xdg else _home() / ".local" / "share"
        return base / self.app_name

    def downloads_dir(self) -> Path:
        """
        Return the user's downloads directory.

        Order:
            1) [Paths] downloads_dir from config
            2) XDG_DOWNLOAD_DIR environment variable
            3) XDG_DOWNLOAD_DIR in ~/.config/user-dirs.dirs (Linux & co.)
            4) ~/Downloads
        """
        override = (self._config.paths.downloads_dir or "").strip()
        if override:
            return _expand(override)

        env = os.environ.get("XDG_DOWNLOAD_DIR", "").strip()
        if env:
            return _expand(env)

        home = _home()
        if not (self._platform == "darwin" or self._platform.startswith("win")):
            config_home = os.environ.get("XDG_CONFIG_HOME", "").strip()
            user_dirs = _read_user_dirs(Path(config_home) if config_home else home / ".config")
            configured = user_dirs.get("XDG_DOWNLOAD_DIR", "").strip()
            if configured:
                return Path(configured.replace("$HOME", str(home)))
        return home / "Downloads"

    def collection_file_path(self, kind: CollectionKind) -> Path:
        """``<app-data>/signatures.json`` or ``<app-data>/snippets.json``."""
        return self.app_data_dir() / CollectionKind(kind).file_name


def sanitize_file_name(raw_name: str, default: str = DEFAULT_EXPORT_NAME) -> str:
    """
    Strip directory components and make sure the name ends in ``.pdf``.

    Both ``/`` and ``\\`` count as separators so a Windows-style path is
    neutralized on every platform. Empty results fall back to *default*.
    """
    name = PurePosixPath((raw_name or "").replace("\\", "/")).name
    if name in ("", ".", ".."):
        name = default
    if name.lower().endswith(PDF_SUFFIX):
        return name
    return f"{name}{PDF_SUFFIX}"
