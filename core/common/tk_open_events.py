"""
===============================================================================
Tk OpenDocument hook – OS "open with" requests for the file-open bridge
-------------------------------------------------------------------------------
Purpose:
    On macOS, Tk reports Finder "open with" requests (and files dropped on
    the Dock icon) by calling the Tcl command ``::tk::mac::OpenDocument``
    with one argument per file path. Other windowing systems have no such
    source; there the bridge only sees launch arguments.
===============================================================================
"""
from __future__ import annotations

import logging
from typing import Any

from core.common.open_events import FileOpenBridge

logger = logging.getLogger(__name__)

OPEN_DOCUMENT_COMMAND = "::tk::mac::OpenDocument"


def windowing_system(root: Any) -> str:
    try:
        return str(root.tk.call("tk", "windowingsystem"))
    except Exception:
        return ""


def install_tk_open_document(root: Any, bridge: FileOpenBridge) -> bool:
    """
    Route ``::tk::mac::OpenDocument`` to *bridge*. Returns True if the hook
    was installed (Aqua only).
    """
    if windowing_system(root) != "aqua":
        logger.debug("Tk OpenDocument hook not available on this windowing system")
        return False

    def _open_document(*paths: str) -> None:
        bridge.submit(paths)

    root.createcommand(OPEN_DOCUMENT_COMMAND, _open_document)
    logger.debug("Installed Tk OpenDocument hook")
    return True
