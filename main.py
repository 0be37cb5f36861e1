"""SignStamp desktop shell - entry point.

Wires logging, the command surface and the file-open bridge, then shows a
small window that lists documents the OS asked us to open.
"""

import logging
import sys
import tkinter as tk
from pathlib import Path
from tkinter import Button, Frame, Label, Listbox, X, BOTH, filedialog

from core.common.app_paths import AppPaths
from core.common.command_api import CommandAPI
from core.common.errors import DirectoryUnavailableError
from core.common.open_events import FileOpenBridge, OpenPdfEvent
from core.common.tk_open_events import install_tk_open_document
from core.config.config_service import config_service
from core.logging.logic.logger import configure_logging, default_log_file

logger = logging.getLogger(__name__)


class MainWindow(tk.Tk):
    def __init__(self, api: CommandAPI):
        super().__init__()

        self.title("SignStamp")
        self.geometry("640x400")
        self.api = api
        self.loaded = []

        # Aktionen (oben)
        self.toolbar = Frame(self)
        self.toolbar.pack(side="top", fill=X)
        Button(self.toolbar, text="Export signed copy", command=self.export_selected).pack(side="left", padx=4, pady=4)
        Button(self.toolbar, text="Add signature image...", command=self.add_signature_image).pack(side="left", padx=4, pady=4)

        # Liste geöffneter Dokumente (Mitte)
        self.display_area = Frame(self, bg="white")
        self.display_area.pack(fill=BOTH, expand=True)
        self.documents = Listbox(self.display_area)
        self.documents.pack(fill=BOTH, expand=True, padx=8, pady=8)

        # Statusleiste (unten)
        self.status_bar = Label(self, text="Ready", anchor="w", bg="#eeeeee")
        self.status_bar.pack(side="bottom", fill=X)

    def open_event(self, event: OpenPdfEvent):
        """Listener for the file-open bridge."""
        self.open_path(event.path)

    def open_path(self, path):
        result = self.api.load_document_from_path(path)
        if not result.ok:
            self.set_status(f"Cannot open {path}: {result.error}")
            return
        loaded = result.value
        self.loaded.append(loaded)
        self.documents.insert("end", f"{loaded.name}  ({len(loaded.data)} bytes)  {path}")
        self.set_status(f"Opened: {path}")

    def export_selected(self):
        selection = self.documents.curselection()
        if not selection:
            self.set_status("Select a document first")
            return
        loaded = self.loaded[selection[0]]
        name = self.api.suggest_export_name(loaded.name).value
        result = self.api.export_to_downloads(loaded.data, name)
        self.set_status(f"Exported: {result.value}" if result.ok else f"Export failed: {result.error}")

    def add_signature_image(self):
        path = filedialog.askopenfilename(
            title="Signature image",
            filetypes=[("Images", "*.png *.jpg *.jpeg"), ("All files", "*.*")],
        )
        if not path:
            return
        try:
            data = Path(path).read_bytes()
        except OSError as exc:
            self.set_status(f"Cannot read {path}: {exc}")
            return
        result = self.api.import_signature_image(Path(path).stem, data)
        self.set_status(f"Signature added: {result.value.name}" if result.ok else f"Import failed: {result.error}")

    def drain_pending(self):
        """Pick up startup paths that arrived before the window listened."""
        for path in self.api.take_pending_open_paths().value or []:
            self.open_path(path)

    def set_status(self, message):
        """Aktualisiert die Statusleiste."""
        self.status_bar.config(text=message)


def main():
    paths = AppPaths(config_service)
    general = config_service.general
    log_file = None
    if general.log_to_file:
        try:
            log_file = default_log_file(paths)
        except DirectoryUnavailableError as exc:
            print(f"File logging disabled: {exc}", file=sys.stderr)
    configure_logging(general.log_level, log_file)

    bridge = FileOpenBridge()
    api = CommandAPI(paths=paths, config=config_service, bridge=bridge)

    # launch arguments first; nobody listens yet, so they are parked
    bridge.run_startup(sys.argv[1:])

    app = MainWindow(api)
    bridge.subscribe(app.open_event)
    install_tk_open_document(app, bridge)
    app.after_idle(app.drain_pending)
    app.mainloop()


if __name__ == "__main__":
    main()
