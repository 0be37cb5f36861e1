# core/common/command_api.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Generic, Iterable, List, Optional, TypeVar

from core.common.app_paths import AppPaths
from core.common.errors import StorageError
from core.common.json_collection_store import ItemShapeError
from core.common.open_events import FileOpenBridge
from core.config.config_service import ConfigService, config_service
from documents.logic.document_io import DocumentIO
from documents.logic.naming_strategy import suggest_signed_name
from documents.models.loaded_pdf import LoadedPdf
from signature.logic.image_probe import UnsupportedSignatureImage, signature_from_image
from signature.logic.signature_repository import SignatureRepository
from signature.models.stored_signature import StoredSignature
from snippets.logic.snippet_repository import SnippetRepository

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class CommandResult(Generic[T]):
    """Either ``value`` (ok=True) or a descriptive ``error`` string."""
    ok: bool
    value: Optional[T] = None
    error: Optional[str] = None

    @classmethod
    def success(cls, value: Optional[T] = None) -> "CommandResult[T]":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: str) -> "CommandResult[T]":
        return cls(ok=False, error=error)


class CommandAPI:
    """
    Named operations invoked by the UI layer.

    Every call runs synchronously and returns a CommandResult; storage
    exceptions never cross this boundary.
    """

    def __init__(self, *, paths: Optional[AppPaths] = None,
                 config: Optional[ConfigService] = None,
                 bridge: Optional[FileOpenBridge] = None) -> None:
        self._config = config or config_service
        self._paths = paths or AppPaths(self._config)
        self._bridge = bridge or FileOpenBridge()
        self._signatures = SignatureRepository(self._paths)
        self._snippets = SnippetRepository(self._paths)
        self._documents = DocumentIO(self._paths, self._config)

    @property
    def bridge(self) -> FileOpenBridge:
        return self._bridge

    # ---------------- helpers ----------------
    @staticmethod
    def _run(command: str, fn: Callable[[], T]) -> CommandResult[T]:
        try:
            return CommandResult.success(fn())
        except StorageError as exc:
            logger.warning("%s failed: %s", command, exc)
            return CommandResult.failure(str(exc))

    @staticmethod
    def _coerce_signatures(signatures: Iterable[StoredSignature | dict]) -> List[StoredSignature]:
        result: List[StoredSignature] = []
        for index, sig in enumerate(signatures):
            if isinstance(sig, StoredSignature):
                result.append(sig)
                continue
            try:
                result.append(StoredSignature.from_dict(sig))
            except (KeyError, ItemShapeError) as exc:
                detail = f"missing key {exc.args[0]!r}" if isinstance(exc, KeyError) else str(exc)
                raise ValueError(f"signature {index}: {detail}") from exc
        return result

    # ---------------- documents ----------------
    def export_to_downloads(self, data: bytes, file_name: str) -> CommandResult[str]:
        return self._run("export_to_downloads",
                         lambda: self._documents.export_to_downloads(data, file_name))

    def save_document_at(self, data: bytes, path: str) -> CommandResult[str]:
        return self._run("save_document_at", lambda: self._documents.save_at(path, data))

    def load_document_from_path(self, path: str) -> CommandResult[LoadedPdf]:
        return self._run("load_document_from_path", lambda: self._documents.load_from(path))

    # ---------------- signatures ----------------
    def load_signatures(self) -> CommandResult[List[StoredSignature]]:
        return self._run("load_signatures", self._signatures.load)

    def save_signatures(self, signatures: Iterable[StoredSignature | dict]) -> CommandResult[None]:
        try:
            items = self._coerce_signatures(signatures)
        except ValueError as exc:
            logger.warning("save_signatures rejected input: %s", exc)
            return CommandResult.failure(f"invalid signature payload: {exc}")
        return self._run("save_signatures", lambda: self._signatures.save(items))

    def import_signature_image(self, name: str, data: bytes) -> CommandResult[StoredSignature]:
        """Probe a PNG/JPEG, append it to the stored signatures and return it."""
        try:
            signature = signature_from_image(name, data)
        except UnsupportedSignatureImage as exc:
            logger.warning("import_signature_image rejected input: %s", exc)
            return CommandResult.failure(str(exc))

        def _append() -> StoredSignature:
            self._signatures.save([*self._signatures.load(), signature])
            return signature

        return self._run("import_signature_image", _append)

    def suggest_export_name(self, source_name: str) -> CommandResult[str]:
        return CommandResult.success(suggest_signed_name(source_name))

    # ---------------- snippets ----------------
    def load_snippets(self) -> CommandResult[List[str]]:
        return self._run("load_snippets", self._snippets.load)

    def save_snippets(self, snippets: Iterable[str]) -> CommandResult[None]:
        return self._run("save_snippets", lambda: self._snippets.save(snippets))

    # ---------------- file-open bridge ----------------
    def take_pending_open_paths(self) -> CommandResult[List[str]]:
        return CommandResult.success(self._bridge.take_pending_open_paths())

