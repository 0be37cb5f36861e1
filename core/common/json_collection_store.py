"""
JsonCollectionStore
-------------------
Generic load/save of a typed collection kept as one JSON array on disk.

Contract:
- load(path): a missing file is an empty collection (not an error); an
  unreadable file raises StorageIOError; malformed JSON or a wrong shape
  raises DecodeError.
- save(path, items): full replace. The parent directory is created if
  needed, the document is written to a temp file and moved over the target.
  Concurrent writers are not coordinated; the last replace wins.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Callable, Generic, Iterable, List, TypeVar

from core.common.errors import DecodeError, EncodeError, StorageIOError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ItemShapeError(ValueError):
    """Raised by item decoders when a JSON value does not fit the item type."""


class JsonCollectionStore(Generic[T]):
    """
    Persists ``list[T]`` as a JSON array.

    Args:
        decode_item: turns one JSON value into ``T``; raises ItemShapeError,
            KeyError, TypeError or ValueError on mismatch.
        encode_item: turns ``T`` into a JSON-serializable value.
        label: name used in log lines (e.g. "signatures").
    """

    def __init__(self, decode_item: Callable[[Any], T], encode_item: Callable[[T], Any],
                 *, label: str = "collection") -> None:
        self._decode_item = decode_item
        self._encode_item = encode_item
        self._label = label

    # --- Public API ---------------------------------------------------------

    def load(self, path: Path) -> List[T]:
        path = Path(path)
        if not path.exists():
            logger.debug("No %s file at %s, starting empty", self._label, path)
            return []

        try:
            raw = path.read_bytes()
        except OSError as exc:
            raise StorageIOError("read", path, exc) from exc

        try:
            payload = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise DecodeError(path, str(exc)) from exc

        if not isinstance(payload, list):
            raise DecodeError(path, f"expected a JSON array, got {type(payload).__name__}")

        items: List[T] = []
        for index, value in enumerate(payload):
            try:
                items.append(self._decode_item(value))
            except (KeyError, TypeError, ValueError) as exc:
                raise DecodeError(path, f"entry {index}: {_describe(exc)}") from exc

        logger.debug("Loaded %d %s from %s", len(items), self._label, path)
        return items

    def save(self, path: Path, items: Iterable[T]) -> None:
        path = Path(path)
        items = list(items)

        try:
            document = json.dumps([self._encode_item(item) for item in items], ensure_ascii=False)
            data = document.encode("utf-8")
        except (TypeError, ValueError, AttributeError) as exc:
            raise EncodeError(str(exc)) from exc

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageIOError("create directory", path.parent, exc) from exc

        self._atomic_write(path, data)
        logger.debug("Saved %d %s to %s", len(items), self._label, path)

    # --- Internal helpers ---------------------------------------------------

    @staticmethod
    def _atomic_write(path: Path, data: bytes) -> None:
        # one temp file per call; concurrent saves must not share it
        try:
            fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        except OSError as exc:
            raise StorageIOError("write", path, exc) from exc

        tmp = Path(tmp_name)
        try:
            with os.fdopen(fd, "wb") as fh:
                fh.write(data)
            tmp.replace(path)
        except OSError as exc:
            try:
                tmp.unlink()
            except OSError:
                pass
            raise StorageIOError("write", path, exc) from exc


def _describe(exc: BaseException) -> str:
    if isinstance(exc, KeyError):
        return f"missing key {exc.args[0]!r}"
    return str(exc)
