"""Snippet persistence (snippets.json)."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable, List, Optional

from core.common.app_paths import AppPaths, CollectionKind
from core.common.json_collection_store import ItemShapeError, JsonCollectionStore


def _decode(value: Any) -> str:
    if not isinstance(value, str):
        raise ItemShapeError(f"snippet must be a string, got {type(value).__name__}")
    return value


def _encode(value: str) -> str:
    if not isinstance(value, str):
        raise TypeError(f"snippet must be a string, got {type(value).__name__}")
    return value


class SnippetRepository:
    """Ordered list of text snippets; ``save`` replaces the whole list."""

    def __init__(self, paths: Optional[AppPaths] = None) -> None:
        self._paths = paths or AppPaths()
        self._store: JsonCollectionStore[str] = JsonCollectionStore(_decode, _encode, label="snippets")

    @property
    def path(self) -> Path:
        return self._paths.collection_file_path(CollectionKind.SNIPPETS)

    def load(self) -> List[str]:
        return self._store.load(self.path)

    def save(self, snippets: Iterable[str]) -> None:
        self._store.save(self.path, snippets)
