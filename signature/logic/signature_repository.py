# signature/logic/signature_repository.py
from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable, List, Optional

from core.common.app_paths import AppPaths, CollectionKind
from core.common.json_collection_store import JsonCollectionStore

from ..models.stored_signature import StoredSignature


def _encode(sig: StoredSignature) -> dict[str, Any]:
    if not isinstance(sig, StoredSignature):
        raise TypeError(f"expected StoredSignature, got {type(sig).__name__}")
    if not isinstance(sig.data, (bytes, bytearray)):
        raise TypeError(f"signature {sig.id!r}: image data must be bytes")
    payload = sig.to_dict()
    # anything load() would reject must not reach the file
    try:
        StoredSignature.from_dict(payload)
    except KeyError as exc:
        raise ValueError(f"signature {sig.id!r}: missing key {exc.args[0]!r}") from exc
    except ValueError as exc:
        raise ValueError(f"signature {sig.id!r}: {exc}") from exc
    return payload


class SignatureRepository:
    """
    Loads and saves the full list of signature assets in signatures.json.

    ``save`` always replaces the stored list; pass the complete collection.
    """

    def __init__(self, paths: Optional[AppPaths] = None) -> None:
        self._paths = paths or AppPaths()
        self._store: JsonCollectionStore[StoredSignature] = JsonCollectionStore(
            StoredSignature.from_dict, _encode, label="signatures"
        )

    @property
    def path(self) -> Path:
        return self._paths.collection_file_path(CollectionKind.SIGNATURES)

    def load(self) -> List[StoredSignature]:
        return self._store.load(self.path)

    def save(self, signatures: Iterable[StoredSignature]) -> None:
        self._store.save(self.path, signatures)
