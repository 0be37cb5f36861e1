"""
stored_signature.py

Dataclass for one persisted signature image.

• from_dict()  – builds the object from the on-disk JSON object
• to_dict()    – camelCase JSON object (bytes as an int array)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from core.common.json_collection_store import ItemShapeError

_U32_MAX = 0xFFFFFFFF


def _require_str(data: dict, key: str) -> str:
    value = data[key]
    if not isinstance(value, str):
        raise ItemShapeError(f"{key!r} must be a string")
    return value


def _require_u32(data: dict, key: str) -> int:
    value = data[key]
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= _U32_MAX:
        raise ItemShapeError(f"{key!r} must be an unsigned 32-bit integer")
    return value


def _require_byte_array(data: dict, key: str) -> bytes:
    value = data[key]
    if not isinstance(value, list):
        raise ItemShapeError(f"{key!r} must be an array of bytes")
    for b in value:
        if isinstance(b, bool) or not isinstance(b, int) or not 0 <= b <= 255:
            raise ItemShapeError(f"{key!r} contains a value outside 0..255")
    return bytes(value)


@dataclass(frozen=True)
class StoredSignature:
    """
    A user-created signature image.

    ``id`` uniqueness is up to the caller; the repository persists the
    collection it is given verbatim.
    """
    id: str
    name: str
    mime: str
    data: bytes
    natural_width: int
    natural_height: int

    # -------------------- Factory ------------------------------------ #
    @classmethod
    def from_dict(cls, data: Any) -> "StoredSignature":
        if not isinstance(data, dict):
            raise ItemShapeError("signature entry must be a JSON object")
        return cls(
            id=_require_str(data, "id"),
            name=_require_str(data, "name"),
            mime=_require_str(data, "mime"),
            data=_require_byte_array(data, "bytes"),
            natural_width=_require_u32(data, "naturalW"),
            natural_height=_require_u32(data, "naturalH"),
        )

    # -------------------- Dict for JSON / UI ------------------------- #
    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "mime": self.mime,
            "bytes": list(self.data),
            "naturalW": self.natural_width,
            "naturalH": self.natural_height,
        }
