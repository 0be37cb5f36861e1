# signature/models/signature_enums.py
from __future__ import annotations
from enum import Enum


class SignatureMime(str, Enum):
    """Image formats the signature pad and importer produce."""
    PNG = "image/png"
    JPEG = "image/jpeg"

    @classmethod
    def from_pil_format(cls, fmt: str | None) -> "SignatureMime | None":
        return {"PNG": cls.PNG, "JPEG": cls.JPEG}.get((fmt or "").upper())
