from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class LoadedPdf:
    """Raw document bytes plus the display name derived from the path."""
    data: bytes
    name: str

    def to_dict(self) -> dict:
        return {"bytes": list(self.data), "name": self.name}
