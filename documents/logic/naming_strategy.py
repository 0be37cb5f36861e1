from __future__ import annotations
import re
from pathlib import PurePosixPath
from typing import Protocol

_PDF_SUFFIX = re.compile(r"\.pdf$", re.IGNORECASE)


class NamingStrategy(Protocol):
    def strategy_id(self) -> str: ...
    def propose_file_name(self, source_name: str) -> str: ...


class SignedSuffixStrategy:
    """Default: contract.PDF -> contract-signed.pdf"""
    def strategy_id(self) -> str:
        return "signed_suffix"

    def propose_file_name(self, source_name: str) -> str:
        name = PurePosixPath((source_name or "").replace("\\", "/")).name
        stem = _PDF_SUFFIX.sub("", name) or "document"
        return f"{stem}-signed.pdf"


def suggest_signed_name(source_name: str) -> str:
    return SignedSuffixStrategy().propose_file_name(source_name)
