# signature/logic/image_probe.py
from __future__ import annotations

import io
import uuid
from dataclasses import dataclass
from typing import Optional

from PIL import Image, UnidentifiedImageError

from ..models.signature_enums import SignatureMime
from ..models.stored_signature import StoredSignature


class UnsupportedSignatureImage(ValueError):
    """Raised when bytes are not a PNG or JPEG image Pillow can read."""


@dataclass(frozen=True)
class ImageInfo:
    mime: SignatureMime
    width: int
    height: int


def probe_image(data: bytes) -> ImageInfo:
    """
    Identify a signature image and read its natural pixel size.
    Only the header is parsed; pixel data is not decoded.
    """
    try:
        with Image.open(io.BytesIO(data)) as img:
            fmt = img.format
            width, height = img.size
    except (UnidentifiedImageError, OSError) as exc:
        raise UnsupportedSignatureImage(f"not a readable image: {exc}") from exc

    mime = SignatureMime.from_pil_format(fmt)
    if mime is None:
        raise UnsupportedSignatureImage(f"unsupported image format {fmt!r}; expected PNG or JPEG")
    return ImageInfo(mime=mime, width=width, height=height)


def signature_from_image(name: str, data: bytes, signature_id: Optional[str] = None) -> StoredSignature:
    """Build a StoredSignature from raw image bytes (fresh id unless given)."""
    info = probe_image(data)
    return StoredSignature(
        id=signature_id or uuid.uuid4().hex,
        name=name,
        mime=info.mime.value,
        data=bytes(data),
        natural_width=info.width,
        natural_height=info.height,
    )
