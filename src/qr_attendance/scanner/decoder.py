from __future__ import annotations

from typing import BinaryIO, Optional

from PIL import Image, UnidentifiedImageError

from ..core.app_logger import get_logger
from ..core.exceptions import ValidationError

log = get_logger(__name__)


def decode_frame(stream: BinaryIO) -> Optional[str]:
    """Decode the first QR payload found in an uploaded camera frame.

    Returns None when the frame holds no readable code (a decode failure,
    not an error). Raises ValidationError when the upload is not an image.
    """
    # needs the zbar shared library; loaded on first use
    from pyzbar.pyzbar import decode as pyzbar_decode

    try:
        img = Image.open(stream).convert("RGB")
    except (UnidentifiedImageError, OSError) as e:
        raise ValidationError("Uploaded file is not an image") from e

    decoded = pyzbar_decode(img)
    if not decoded:
        log.debug("decode failed: no QR code in frame (%sx%s)", img.width, img.height)
        return None

    payload = decoded[0].data.decode("utf-8", errors="replace").strip()
    return payload or None
