import io

import pytest

# pyzbar raises ImportError when the native zbar library is missing
pytest.importorskip("pyzbar.pyzbar", exc_type=ImportError)

import qrcode

from qr_attendance.core.exceptions import ValidationError
from qr_attendance.scanner.decoder import decode_frame


def _png(data: str) -> io.BytesIO:
    img = qrcode.make(data)
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    buf.seek(0)
    return buf


def test_decodes_payload_from_frame():
    assert decode_frame(_png("2024-0001")) == "2024-0001"


def test_blank_frame_is_decode_failure():
    from PIL import Image

    buf = io.BytesIO()
    Image.new("RGB", (64, 64), "white").save(buf, format="PNG")
    buf.seek(0)

    assert decode_frame(buf) is None


def test_non_image_upload_rejected():
    with pytest.raises(ValidationError):
        decode_frame(io.BytesIO(b"not an image"))
