"""QR code rendering for short links."""

from io import BytesIO
from typing import Optional

import qrcode
from qrcode.constants import ERROR_CORRECT_M

from ..core.config import settings


def render_qr_png(data: str, box_size: Optional[int] = None, border: Optional[int] = None) -> bytes:
    """Render ``data`` as a black-on-white QR code and return PNG bytes."""
    qr = qrcode.QRCode(
        version=None,
        box_size=box_size or settings.qr_box_size,
        border=settings.qr_border if border is None else border,
        error_correction=ERROR_CORRECT_M,
    )
    qr.add_data(data)
    qr.make(fit=True)
    img = qr.make_image(fill_color="black", back_color="white")

    buf = BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()
