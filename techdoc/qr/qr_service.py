import base64
import io

import qrcode
from qrcode.constants import ERROR_CORRECT_Q


class QrCodeService:
    """Renders QR codes for access links as PNG images."""

    def __init__(self, box_size: int = 20, border: int = 4) -> None:
        self._box_size = box_size
        self._border = border

    def generate_png(self, data: str) -> bytes:
        qr = qrcode.QRCode(
            error_correction=ERROR_CORRECT_Q,
            box_size=self._box_size,
            border=self._border,
        )
        qr.add_data(data)
        qr.make(fit=True)
        buffer = io.BytesIO()
        qr.make_image().save(buffer)
        return buffer.getvalue()

    def generate_base64(self, data: str) -> str:
        return base64.b64encode(self.generate_png(data)).decode("ascii")
