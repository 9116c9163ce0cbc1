"""QR code service implementation using qrcode library"""

import io

import qrcode
import qrcode.image.svg
from PIL import Image
from returns.result import Failure, Result, Success

from oid4vc_verifier_frontend.port.output import QrCodeError, QrCodeFormat, QrCodeService

ERROR_CORRECTION_LEVELS = {
    "L": qrcode.constants.ERROR_CORRECT_L,
    "M": qrcode.constants.ERROR_CORRECT_M,
    "Q": qrcode.constants.ERROR_CORRECT_Q,
    "H": qrcode.constants.ERROR_CORRECT_H,
}


class QrCodeServiceImpl(QrCodeService):
    """
    Implementation of QrCodeService using the qrcode library.

    SVG output is a single path element, suitable for inlining in a page.
    PNG output is rendered through Pillow and scaled to png_size pixels.
    """

    def __init__(self, png_size: int = 300):
        self.png_size = png_size

    async def generate_qr_code(
        self, data: str, format: QrCodeFormat = QrCodeFormat.SVG, error_correction: str = "M"
    ) -> Result[bytes, QrCodeError]:
        if not data:
            return Failure(QrCodeError("QR code data cannot be empty"))
        if error_correction not in ERROR_CORRECTION_LEVELS:
            return Failure(QrCodeError(f"Unsupported error correction level: {error_correction}"))

        try:
            qr = qrcode.QRCode(
                version=None,  # fit to data
                error_correction=ERROR_CORRECTION_LEVELS[error_correction],
                box_size=10,
                border=4,
            )
            qr.add_data(data)
            qr.make(fit=True)

            buffer = io.BytesIO()
            if format == QrCodeFormat.SVG:
                img = qr.make_image(image_factory=qrcode.image.svg.SvgPathImage)
                img.save(buffer)
            elif format == QrCodeFormat.PNG:
                img = qr.make_image(fill_color="black", back_color="white").get_image()
                img = img.resize((self.png_size, self.png_size), Image.Resampling.NEAREST)
                img.save(buffer, format="PNG")
            else:
                return Failure(QrCodeError(f"Unsupported format: {format}"))

            return Success(buffer.getvalue())

        except Exception as e:
            return Failure(QrCodeError(f"Failed to generate QR code: {e}"))
