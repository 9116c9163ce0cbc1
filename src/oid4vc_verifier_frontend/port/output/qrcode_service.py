"""QR code service port - Interface for QR code generation"""

from abc import ABC, abstractmethod
from enum import Enum

from returns.result import Result


class QrCodeFormat(str, Enum):
    """QR code image format"""

    PNG = "png"
    SVG = "svg"


class QrCodeError(Exception):
    """Error during QR code generation"""

    pass


class QrCodeService(ABC):
    """
    Renders the wallet redirect URI as a QR code.

    Used on desktop, where the wallet runs on another device and the user
    scans the code instead of following a redirect.
    """

    @abstractmethod
    async def generate_qr_code(
        self, data: str, format: QrCodeFormat = QrCodeFormat.SVG, error_correction: str = "M"
    ) -> Result[bytes, QrCodeError]:
        """
        Generate QR code image from data.

        Args:
            data: Data to encode (wallet redirect URI)
            format: Image format (SVG, PNG)
            error_correction: Error correction level (L, M, Q, H)

        Returns:
            Success(image bytes) or Failure(QrCodeError)
        """
        pass
