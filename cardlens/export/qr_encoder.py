"""
QR code encoding of download URLs.

Produces a square PNG. The same URL and options always give the same
bytes.
"""

import io
from dataclasses import dataclass
from typing import Optional

import qrcode
from qrcode.constants import ERROR_CORRECT_L, ERROR_CORRECT_M, ERROR_CORRECT_Q, ERROR_CORRECT_H
from qrcode.exceptions import DataOverflowError
from PIL import Image

from config.constants import (
    QR_WIDTH,
    QR_MARGIN,
    QR_DARK_COLOR,
    QR_LIGHT_COLOR,
    QR_ERROR_CORRECTION,
)
from config.logging_config import get_logger

from .errors import EncodeCodeError

logger = get_logger(__name__)


ERROR_CORRECTION_LEVELS = {
    "L": ERROR_CORRECT_L,  # ~7%
    "M": ERROR_CORRECT_M,  # ~15%
    "Q": ERROR_CORRECT_Q,  # ~25%
    "H": ERROR_CORRECT_H,  # ~30%
}


@dataclass(frozen=True)
class CodeOptions:
    """Rendering options for the QR image."""
    width: int = QR_WIDTH
    margin: int = QR_MARGIN  # quiet zone, in modules
    dark_color: str = QR_DARK_COLOR
    light_color: str = QR_LIGHT_COLOR
    error_correction: str = QR_ERROR_CORRECTION


class QRCodeEncoder:
    """Encodes URLs as QR code PNG images."""

    def __init__(self, options: Optional[CodeOptions] = None):
        self.options = options or CodeOptions()

    def encode(self, download_url: str, options: Optional[CodeOptions] = None) -> bytes:
        """
        Encode a URL as a square PNG.

        Args:
            download_url: URL to encode.
            options: Overrides the encoder's default options.

        Returns:
            PNG bytes, options.width pixels on each side.

        Raises:
            EncodeCodeError: On empty input, invalid options, or data too
                long for a QR code.
        """
        options = options or self.options
        if not download_url or not download_url.strip():
            raise EncodeCodeError("Download URL is empty")
        level = ERROR_CORRECTION_LEVELS.get(str(options.error_correction).upper())
        if level is None:
            raise EncodeCodeError(f"Unknown error correction level: {options.error_correction!r}")
        if options.width <= 0 or options.margin < 0:
            raise EncodeCodeError(f"Invalid code size: width={options.width}, margin={options.margin}")

        try:
            qr = qrcode.QRCode(version=None, error_correction=level, box_size=1, border=options.margin)
            qr.add_data(download_url)
            qr.make(fit=True)

            # Largest whole module size that fits, then snap to the exact width
            total_modules = qr.modules_count + 2 * options.margin
            qr.box_size = max(1, options.width // total_modules)

            image = qr.make_image(
                fill_color=options.dark_color,
                back_color=options.light_color,
            ).get_image().convert("RGB")
            if image.size != (options.width, options.width):
                image = image.resize((options.width, options.width), Image.NEAREST)

            buffer = io.BytesIO()
            image.save(buffer, format="PNG")
        except DataOverflowError as e:
            raise EncodeCodeError(f"URL too long for a QR code ({len(download_url)} chars)") from e
        except (ValueError, OSError) as e:
            raise EncodeCodeError(f"QR code rendering failed: {e}") from e

        data = buffer.getvalue()
        logger.debug(f"QR code encoded: version {qr.version}, {options.width}px, {len(data):,} bytes")
        return data


def encode_as_code(download_url: str, options: Optional[CodeOptions] = None) -> bytes:
    """Encode a URL with a one-off encoder."""
    return QRCodeEncoder(options).encode(download_url)
