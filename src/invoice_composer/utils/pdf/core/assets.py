"""
Image assets: logo decoding and Code128 barcode rasters.

Failures never reach the renderer. Each public helper returns None and the
caller draws the page without that element.
"""

from __future__ import annotations

import io
import logging
from typing import Optional

from barcode import Code128
from barcode.writer import ImageWriter
from PIL import Image
from reportlab.lib.utils import ImageReader

from invoice_composer.core.errors import AssetDecodeFailure
from invoice_composer.utils.pdf.core.layout_common import BARCODE_JPEG_QUALITY, BARCODE_PIXEL_SIZE

logger = logging.getLogger(__name__)


def _open_image(data: bytes) -> Image.Image:
    if not data:
        raise AssetDecodeFailure("empty image data")
    try:
        img = Image.open(io.BytesIO(data))
        img.load()
    except (OSError, ValueError, Image.DecompressionBombError) as exc:
        raise AssetDecodeFailure(f"unreadable image: {exc}") from exc
    if img.mode not in ("RGB", "RGBA", "L"):
        img = img.convert("RGBA")
    return img


def decode_logo(data: bytes | None) -> Optional[ImageReader]:
    """Return the logo ready for placement, or None when it cannot be decoded."""
    if not data:
        return None
    try:
        return ImageReader(_open_image(data))
    except AssetDecodeFailure as exc:
        logger.warning("Skipping logo: %s", exc)
        return None


def encode_barcode(payload: str, size: tuple[int, int] = BARCODE_PIXEL_SIZE) -> bytes:
    """
    Encode `payload` as Code128, scale it to `size` pixels and compress it as JPEG.
    Raises AssetDecodeFailure.
    """
    if not payload:
        raise AssetDecodeFailure("empty barcode payload")
    raw = io.BytesIO()
    try:
        Code128(payload, writer=ImageWriter()).write(raw, options={"write_text": False, "quiet_zone": 1})
        raw.seek(0)
        with Image.open(raw) as symbol:
            scaled = symbol.convert("RGB").resize(size, Image.Resampling.NEAREST)
        out = io.BytesIO()
        scaled.save(out, format="JPEG", quality=BARCODE_JPEG_QUALITY)
    except Exception as exc:  # python-barcode raises several unrelated types
        raise AssetDecodeFailure(f"cannot encode barcode {payload!r}: {exc}") from exc
    return out.getvalue()


def barcode_image(payload: str) -> Optional[ImageReader]:
    """Barcode raster for `payload`, or None when it cannot be produced."""
    if not payload:
        return None
    try:
        return ImageReader(io.BytesIO(encode_barcode(payload)))
    except AssetDecodeFailure as exc:
        logger.warning("Skipping barcode: %s", exc)
        return None
