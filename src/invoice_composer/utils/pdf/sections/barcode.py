from __future__ import annotations

from invoice_composer.core.models.options import Options
from invoice_composer.utils.pdf.core.assets import barcode_image
from invoice_composer.utils.pdf.core.drawing import PageCanvas
from invoice_composer.utils.pdf.core.layout_common import (
    BARCODE_BLOCK_HEIGHT,
    BARCODE_CAPTION_GAP,
    BARCODE_CAPTION_HEIGHT,
    BARCODE_IMAGE_HEIGHT,
)

CAPTION_FONT_SIZE = 9


def barcode_height(payload: str) -> float:
    return BARCODE_BLOCK_HEIGHT if payload else 0.0


def render_barcode(canvas: PageCanvas, payload: str, x: float, y: float, options: Options) -> bool:
    """
    Code128 symbol at (x, y) with the payload centred beneath it.

    Returns False when nothing was drawn (empty payload or encoding failure).
    The cursor is left where it was.
    """
    if not payload:
        return False
    image = barcode_image(payload)
    if image is None:
        return False

    saved_xy = (canvas.get_x(), canvas.get_y())
    saved_font = (canvas.family, canvas.style, canvas.font_size)
    placed_w, placed_h = canvas.image(image, x, y, 0, BARCODE_IMAGE_HEIGHT)

    canvas.set_font(options.font, "", CAPTION_FONT_SIZE)
    canvas.set_text_color(options.base_text_color)
    text_w = canvas.string_width(payload)
    canvas.set_xy(x + (placed_w - text_w) / 2, y + placed_h + BARCODE_CAPTION_GAP)
    canvas.cell(text_w, BARCODE_CAPTION_HEIGHT, payload, "C")

    canvas.set_font(*saved_font)
    canvas.set_xy(*saved_xy)
    return True
