"""
Free-text blocks: document description and notes.
"""

from __future__ import annotations

from invoice_composer.core.models.options import Options
from invoice_composer.utils.pdf.core.drawing import PageCanvas
from invoice_composer.utils.pdf.core.layout_common import (
    BASE_MARGIN,
    BASE_TEXT_FONT_SIZE,
    NOTES_FONT_SIZE,
    NOTES_W,
    NOTES_X,
    TABLE_GAP,
    TABLE_W,
    TABLE_X,
)
from invoice_composer.utils.pdf.core.markup import measure_markup, write_markup

DESCRIPTION_FONT_SIZE = 13
DESCRIPTION_LINE_HEIGHT = 5


def render_description(canvas: PageCanvas, description: str, options: Options) -> None:
    if not description:
        return
    canvas.set_y(canvas.get_y() + TABLE_GAP)
    canvas.set_x(TABLE_X)
    canvas.set_text_color(options.base_text_color)
    canvas.set_font(options.font, "", DESCRIPTION_FONT_SIZE)
    canvas.multi_cell(TABLE_W, DESCRIPTION_LINE_HEIGHT, description, border="B", align="L")
    canvas.set_font_size(BASE_TEXT_FONT_SIZE)


def _notes_margins(canvas: PageCanvas) -> None:
    canvas.set_margins(NOTES_X, canvas.t_margin, canvas.page_w - NOTES_X - NOTES_W)


def notes_height(canvas: PageCanvas, notes: str, options: Options) -> float:
    """Height the notes will take in the left column."""
    if not notes:
        return 0.0
    saved = (canvas.family, canvas.style, canvas.font_size)
    canvas.set_font(options.font, "", NOTES_FONT_SIZE)
    height = measure_markup(canvas, notes, canvas.font_size_mm, NOTES_W)
    canvas.set_font(*saved)
    return height


def render_notes(canvas: PageCanvas, notes: str, y: float, options: Options) -> float:
    """Write notes in the left column starting at `y`; returns the bottom y."""
    if not notes:
        return y
    margins = (canvas.l_margin, canvas.t_margin, canvas.r_margin)
    _notes_margins(canvas)
    canvas.set_y(y)
    canvas.set_text_color(options.base_text_color)
    canvas.set_font(options.font, "", NOTES_FONT_SIZE)
    write_markup(canvas, notes, canvas.font_size_mm)
    bottom = canvas.get_y()
    canvas.set_margins(*margins)
    canvas.set_font(options.font, "", BASE_TEXT_FONT_SIZE)
    canvas.set_xy(BASE_MARGIN, bottom)
    return bottom
