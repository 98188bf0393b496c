from __future__ import annotations

from invoice_composer.core.models.options import Options
from invoice_composer.utils.pdf.core.drawing import PageCanvas
from invoice_composer.utils.pdf.core.layout_common import PANEL_W, PANEL_X, PAYMENT_TERM_GAP, PAYMENT_TERM_HEIGHT

PAYMENT_TERM_FONT_SIZE = 13


def payment_term_height(payment_term: str) -> float:
    return PAYMENT_TERM_GAP + PAYMENT_TERM_HEIGHT if payment_term else 0.0


def render_payment_term(canvas: PageCanvas, payment_term: str, y: float, options: Options) -> float:
    """Right-aligned "label: date" line under the totals. Returns the bottom y."""
    if not payment_term:
        return y
    y += PAYMENT_TERM_GAP
    canvas.set_text_color(options.base_text_color)
    canvas.set_xy(PANEL_X, y)
    canvas.set_font(options.bold_font, "B", PAYMENT_TERM_FONT_SIZE)
    canvas.cell(PANEL_W, PAYMENT_TERM_HEIGHT, f"{options.text_payment_term_title}: {payment_term}", "R")
    return y + PAYMENT_TERM_HEIGHT
