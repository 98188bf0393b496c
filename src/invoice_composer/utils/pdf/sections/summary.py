from __future__ import annotations

from invoice_composer.core.calculations.money import MoneyFormatter
from invoice_composer.core.calculations.pricing_engine import TotalsBreakdown
from invoice_composer.core.models.item import Discount
from invoice_composer.core.models.options import Options
from invoice_composer.utils.pdf.core.drawing import PageCanvas
from invoice_composer.utils.pdf.core.layout_common import (
    BASE_TEXT_FONT_SIZE,
    LARGE_TEXT_FONT_SIZE,
    TOTALS_BLOCK_HEIGHT,
    TOTALS_COL_W,
    TOTALS_DISCOUNT_ROW_HEIGHT,
    TOTALS_LABEL_X,
    TOTALS_ROW_HEIGHT,
    TOTALS_VALUE_X,
)
from invoice_composer.utils.pdf.sections.items_table import format_percent

LABEL_CELL_W = TOTALS_COL_W - 2
VALUE_OFFSET = 2


def shows_discount_row(discount: Discount | None, totals: TotalsBreakdown) -> bool:
    return discount is not None and totals.discount_amount > 0


def totals_height(discount: Discount | None, totals: TotalsBreakdown) -> float:
    height = TOTALS_BLOCK_HEIGHT
    if shows_discount_row(discount, totals):
        height += TOTALS_DISCOUNT_ROW_HEIGHT
    return height


def build_discount_caption(discount: Discount, totals: TotalsBreakdown, money: MoneyFormatter) -> str:
    is_percent, value = discount.value()
    if is_percent:
        return f"-{format_percent(value)}"
    return f"-{money.format(totals.discount_amount)}"


def _draw_row(canvas: PageCanvas, y: float, height: float, label: str, value: str, options: Options) -> None:
    canvas.set_fill_color(options.dark_bg_color)
    canvas.rect(TOTALS_LABEL_X, y, TOTALS_COL_W, height, "F")
    canvas.set_xy(TOTALS_LABEL_X, y)
    canvas.cell(LABEL_CELL_W, height, label, "R")

    canvas.set_fill_color(options.grey_bg_color)
    canvas.rect(TOTALS_VALUE_X, y, TOTALS_COL_W, height, "F")
    canvas.set_xy(TOTALS_VALUE_X + VALUE_OFFSET, y)
    canvas.cell(TOTALS_COL_W - VALUE_OFFSET, height, value, "L")


def render_totals(
    canvas: PageCanvas,
    totals: TotalsBreakdown,
    discount: Discount | None,
    y: float,
    options: Options,
    money: MoneyFormatter,
) -> float:
    """
    Totals block on the right half starting at `y`:
    total without tax, optional document discount, tax, total with tax.
    Returns the bottom y.
    """
    canvas.set_font(options.font, "", LARGE_TEXT_FONT_SIZE)
    canvas.set_text_color(options.base_text_color)

    _draw_row(canvas, y, TOTALS_ROW_HEIGHT, options.text_total_total, money.format(totals.total_without_tax), options)
    y += TOTALS_ROW_HEIGHT

    if shows_discount_row(discount, totals):
        _draw_row(
            canvas,
            y,
            TOTALS_DISCOUNT_ROW_HEIGHT,
            "",
            money.format(totals.total_without_tax_discounted),
            options,
        )
        half = TOTALS_DISCOUNT_ROW_HEIGHT / 2
        canvas.set_xy(TOTALS_LABEL_X, y)
        canvas.cell(LABEL_CELL_W, half, options.text_total_discounted, "BR")
        canvas.set_xy(TOTALS_LABEL_X, y + half)
        canvas.set_font_size(BASE_TEXT_FONT_SIZE)
        canvas.set_text_color(options.grey_text_color)
        canvas.cell(LABEL_CELL_W, half, build_discount_caption(discount, totals, money), "TR")
        canvas.set_font_size(LARGE_TEXT_FONT_SIZE)
        canvas.set_text_color(options.base_text_color)
        y += TOTALS_DISCOUNT_ROW_HEIGHT

    _draw_row(canvas, y, TOTALS_ROW_HEIGHT, options.text_total_tax, money.format(totals.tax_total), options)
    y += TOTALS_ROW_HEIGHT

    _draw_row(canvas, y, TOTALS_ROW_HEIGHT, options.text_total_with_tax, money.format(totals.total_with_tax), options)
    y += TOTALS_ROW_HEIGHT

    canvas.set_font_size(BASE_TEXT_FONT_SIZE)
    canvas.set_xy(TOTALS_LABEL_X, y)
    return y
