from __future__ import annotations

from decimal import Decimal

from invoice_composer.core.calculations.money import MoneyFormatter
from invoice_composer.core.calculations.pricing_engine import LineBreakdown
from invoice_composer.core.models.item import LineItem
from invoice_composer.core.models.options import Options
from invoice_composer.utils.pdf.core.drawing import PageCanvas
from invoice_composer.utils.pdf.core.layout_common import (
    BASE_TEXT_FONT_SIZE,
    ITEM_COL_DISCOUNT_OFFSET,
    ITEM_COL_NAME_OFFSET,
    ITEM_COL_QUANTITY_OFFSET,
    ITEM_COL_TAX_OFFSET,
    ITEM_COL_TOTAL_HT_OFFSET,
    ITEM_COL_TOTAL_TTC_OFFSET,
    ITEM_COL_UNIT_PRICE_OFFSET,
    ITEM_DESCRIPTION_LINE_HEIGHT,
    ITEM_LINE_HEIGHT,
    ITEM_ROW_PADDING,
    SMALL_TEXT_FONT_SIZE,
    TABLE_HEADER_HEIGHT,
    TABLE_W,
    TABLE_X,
)

TABLE_FONT_SIZE = 9
NAME_COL_W = ITEM_COL_UNIT_PRICE_OFFSET - ITEM_COL_NAME_OFFSET


def _columns(options: Options) -> list[tuple[float, float, str]]:
    """(x, width, title) for every column of the table."""
    return [
        (ITEM_COL_NAME_OFFSET, NAME_COL_W, options.text_items_name_title),
        (ITEM_COL_UNIT_PRICE_OFFSET, ITEM_COL_QUANTITY_OFFSET - ITEM_COL_UNIT_PRICE_OFFSET, options.text_items_unit_cost_title),
        (ITEM_COL_QUANTITY_OFFSET, ITEM_COL_TOTAL_HT_OFFSET - ITEM_COL_QUANTITY_OFFSET, options.text_items_quantity_title),
        (ITEM_COL_TOTAL_HT_OFFSET, ITEM_COL_DISCOUNT_OFFSET - ITEM_COL_TOTAL_HT_OFFSET, options.text_items_total_ht_title),
        (ITEM_COL_DISCOUNT_OFFSET, ITEM_COL_TAX_OFFSET - ITEM_COL_DISCOUNT_OFFSET, options.text_items_discount_title),
        (ITEM_COL_TAX_OFFSET, ITEM_COL_TOTAL_TTC_OFFSET - ITEM_COL_TAX_OFFSET, options.text_items_tax_title),
        (ITEM_COL_TOTAL_TTC_OFFSET, TABLE_X + TABLE_W - ITEM_COL_TOTAL_TTC_OFFSET, options.text_items_total_ttc_title),
    ]


def format_percent(value: Decimal) -> str:
    return f"{value.normalize():f} %"


def draw_table_header(canvas: PageCanvas, options: Options) -> None:
    """Grey title row at the cursor; leaves the cursor where the first item row starts."""
    y = canvas.get_y()
    canvas.set_fill_color(options.grey_bg_color)
    canvas.rect(TABLE_X, y, TABLE_W, TABLE_HEADER_HEIGHT, "F")
    canvas.set_text_color(options.base_text_color)
    canvas.set_font(options.bold_font, "B", TABLE_FONT_SIZE)
    for x, width, title in _columns(options):
        canvas.set_xy(x, y)
        canvas.cell(width, TABLE_HEADER_HEIGHT, title, "L")
    canvas.set_font(options.font, "", TABLE_FONT_SIZE)
    canvas.set_xy(TABLE_X, y + TABLE_HEADER_HEIGHT + ITEM_ROW_PADDING)


def _description_lines(canvas: PageCanvas, item: LineItem, options: Options) -> list[str]:
    if not item.description:
        return []
    saved = (canvas.family, canvas.style, canvas.font_size)
    canvas.set_font(options.font, "", SMALL_TEXT_FONT_SIZE)
    lines = canvas.split_lines(item.description, NAME_COL_W)
    canvas.set_font(*saved)
    return lines


def item_row_height(canvas: PageCanvas, item: LineItem, options: Options) -> float:
    lines = _description_lines(canvas, item, options)
    return ITEM_LINE_HEIGHT + len(lines) * ITEM_DESCRIPTION_LINE_HEIGHT + ITEM_ROW_PADDING


def _discount_label(item: LineItem, line: LineBreakdown, money: MoneyFormatter) -> str:
    if item.discount is None or not line.discount_amount:
        return ""
    is_percent, value = item.discount.value()
    if is_percent:
        return f"-{format_percent(value)}"
    return f"-{money.format(line.discount_amount)}"


def render_item_row(
    canvas: PageCanvas,
    item: LineItem,
    line: LineBreakdown,
    tax_rate: Decimal | None,
    options: Options,
    money: MoneyFormatter,
) -> float:
    """Draw one item at the cursor and move the cursor below it. Returns the row height."""
    y = canvas.get_y()
    description = _description_lines(canvas, item, options)
    canvas.set_text_color(options.base_text_color)
    canvas.set_font(options.font, "", TABLE_FONT_SIZE)

    canvas.set_xy(ITEM_COL_NAME_OFFSET, y)
    canvas.cell(NAME_COL_W, ITEM_LINE_HEIGHT, item.name, "L")

    values = [
        money.format(item.unit_cost_value()),
        str(item.quantity),
        money.format(line.subtotal),
        _discount_label(item, line, money),
        format_percent(tax_rate) if tax_rate is not None else "",
        money.format(line.total),
    ]
    for (x, width, _), value in zip(_columns(options)[1:], values):
        canvas.set_xy(x, y)
        canvas.cell(width, ITEM_LINE_HEIGHT, value, "L")

    if description:
        canvas.set_text_color(options.grey_text_color)
        canvas.set_font_size(SMALL_TEXT_FONT_SIZE)
        row_y = y + ITEM_LINE_HEIGHT
        for text in description:
            canvas.set_xy(ITEM_COL_NAME_OFFSET, row_y)
            canvas.cell(NAME_COL_W, ITEM_DESCRIPTION_LINE_HEIGHT, text, "L")
            row_y += ITEM_DESCRIPTION_LINE_HEIGHT
        canvas.set_text_color(options.base_text_color)
        canvas.set_font_size(TABLE_FONT_SIZE)

    height = ITEM_LINE_HEIGHT + len(description) * ITEM_DESCRIPTION_LINE_HEIGHT + ITEM_ROW_PADDING
    canvas.set_xy(TABLE_X, y + height)
    canvas.set_font_size(BASE_TEXT_FONT_SIZE)
    return height
