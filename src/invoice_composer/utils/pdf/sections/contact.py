from __future__ import annotations

from invoice_composer.core.models.contact import Contact
from invoice_composer.core.models.options import WHITE, Options
from invoice_composer.utils.pdf.core.assets import decode_logo
from invoice_composer.utils.pdf.core.drawing import PageCanvas
from invoice_composer.utils.pdf.core.layout_common import (
    BASE_TEXT_FONT_SIZE,
    COMPANY_X,
    CONTACT_ADDRESS_PADDING,
    CONTACT_INFO_LINE_HEIGHT,
    CONTACT_INFO_PADDING,
    CONTACT_LINE_HEIGHT,
    CONTACT_NAME_HEIGHT,
    CONTACT_PHONE_HEIGHT,
    CONTACT_W,
    CONTACT_Y,
    CUSTOMER_X,
    LARGE_TEXT_FONT_SIZE,
    LOGO_H,
    LOGO_W,
    SMALL_TEXT_FONT_SIZE,
)


def contact_block_height(contact: Contact) -> float:
    """Height of the background rectangle, summed from the fixed per-field heights."""
    height = CONTACT_NAME_HEIGHT
    if contact.phone:
        height += CONTACT_PHONE_HEIGHT
    if contact.address is not None:
        height += len(contact.address.lines()) * CONTACT_LINE_HEIGHT + CONTACT_ADDRESS_PADDING
    if contact.additional_info:
        height += len(contact.additional_info) * CONTACT_INFO_LINE_HEIGHT + CONTACT_INFO_PADDING
    return height


def render_contact(
    canvas: PageCanvas,
    contact: Contact,
    x: float,
    y: float,
    options: Options,
    fill: bool = True,
    align: str = "L",
) -> float:
    """
    Draw logo, background, name, phone, address and additional info.
    Returns the bottom y so the sibling block can be aligned to the taller one.
    """
    logo = decode_logo(contact.logo)
    if logo is not None:
        logo_x = x + CONTACT_W - LOGO_W if align == "R" else x
        canvas.image(logo, logo_x, y - LOGO_H, LOGO_W, LOGO_H)

    height = contact_block_height(contact)
    canvas.set_fill_color(options.grey_bg_color if fill else WHITE)
    canvas.rect(x, y, CONTACT_W, height, "F")

    canvas.set_text_color(options.base_text_color)
    canvas.set_xy(x, y)
    canvas.set_font(options.bold_font, "B", LARGE_TEXT_FONT_SIZE)
    canvas.cell(CONTACT_W, CONTACT_NAME_HEIGHT, contact.name, "L")
    cursor = y + CONTACT_NAME_HEIGHT

    canvas.set_font(options.font, "", LARGE_TEXT_FONT_SIZE)
    if contact.phone:
        canvas.set_xy(x, cursor)
        canvas.cell(CONTACT_W, CONTACT_PHONE_HEIGHT, f"{options.text_phone_title}: {contact.phone}", "L")
        cursor += CONTACT_PHONE_HEIGHT

    if contact.address is not None:
        for line in contact.address.lines():
            canvas.set_xy(x, cursor)
            canvas.cell(CONTACT_W, CONTACT_LINE_HEIGHT, line, "L")
            cursor += CONTACT_LINE_HEIGHT
        cursor += CONTACT_ADDRESS_PADDING

    if contact.additional_info:
        canvas.set_font_size(SMALL_TEXT_FONT_SIZE)
        cursor += CONTACT_INFO_PADDING
        for line in contact.additional_info:
            canvas.set_xy(x, cursor)
            canvas.cell(CONTACT_W, CONTACT_INFO_LINE_HEIGHT, line, "L")
            cursor += CONTACT_INFO_LINE_HEIGHT
        canvas.set_font_size(BASE_TEXT_FONT_SIZE)

    canvas.set_xy(x, cursor)
    return cursor


def render_company(canvas: PageCanvas, contact: Contact, options: Options) -> float:
    return render_contact(canvas, contact, COMPANY_X, CONTACT_Y, options, fill=True, align="L")


def render_customer(canvas: PageCanvas, contact: Contact, options: Options) -> float:
    return render_contact(canvas, contact, CUSTOMER_X, CONTACT_Y, options, fill=True, align="R")
