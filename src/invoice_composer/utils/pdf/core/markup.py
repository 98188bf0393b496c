"""
Inline markup for header/footer and notes text, rendered with reportlab
Paragraphs.

Supported: <center>...</center> and <right>...</right> blocks, <b>/<strong>,
<i>/<em>, <u>, <br>, new lines and the {page} token. Anything else is written
as plain text.
"""

from __future__ import annotations

import html
import re

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER, TA_LEFT, TA_RIGHT
from reportlab.lib.styles import ParagraphStyle
from reportlab.lib.units import mm
from reportlab.platypus import Paragraph

from invoice_composer.utils.pdf.core.drawing import PageCanvas, normalize_text, resolve_font

PAGE_TOKEN = "{page}"

_BLOCK = re.compile(r"<\s*(center|right)\s*>(.*?)<\s*/\s*\1\s*>", re.IGNORECASE | re.DOTALL)
_INLINE = re.compile(r"&lt;\s*(/?)\s*(b|strong|i|em|u)\s*&gt;", re.IGNORECASE)
_BREAK = re.compile(r"&lt;\s*br\s*/?\s*&gt;", re.IGNORECASE)
_INLINE_TAGS = {"b": "b", "strong": "b", "i": "i", "em": "i", "u": "u"}
_ALIGNMENTS = {"L": TA_LEFT, "C": TA_CENTER, "R": TA_RIGHT}


def split_blocks(text: str) -> list[tuple[str, str]]:
    """(align, chunk) pairs; text outside <center>/<right> is left aligned."""
    blocks: list[tuple[str, str]] = []
    pos = 0
    text = text or ""
    for match in _BLOCK.finditer(text):
        blocks.append(("L", text[pos : match.start()]))
        blocks.append(("C" if match.group(1).lower() == "center" else "R", match.group(2)))
        pos = match.end()
    blocks.append(("L", text[pos:]))
    return [(align, chunk.strip("\n")) for align, chunk in blocks if chunk.strip()]


def to_paragraph_markup(chunk: str) -> str:
    """Escape `chunk` and re-enable the supported inline tags in Paragraph syntax."""
    escaped = html.escape(normalize_text(chunk), quote=False)
    escaped = _INLINE.sub(lambda m: f"<{m.group(1)}{_INLINE_TAGS[m.group(2).lower()]}>", escaped)
    escaped = _BREAK.sub("<br/>", escaped)
    return escaped.replace("\n", "<br/>")


def build_paragraphs(
    canvas: PageCanvas,
    text: str,
    line_height: float,
    page_no: int | None = None,
) -> list[Paragraph]:
    """One Paragraph per alignment block, styled from the canvas font and text colour."""
    if page_no is not None:
        text = (text or "").replace(PAGE_TOKEN, str(page_no))
    paragraphs = []
    for idx, (align, chunk) in enumerate(split_blocks(text)):
        style = ParagraphStyle(
            f"markup_{idx}",
            fontName=resolve_font(canvas.family),
            fontSize=canvas.font_size,
            leading=line_height * mm,
            textColor=colors.Color(*canvas.text_color.as_unit()),
            alignment=_ALIGNMENTS[align],
        )
        paragraphs.append(Paragraph(to_paragraph_markup(chunk), style))
    return paragraphs


def measure_markup(canvas: PageCanvas, text: str, line_height: float, width: float) -> float:
    if not text:
        return 0.0
    return sum(canvas.wrap_paragraph(para, width) for para in build_paragraphs(canvas, text, line_height))


def write_markup(canvas: PageCanvas, text: str, line_height: float, page_no: int | None = None) -> float:
    """
    Write markup between the current margins, starting at the cursor y.
    Leaves the cursor below the last line and returns the height used.
    """
    left = canvas.l_margin
    width = canvas.content_width
    top = canvas.y
    y = top
    for para in build_paragraphs(canvas, text, line_height, page_no):
        y += canvas.draw_paragraph(para, left, y, width)
    canvas.set_y(y)
    return y - top
