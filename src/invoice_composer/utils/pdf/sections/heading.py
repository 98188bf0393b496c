from __future__ import annotations

from datetime import date

from invoice_composer.core.models.document import Document
from invoice_composer.core.models.options import Options
from invoice_composer.utils.pdf.core.drawing import PageCanvas
from invoice_composer.utils.pdf.core.layout_common import BASE_MARGIN_TOP, PANEL_W, PANEL_X

TITLE_HEIGHT = 10
TITLE_FONT_SIZE = 17
META_FONT_SIZE = 9
META_LINE_HEIGHT = 4
META_OFFSET = 11


def render_title(canvas: PageCanvas, doc: Document, options: Options) -> None:
    canvas.set_fill_color(options.dark_bg_color)
    canvas.rect(PANEL_X, BASE_MARGIN_TOP, PANEL_W, TITLE_HEIGHT, "F")
    canvas.set_text_color(options.base_text_color)
    canvas.set_xy(PANEL_X, BASE_MARGIN_TOP)
    canvas.set_font(options.font, "", TITLE_FONT_SIZE)
    canvas.cell(PANEL_W, TITLE_HEIGHT, options.title_for(doc.kind), "C")


def build_meta_lines(doc: Document, options: Options) -> list[str]:
    lines = [f"{options.text_ref_title}: {doc.ref}"]
    if doc.version:
        lines.append(f"{options.text_version_title}: {doc.version}")
    if doc.client_ref:
        lines.append(f"{options.text_client_ref_title}: {doc.client_ref}")
    issue_date = doc.date or date.today().strftime("%d/%m/%Y")
    lines.append(f"{options.text_date_title}: {issue_date}")
    return lines


def render_metas(canvas: PageCanvas, doc: Document, options: Options) -> None:
    canvas.set_font(options.font, "", META_FONT_SIZE)
    y = BASE_MARGIN_TOP + META_OFFSET
    for line in build_meta_lines(doc, options):
        canvas.set_xy(PANEL_X, y)
        canvas.cell(PANEL_W, META_LINE_HEIGHT, line, "R")
        y += META_LINE_HEIGHT
