from __future__ import annotations

from invoice_composer.core.models.header_footer import HeaderFooter
from invoice_composer.core.models.options import Options
from invoice_composer.utils.pdf.core.drawing import PageCanvas
from invoice_composer.utils.pdf.core.layout_common import BASE_MARGIN, FOOTER_Y, HEADER_MARGIN_TOP
from invoice_composer.utils.pdf.core.markup import write_markup


class HeaderFooterRenderer:
    """
    Draws the shared header and footer bands of a build.

    The page flow calls `render_header` right after a page starts and
    `render_footer` right before it ends. Cursor, margins, font and text colour
    of the body are restored afterwards.
    """

    def __init__(self, header: HeaderFooter | None, footer: HeaderFooter | None, options: Options):
        self.header = header
        self.footer = footer
        self.options = options

    def render_header(self, canvas: PageCanvas, page_no: int) -> None:
        if self.header is not None:
            self._render(canvas, self.header, HEADER_MARGIN_TOP, page_no)

    def render_footer(self, canvas: PageCanvas, page_no: int) -> None:
        if self.footer is not None:
            self._render(canvas, self.footer, FOOTER_Y, page_no)

    def _render(self, canvas: PageCanvas, band: HeaderFooter, band_y: float, page_no: int) -> None:
        saved_xy = (canvas.get_x(), canvas.get_y())
        saved_margins = (canvas.l_margin, canvas.t_margin, canvas.r_margin)
        saved_font = (canvas.family, canvas.style, canvas.font_size)
        saved_color = canvas.text_color
        try:
            if band.custom_render is not None:
                band.custom_render(canvas, page_no)
                return
            canvas.set_margins(BASE_MARGIN, HEADER_MARGIN_TOP, BASE_MARGIN)
            canvas.set_y(band_y)
            canvas.set_text_color(self.options.base_text_color)
            canvas.set_font(self.options.font, "", band.font_size)
            line_height = canvas.font_size_mm
            if band.text:
                write_markup(canvas, band.text, line_height, page_no)
            if band.pagination:
                canvas.set_xy(BASE_MARGIN, band_y)
                canvas.cell(canvas.content_width, line_height, str(page_no), "R")
        finally:
            canvas.set_margins(*saved_margins)
            canvas.set_font(*saved_font)
            canvas.set_text_color(saved_color)
            canvas.set_xy(*saved_xy)
