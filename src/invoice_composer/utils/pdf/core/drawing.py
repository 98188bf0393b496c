"""
Page stream on top of reportlab.

Coordinates are millimetres from the top-left corner of the page, with a
cursor (x, y) that moves as cells are written. reportlab itself works in
points from the bottom-left corner.
"""

from __future__ import annotations

import io
import unicodedata

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader, simpleSplit
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.pdfdoc import PDFDictionary, PDFName, PDFString
from reportlab.pdfgen import canvas as rl_canvas
from reportlab.platypus import Paragraph

from invoice_composer.core.models.options import Color
from invoice_composer.utils.pdf.core.layout_common import BASE_MARGIN, BASE_MARGIN_TOP, CELL_MARGIN

# Built-in Type1 families and their styled variants.
_STANDARD_FAMILIES = {
    "helvetica": ("Helvetica", "Helvetica-Bold", "Helvetica-Oblique", "Helvetica-BoldOblique"),
    "arial": ("Helvetica", "Helvetica-Bold", "Helvetica-Oblique", "Helvetica-BoldOblique"),
    "times": ("Times-Roman", "Times-Bold", "Times-Italic", "Times-BoldItalic"),
    "times-roman": ("Times-Roman", "Times-Bold", "Times-Italic", "Times-BoldItalic"),
    "courier": ("Courier", "Courier-Bold", "Courier-Oblique", "Courier-BoldOblique"),
}


def normalize_text(text: str) -> str:
    """Drop diacritics that the built-in Type1 fonts (cp1252) cannot show."""
    text = str(text)
    try:
        text.encode("cp1252")
        return text
    except UnicodeEncodeError:
        pass
    out = []
    for ch in text:
        try:
            ch.encode("cp1252")
            out.append(ch)
        except UnicodeEncodeError:
            decomposed = unicodedata.normalize("NFKD", ch)
            out.append(decomposed.encode("ascii", "ignore").decode("ascii"))
    return "".join(out)


def resolve_font(family: str, style: str = "") -> str:
    """Map a family + fpdf-like style ("", "B", "I", "BI") to a reportlab font name."""
    style = (style or "").upper()
    bold = "B" in style
    italic = "I" in style
    variants = _STANDARD_FAMILIES.get((family or "").lower())
    if variants is None:
        # registered TTF family; styled variants are expected as "<family>-Bold" etc.
        if bold and italic:
            return f"{family}-BoldItalic"
        if bold:
            return f"{family}-Bold"
        if italic:
            return f"{family}-Italic"
        return family
    return variants[(2 if italic else 0) + (1 if bold else 0)]


class PageCanvas:
    """
    Sequential page stream with an fpdf-like cursor API.

    Only one writer is expected; each build owns its own instance.
    """

    def __init__(self, page_size=A4, compress: bool = False, title: str = "", author: str = ""):
        self._buffer = io.BytesIO()
        self._canvas = rl_canvas.Canvas(self._buffer, pagesize=page_size, pageCompression=1 if compress else 0)
        if title:
            self._canvas.setTitle(title)
        if author:
            self._canvas.setAuthor(author)
        self.page_w = page_size[0] / mm
        self.page_h = page_size[1] / mm
        self.l_margin = BASE_MARGIN
        self.r_margin = BASE_MARGIN
        self.t_margin = BASE_MARGIN_TOP
        self.x = self.l_margin
        self.y = self.t_margin
        self.family = "Helvetica"
        self.style = ""
        self.font_size = 12.0
        self.fill_color = Color(255, 255, 255)
        self.text_color = Color(0, 0, 0)
        self.draw_color = Color(0, 0, 0)
        self.page_count = 0
        self._page_open = False
        self._finished = False

    # -------- page management --------
    def add_page(self) -> int:
        if self._page_open:
            self._canvas.showPage()
        self._page_open = True
        self.page_count += 1
        self.x = self.l_margin
        self.y = self.t_margin
        return self.page_count

    def enable_auto_print(self) -> None:
        action = PDFDictionary({"S": PDFName("JavaScript"), "JS": PDFString("print(true);")})
        self._canvas.setCatalogEntry("OpenAction", action)

    def finish(self) -> bytes:
        if not self._finished:
            if self._page_open:
                self._canvas.showPage()
                self._page_open = False
            self._canvas.save()
            self._finished = True
        return self._buffer.getvalue()

    # -------- cursor & margins --------
    def set_margins(self, left: float, top: float, right: float | None = None) -> None:
        self.l_margin = left
        self.t_margin = top
        self.r_margin = left if right is None else right

    def get_x(self) -> float:
        return self.x

    def get_y(self) -> float:
        return self.y

    def set_x(self, x: float) -> None:
        self.x = x

    def set_y(self, y: float) -> None:
        """Move to y and reset x to the left margin."""
        self.x = self.l_margin
        self.y = y

    def set_xy(self, x: float, y: float) -> None:
        self.x = x
        self.y = y

    @property
    def content_width(self) -> float:
        return self.page_w - self.l_margin - self.r_margin

    # -------- graphics state --------
    def set_font(self, family: str, style: str = "", size: float | None = None) -> None:
        self.family = family
        self.style = style or ""
        if size:
            self.font_size = float(size)

    def set_font_size(self, size: float) -> None:
        self.font_size = float(size)

    def set_fill_color(self, color: Color) -> None:
        self.fill_color = color

    def set_text_color(self, color: Color) -> None:
        self.text_color = color

    @property
    def font_name(self) -> str:
        return resolve_font(self.family, self.style)

    @property
    def font_size_mm(self) -> float:
        return self.font_size / mm

    def string_width(self, text: str) -> float:
        return pdfmetrics.stringWidth(normalize_text(text), self.font_name, self.font_size) / mm

    def split_lines(self, text: str, width: float) -> list[str]:
        """Wrap `text` into lines that fit `width` mm (inner cell margins excluded)."""
        inner = max(1.0, width - 2 * CELL_MARGIN) * mm
        lines: list[str] = []
        for paragraph in str(text).split("\n"):
            wrapped = simpleSplit(normalize_text(paragraph), self.font_name, self.font_size, inner)
            lines.extend(wrapped or [""])
        return lines

    # -------- primitives --------
    def _pt_y(self, y: float) -> float:
        return (self.page_h - y) * mm

    def rect(self, x: float, y: float, w: float, h: float, style: str = "F") -> None:
        style = (style or "F").upper()
        fill = 1 if "F" in style else 0
        stroke = 1 if "D" in style or not fill else 0
        c = self._canvas
        c.setFillColorRGB(*self.fill_color.as_unit())
        c.setStrokeColorRGB(*self.draw_color.as_unit())
        c.rect(x * mm, self._pt_y(y + h), w * mm, h * mm, stroke=stroke, fill=fill)

    def line(self, x1: float, y1: float, x2: float, y2: float) -> None:
        c = self._canvas
        c.setStrokeColorRGB(*self.draw_color.as_unit())
        c.setLineWidth(0.2 * mm)
        c.line(x1 * mm, self._pt_y(y1), x2 * mm, self._pt_y(y2))

    def _draw_borders(self, x: float, y: float, w: float, h: float, border: str) -> None:
        border = (border or "").upper()
        if not border or border == "0":
            return
        if border == "1":
            border = "LTRB"
        if "L" in border:
            self.line(x, y, x, y + h)
        if "T" in border:
            self.line(x, y, x + w, y)
        if "R" in border:
            self.line(x + w, y, x + w, y + h)
        if "B" in border:
            self.line(x, y + h, x + w, y + h)

    def text(self, x: float, baseline: float, text: str) -> None:
        """Write raw text with its baseline at `baseline` (mm from top)."""
        c = self._canvas
        c.setFillColorRGB(*self.text_color.as_unit())
        c.setFont(self.font_name, self.font_size)
        c.drawString(x * mm, self._pt_y(baseline), normalize_text(text))

    def cell(
        self,
        w: float,
        h: float,
        text: str = "",
        align: str = "L",
        fill: bool = False,
        border: str = "",
        ln: int = 0,
    ) -> None:
        """
        Single-line cell at the cursor.

        `align` takes L/C/R for the horizontal and T/B for the vertical position
        (middle by default). `ln`: 0 moves right, 1 moves to the next line at the
        left margin, 2 moves below.
        """
        align = (align or "L").upper()
        x, y = self.x, self.y
        if w <= 0:
            w = self.page_w - self.r_margin - x
        if fill:
            self.rect(x, y, w, h, "F")
        self._draw_borders(x, y, w, h, border)
        if text:
            text_w = self.string_width(text)
            if "R" in align:
                dx = w - CELL_MARGIN - text_w
            elif "C" in align:
                dx = (w - text_w) / 2
            else:
                dx = CELL_MARGIN
            fs = self.font_size_mm
            if "T" in align:
                baseline = y + 0.8 * fs
            elif "B" in align:
                baseline = y + h - 0.25 * fs
            else:
                baseline = y + 0.5 * h + 0.3 * fs
            self.text(x + dx, baseline, text)
        if ln == 1:
            self.x = self.l_margin
            self.y = y + h
        elif ln == 2:
            self.y = y + h
        else:
            self.x = x + w

    def multi_cell(self, w: float, h: float, text: str, border: str = "", align: str = "L", fill: bool = False) -> int:
        """Wrapped text block; cursor ends below it at the left margin. Returns the line count."""
        x = self.x
        if w <= 0:
            w = self.page_w - self.r_margin - x
        lines = self.split_lines(text, w)
        border = (border or "").upper()
        if border == "1":
            border = "LTRB"
        for idx, line in enumerate(lines):
            sides = border.replace("T", "") if idx > 0 else border
            if idx < len(lines) - 1:
                sides = sides.replace("B", "")
            self.x = x
            self.cell(w, h, line, align=align, fill=fill, border=sides, ln=2)
        self.x = self.l_margin
        return len(lines)

    def image(self, source: ImageReader, x: float, y: float, w: float = 0, h: float = 0) -> tuple[float, float]:
        """
        Place an image; a zero width or height is derived from the aspect ratio.
        Returns the placed (w, h) in mm.
        """
        px_w, px_h = source.getSize()
        if w <= 0 and h <= 0:
            w, h = px_w * 25.4 / 96, px_h * 25.4 / 96
        elif w <= 0:
            w = h * px_w / px_h
        elif h <= 0:
            h = w * px_h / px_w
        self._canvas.drawImage(source, x * mm, self._pt_y(y + h), width=w * mm, height=h * mm, mask="auto")
        return w, h

    def wrap_paragraph(self, para: Paragraph, width: float) -> float:
        """Height in mm of `para` wrapped to `width` mm."""
        _, height = para.wrap(width * mm, self.page_h * mm)
        return height / mm

    def draw_paragraph(self, para: Paragraph, x: float, y: float, width: float) -> float:
        """Draw `para` with its top edge at y; returns the height used in mm."""
        height = self.wrap_paragraph(para, width)
        para.drawOn(self._canvas, x * mm, self._pt_y(y + height))
        return height
