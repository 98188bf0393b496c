"""
Multi-document composer: one page stream, one page (or more) per document.
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path

from invoice_composer.core.calculations.pricing_engine import DocumentTotals, LineItemCalculator
from invoice_composer.core.errors import ValidationError
from invoice_composer.core.models.document import Document
from invoice_composer.core.models.header_footer import HeaderFooter
from invoice_composer.core.models.options import Options
from invoice_composer.utils.pdf.core.drawing import PageCanvas
from invoice_composer.utils.pdf.core.layout_common import (
    BARCODE_X,
    BASE_MARGIN,
    BASE_MARGIN_TOP,
    CONTACT_GAP,
    ITEM_ROW_PADDING,
    LARGE_TEXT_FONT_SIZE,
    MAX_PAGE_HEIGHT,
    TABLE_GAP,
    TABLE_HEADER_HEIGHT,
    TABLE_X,
)
from invoice_composer.utils.pdf.sections.barcode import barcode_height, render_barcode
from invoice_composer.utils.pdf.sections.contact import render_company, render_customer
from invoice_composer.utils.pdf.sections.header_footer import HeaderFooterRenderer
from invoice_composer.utils.pdf.sections.heading import render_metas, render_title
from invoice_composer.utils.pdf.sections.items_table import draw_table_header, item_row_height, render_item_row
from invoice_composer.utils.pdf.sections.payment import payment_term_height, render_payment_term
from invoice_composer.utils.pdf.sections.summary import render_totals, totals_height
from invoice_composer.utils.pdf.sections.text_blocks import notes_height, render_description, render_notes

logger = logging.getLogger(__name__)


class FlowState(str, Enum):
    START_DOCUMENT = "start_document"
    HEADING = "heading"
    CONTACTS = "contacts"
    BODY = "body"
    ITEM_ROW = "item_row"
    TOTALS = "totals"
    DONE = "done"


class MultiDocument:
    """
    Renders an ordered collection of documents into a single PDF.

    Header and footer are shared by every document. A document that fails
    validation aborts the build before its first page is started.
    """

    def __init__(self, options: Options | None = None, compress: bool = False):
        self.options = options or Options()
        self.header: HeaderFooter | None = None
        self.footer: HeaderFooter | None = None
        self.docs: list[Document] = []
        self.compress = compress
        self.page_count = 0
        self.state = FlowState.DONE
        self._canvas: PageCanvas | None = None
        self._decorations: HeaderFooterRenderer | None = None

    def add_document(self, doc: Document) -> MultiDocument:
        self.docs.append(doc)
        return self

    def set_header(self, header: HeaderFooter | None) -> MultiDocument:
        self.header = header
        return self

    def set_footer(self, footer: HeaderFooter | None) -> MultiDocument:
        self.footer = footer
        return self

    # -------- build --------
    def build(self) -> bytes:
        if not self.docs:
            raise ValidationError("No documents to build")
        canvas = PageCanvas(compress=self.compress, title=self.docs[0].ref)
        self._canvas = canvas
        self._decorations = HeaderFooterRenderer(self.header, self.footer, self.options)
        try:
            for doc in self.docs:
                self._build_document(doc)
            if canvas.page_count:
                self._decorations.render_footer(canvas, canvas.page_count)
            if self.options.auto_print:
                canvas.enable_auto_print()
            data = canvas.finish()
        finally:
            self._canvas = None
        self.page_count = canvas.page_count
        logger.debug("Built %d document(s) on %d page(s)", len(self.docs), self.page_count)
        return data

    def write(self, path: Path) -> Path:
        path = Path(path)
        path.write_bytes(self.build())
        return path

    # -------- state machine --------
    def _enter(self, state: FlowState, doc: Document) -> None:
        self.state = state
        logger.debug("%s: %s", doc.ref or "-", state.value)

    def _new_page(self) -> None:
        canvas = self._canvas
        if canvas.page_count:
            self._decorations.render_footer(canvas, canvas.page_count)
        page_no = canvas.add_page()
        canvas.set_margins(BASE_MARGIN, BASE_MARGIN_TOP, BASE_MARGIN)
        self._decorations.render_header(canvas, page_no)
        canvas.set_xy(BASE_MARGIN, BASE_MARGIN_TOP)

    def _build_document(self, doc: Document) -> None:
        options = self.options
        canvas = self._canvas
        money = options.money_formatter()

        self._enter(FlowState.START_DOCUMENT, doc)
        doc.validate()
        totals = DocumentTotals(doc.default_tax).summarize(doc.items, doc.discount)
        self._new_page()
        canvas.set_font(options.font, "", LARGE_TEXT_FONT_SIZE)

        self._enter(FlowState.HEADING, doc)
        render_title(canvas, doc, options)
        render_metas(canvas, doc, options)

        self._enter(FlowState.CONTACTS, doc)
        company_bottom = render_company(canvas, doc.company, options)
        customer_bottom = render_customer(canvas, doc.customer, options)
        canvas.set_xy(BASE_MARGIN, max(company_bottom, customer_bottom) + CONTACT_GAP)

        self._enter(FlowState.BODY, doc)
        render_description(canvas, doc.description, options)
        canvas.set_xy(TABLE_X, canvas.get_y() + TABLE_GAP)
        first_row = item_row_height(canvas, doc.items[0], options) if doc.items else 0.0
        if canvas.get_y() + TABLE_HEADER_HEIGHT + ITEM_ROW_PADDING + first_row > MAX_PAGE_HEIGHT:
            logger.debug("%s: item table starts on a new page", doc.ref)
            self._new_page()
        draw_table_header(canvas, options)

        self._enter(FlowState.ITEM_ROW, doc)
        for item in doc.items:
            if canvas.get_y() + item_row_height(canvas, item, options) > MAX_PAGE_HEIGHT:
                logger.debug("%s: item table continues on a new page", doc.ref)
                self._new_page()
                draw_table_header(canvas, options)
            tax = item.tax if item.tax is not None else doc.default_tax
            line = LineItemCalculator.for_item(item, doc.default_tax)
            render_item_row(canvas, item, line, tax.rate() if tax is not None else None, options, money)

        self._enter(FlowState.TOTALS, doc)
        top = canvas.get_y() + TABLE_GAP
        left = barcode_height(doc.barcode) + notes_height(canvas, doc.notes, options)
        right = totals_height(doc.discount, totals) + payment_term_height(doc.payment_term)
        if top + max(left, right) > MAX_PAGE_HEIGHT:
            logger.debug("%s: totals moved to a new page", doc.ref)
            self._new_page()
            top = BASE_MARGIN_TOP

        notes_top = top
        if render_barcode(canvas, doc.barcode, BARCODE_X, top, options):
            notes_top += barcode_height(doc.barcode)
        notes_bottom = render_notes(canvas, doc.notes, notes_top, options)
        totals_bottom = render_totals(canvas, totals, doc.discount, top, options, money)
        totals_bottom = render_payment_term(canvas, doc.payment_term, totals_bottom, options)
        canvas.set_xy(BASE_MARGIN, max(notes_bottom, totals_bottom))

        self._enter(FlowState.DONE, doc)
