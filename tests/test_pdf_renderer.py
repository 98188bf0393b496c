import math

import pytest

from invoice_composer.core.errors import InvalidAmount, ValidationError
from invoice_composer.core.models.header_footer import HeaderFooter
from invoice_composer.core.models.item import Discount, LineItem, Tax
from invoice_composer.core.models.options import WHITE, Color, Options
from invoice_composer.utils.pdf.core.drawing import PageCanvas
from invoice_composer.utils.pdf.core.layout_common import (
    BASE_MARGIN_TOP,
    ITEM_ROW_PADDING,
    MAX_PAGE_HEIGHT,
    TABLE_HEADER_HEIGHT,
)
from invoice_composer.utils.pdf.renderers import pdf_renderer
from invoice_composer.utils.pdf.renderers.pdf_renderer import FlowState, MultiDocument
from invoice_composer.utils.pdf.sections.summary import totals_height


def _items(count, unit_cost="10"):
    return [LineItem(name=f"Item {i}", unit_cost=unit_cost, quantity="1") for i in range(count)]


@pytest.fixture
def recorder(monkeypatch):
    """Records page and y of table headers, item rows, totals and notes."""
    log = {"headers": [], "rows": [], "totals": [], "notes": []}

    original_header = pdf_renderer.draw_table_header
    original_row = pdf_renderer.render_item_row
    original_totals = pdf_renderer.render_totals
    original_notes = pdf_renderer.render_notes

    def header(canvas, options):
        log["headers"].append((canvas.page_count, canvas.get_y()))
        return original_header(canvas, options)

    def row(canvas, item, line, tax_rate, options, money):
        y = canvas.get_y()
        height = original_row(canvas, item, line, tax_rate, options, money)
        log["rows"].append((canvas.page_count, y, height))
        return height

    def totals(canvas, breakdown, discount, y, options, money):
        log["totals"].append((canvas.page_count, y, totals_height(discount, breakdown)))
        return original_totals(canvas, breakdown, discount, y, options, money)

    def notes(canvas, text, y, options):
        log["notes"].append((canvas.page_count, y))
        return original_notes(canvas, text, y, options)

    monkeypatch.setattr(pdf_renderer, "draw_table_header", header)
    monkeypatch.setattr(pdf_renderer, "render_item_row", row)
    monkeypatch.setattr(pdf_renderer, "render_totals", totals)
    monkeypatch.setattr(pdf_renderer, "render_notes", notes)
    return log


def test_two_documents_end_to_end(make_document):
    ten = Tax(percent="10")
    first = make_document("INV-001", [LineItem(name="Server", unit_cost="5000000", tax=ten)])
    second = make_document("INV-002", [LineItem(name="Support", unit_cost="3000000", tax=ten)])
    composer = MultiDocument().add_document(first).add_document(second)

    data = composer.build()

    assert data.startswith(b"%PDF")
    assert composer.page_count == 2
    assert composer.state == FlowState.DONE
    assert b"INV-001" in data
    assert b"INV-002" in data
    assert b"5 500 000.00" in data
    assert b"3 300 000.00" in data


def test_single_document_build(make_document):
    doc = make_document(items=[LineItem(name="Widget", unit_cost="12.5", quantity="4")])

    data = doc.build()

    assert data.startswith(b"%PDF")
    assert b"50.00" in data


def test_no_documents_is_an_error():
    with pytest.raises(ValidationError):
        MultiDocument().build()


def test_invalid_document_aborts_the_build(make_document):
    good = make_document("INV-001", _items(1))
    bad = make_document("INV-002", [LineItem(name="Broken", unit_cost="abc")])
    composer = MultiDocument().add_document(good).add_document(bad)

    with pytest.raises(InvalidAmount):
        composer.build()
    assert composer.page_count == 0


def test_missing_customer_aborts_the_build(make_document):
    doc = make_document(items=_items(1))
    doc.customer = None

    with pytest.raises(ValidationError):
        MultiDocument().add_document(doc).build()


@pytest.mark.parametrize("count", [5, 40, 90])
def test_rows_stay_above_page_limit(make_document, recorder, count):
    composer = MultiDocument().add_document(make_document(items=_items(count)))

    composer.build()

    rows = recorder["rows"]
    assert len(rows) == count
    assert all(y + height <= MAX_PAGE_HEIGHT for _, y, height in rows)
    row_pages = sorted({page for page, _, _ in rows})
    header_pages = [page for page, _ in recorder["headers"]]
    assert header_pages == row_pages


def test_continuation_pages_hold_full_tables(make_document, recorder):
    composer = MultiDocument().add_document(make_document(items=_items(120)))

    composer.build()

    rows = recorder["rows"]
    per_page = {}
    for page, _, _ in rows:
        per_page[page] = per_page.get(page, 0) + 1
    row_height = rows[0][2]
    capacity = int((MAX_PAGE_HEIGHT - (BASE_MARGIN_TOP + TABLE_HEADER_HEIGHT + ITEM_ROW_PADDING)) // row_height)
    pages = sorted(per_page)
    for page in pages[1:-1]:
        assert per_page[page] == capacity
    first = per_page[pages[0]]
    expected_row_pages = 1 + math.ceil((120 - first) / capacity)
    assert len(pages) == expected_row_pages
    for page, y in recorder["headers"][1:]:
        assert y == BASE_MARGIN_TOP


def test_totals_always_fit_on_their_page(make_document, recorder):
    forced = []
    for count in range(1, 45):
        recorder["rows"].clear()
        recorder["totals"].clear()
        recorder["headers"].clear()
        doc = make_document(items=_items(count), payment_term="30 days")
        composer = MultiDocument().add_document(doc)
        composer.build()

        page, top, height = recorder["totals"][0]
        assert top + height <= MAX_PAGE_HEIGHT
        last_row_page = recorder["rows"][-1][0]
        if page > last_row_page:
            forced.append(count)
            assert top == BASE_MARGIN_TOP
            assert composer.page_count == page
            assert [p for p, _ in recorder["headers"]] == sorted({p for p, _, _ in recorder["rows"]})

    assert forced


def test_discount_row_grows_totals_block(make_document, recorder):
    doc = make_document(items=_items(1, "100"), discount=Discount(percent="10"))

    MultiDocument().add_document(doc).build()

    _, _, height = recorder["totals"][0]
    assert height == 45


def test_zero_discount_keeps_short_totals(make_document, recorder):
    doc = make_document(items=_items(1, "100"), discount=Discount(percent="0"))

    MultiDocument().add_document(doc).build()

    assert recorder["totals"][0][2] == 30


def test_empty_barcode_leaves_layout_unchanged(make_document, recorder, monkeypatch):
    plain = make_document("INV-001", _items(2), notes="Thanks")
    MultiDocument().add_document(plain).build()
    _, plain_top, _ = recorder["totals"][0]
    assert recorder["notes"][0][1] == plain_top

    from invoice_composer.utils.pdf.sections import barcode as barcode_section

    monkeypatch.setattr(barcode_section, "barcode_image", lambda payload: None)
    failing = make_document("INV-002", _items(2), notes="Thanks", barcode="ABC-123")
    MultiDocument().add_document(failing).build()
    assert recorder["totals"][1][1] == plain_top
    assert recorder["notes"][1][1] == plain_top


def test_barcode_pushes_notes_down(make_document, recorder):
    doc = make_document(items=_items(2), notes="Thanks", barcode="ABC-123")

    MultiDocument().add_document(doc).build()

    _, top, _ = recorder["totals"][0]
    assert recorder["notes"][0][1] == top + 28


def test_header_and_footer_render_on_every_page(make_document):
    headers, footers = [], []
    composer = MultiDocument()
    composer.set_header(HeaderFooter(custom_render=lambda canvas, page: headers.append(page)))
    composer.set_footer(HeaderFooter(custom_render=lambda canvas, page: footers.append(page)))
    composer.add_document(make_document("INV-001", _items(1)))
    composer.add_document(make_document("QUO-001", _items(1)))

    composer.build()

    assert headers == [1, 2]
    assert footers == [1, 2]


def test_footer_page_numbers_in_output(make_document):
    composer = MultiDocument()
    composer.set_footer(HeaderFooter(text="Footnote-{page}"))
    composer.add_document(make_document(items=_items(80)))

    data = composer.build()

    assert composer.page_count >= 2
    assert b"Footnote-1" in data
    assert b"Footnote-2" in data


def test_invalid_colours_fall_back(make_document, monkeypatch):
    seen = []
    original = PageCanvas.set_fill_color

    def record(self, color):
        seen.append(color)
        return original(self, color)

    monkeypatch.setattr(PageCanvas, "set_fill_color", record)
    options = Options(grey_bg_color=(1, 2), dark_bg_color=(5,))
    doc = make_document(items=_items(2), discount=Discount(amount="1"))

    MultiDocument(options).add_document(doc).build()

    assert seen
    assert set(seen) <= {Color(0, 0, 0), Color(240, 240, 240), WHITE}
    assert Color(0, 0, 0) in seen
    assert Color(240, 240, 240) in seen


def test_auto_print_sets_open_action(make_document):
    doc = make_document(items=_items(1))

    data = MultiDocument(Options(auto_print=True)).add_document(doc).build()
    plain = MultiDocument().add_document(make_document(items=_items(1))).build()

    assert b"/OpenAction" in data
    assert b"JavaScript" in data
    assert b"/OpenAction" not in plain


def test_write_creates_file(make_document, tmp_path):
    target = tmp_path / "out.pdf"

    MultiDocument().add_document(make_document(items=_items(1))).write(target)

    assert target.read_bytes().startswith(b"%PDF")


def test_totals_values_are_rendered(make_document):
    item = LineItem(name="Box", unit_cost="300000", quantity="1", discount=Discount(percent="15"))
    doc = make_document(items=[item], default_tax=Tax(percent="20"))

    data = MultiDocument().add_document(doc).build()

    assert b"255 000.00" in data
    assert b"306 000.00" in data


def test_table_header_moves_with_its_first_row(make_document, recorder):
    doc = make_document(items=_items(1), description="line\n" * 36)

    MultiDocument().add_document(doc).build()

    header_pages = [page for page, _ in recorder["headers"]]
    assert header_pages == [page for page, _, _ in recorder["rows"]] == [2]
    assert recorder["headers"][0][1] == BASE_MARGIN_TOP
    assert all(y + TABLE_HEADER_HEIGHT <= MAX_PAGE_HEIGHT for _, y in recorder["headers"])


def test_table_header_without_items_stays_above_limit(make_document, recorder):
    doc = make_document(description="line\n" * 36)

    MultiDocument().add_document(doc).build()

    page, y = recorder["headers"][0]
    assert page == 2
    assert y + TABLE_HEADER_HEIGHT + ITEM_ROW_PADDING <= MAX_PAGE_HEIGHT


def test_zero_items_with_discount_renders_short_totals(make_document, recorder):
    doc = make_document(discount=Discount(percent="15"))

    data = MultiDocument().add_document(doc).build()

    assert recorder["rows"] == []
    page, _, height = recorder["totals"][0]
    assert (page, height) == (1, 30)
    assert b"TOTAL DISCOUNTED" not in data
