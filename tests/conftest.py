import io
import sys
from pathlib import Path

import pytest

# Ensure `src` is importable when running tests from repo root.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


@pytest.fixture
def options():
    from invoice_composer.core.models.options import Options

    return Options()


@pytest.fixture
def company():
    from invoice_composer.core.models.contact import Address, Contact

    return Contact(
        name="Sample Company Ltd",
        address=Address(address="123 Business Street", postal_code="12345", city="Business City", country="USA"),
    )


@pytest.fixture
def customer():
    from invoice_composer.core.models.contact import Address, Contact

    return Contact(
        name="Customer Name",
        address=Address(address="456 Customer Avenue", postal_code="67890", city="Customer City", country="USA"),
    )


@pytest.fixture
def make_document(company, customer):
    """Factory for a valid invoice; keyword arguments override fields."""
    from invoice_composer.core.models.document import Document, DocumentKind

    def _make(ref="INV-001", items=(), **fields):
        doc = Document(kind=fields.pop("kind", DocumentKind.INVOICE), ref=ref, date="15/01/2024")
        doc.set_company(fields.pop("company", company))
        doc.set_customer(fields.pop("customer", customer))
        for item in items:
            doc.append_item(item)
        for name, value in fields.items():
            setattr(doc, name, value)
        return doc

    return _make


@pytest.fixture
def logo_bytes():
    from PIL import Image

    buf = io.BytesIO()
    Image.new("RGB", (40, 60), (200, 30, 30)).save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def page_canvas():
    from invoice_composer.utils.pdf.core.drawing import PageCanvas

    canvas = PageCanvas()
    canvas.add_page()
    return canvas
