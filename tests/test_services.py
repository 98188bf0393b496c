import base64
import json

import pytest

from invoice_composer import app
from invoice_composer.core.errors import ValidationError
from invoice_composer.core.models.document import DocumentKind
from invoice_composer.core.models.options import Color, Options
from invoice_composer.core.services.documents import document_from_mapping, load_documents
from invoice_composer.core.services.options import load_options, save_options


def _document(ref="INV-001", **extra):
    data = {
        "kind": "INVOICE",
        "ref": ref,
        "date": "15/01/2024",
        "company": {"name": "Sample Company Ltd", "address": {"address": "1 Road", "postal_code": "123", "city": "Town"}},
        "customer": {"name": "Customer Name", "phone": "+33 1 23"},
        "items": [{"name": "Widget", "unit_cost": "10", "quantity": "2", "tax": {"percent": "20"}}],
    }
    data.update(extra)
    return data


def test_load_options_missing_file_gives_defaults(tmp_path):
    assert load_options(tmp_path / "nope.json") == Options()


def test_load_options_bad_json_gives_defaults(tmp_path, caplog):
    path = tmp_path / "options.json"
    path.write_text("{not json", encoding="utf-8")

    assert load_options(path) == Options()
    assert "Cannot read options" in caplog.text


def test_load_options_merges_over_defaults(tmp_path):
    path = tmp_path / "options.json"
    path.write_text(json.dumps({"currency_symbol": "$", "grey_bg_color": [1, 2, 3], "unknown": 1}), encoding="utf-8")

    options = load_options(path)

    assert options.currency_symbol == "$"
    assert options.grey_bg_color == Color(1, 2, 3)
    assert options.text_total_tax == "TAX"


def test_save_then_load_options(tmp_path):
    path = tmp_path / "nested" / "options.json"
    options = Options(currency_symbol="Kč ", dark_bg_color=Color(9, 9, 9), auto_print=True)

    save_options(options, path)

    assert load_options(path) == options


def test_document_from_mapping_accepts_type_key():
    doc = document_from_mapping(_document(kind=None, type="delivery_note"))

    assert doc.kind == DocumentKind.DELIVERY_NOTE
    assert doc.items[0].tax.percent == "20"
    assert doc.company.address.city == "Town"
    assert doc.customer.address is None


def test_document_from_mapping_rejects_unknown_kind():
    with pytest.raises(ValidationError):
        document_from_mapping(_document(kind="receipt"))


def test_load_documents_list_form(tmp_path):
    path = tmp_path / "docs.json"
    path.write_text(json.dumps([_document("A"), _document("B")]), encoding="utf-8")

    bundle = load_documents(path)

    assert [doc.ref for doc in bundle.documents] == ["A", "B"]
    assert bundle.header is None
    assert bundle.options is None


def test_load_documents_object_form(tmp_path, logo_bytes):
    company = _document()["company"]
    company["logo"] = base64.b64encode(logo_bytes).decode("ascii")
    payload = {
        "documents": [_document(company=company)],
        "header": {"text": "<center>Hello</center>"},
        "footer": {"text": "Footer", "pagination": True, "font_size": 8},
        "options": {"auto_print": True},
    }
    path = tmp_path / "docs.json"
    path.write_text(json.dumps(payload), encoding="utf-8")

    bundle = load_documents(path)

    assert bundle.documents[0].company.logo == logo_bytes
    assert bundle.header.text == "<center>Hello</center>"
    assert bundle.header.font_size == 10
    assert bundle.footer.pagination is True
    assert bundle.footer.font_size == 8
    assert bundle.options.auto_print is True


def test_load_documents_rejects_scalars(tmp_path):
    path = tmp_path / "docs.json"
    path.write_text("42", encoding="utf-8")

    with pytest.raises(ValidationError):
        load_documents(path)


def test_cli_writes_pdf(tmp_path):
    source = tmp_path / "docs.json"
    source.write_text(json.dumps([_document("A"), _document("B")]), encoding="utf-8")
    target = tmp_path / "out.pdf"

    code = app.main([str(source), "-o", str(target), "--footer", "Page {page}", "--pagination"])

    assert code == 0
    assert target.read_bytes().startswith(b"%PDF")


def test_cli_reports_invalid_documents(tmp_path):
    broken = _document()
    del broken["customer"]
    source = tmp_path / "docs.json"
    source.write_text(json.dumps([broken]), encoding="utf-8")
    target = tmp_path / "out.pdf"

    assert app.main([str(source), "-o", str(target)]) == 1
    assert not target.exists()


def test_cli_reports_missing_input(tmp_path):
    assert app.main([str(tmp_path / "missing.json"), "-o", str(tmp_path / "out.pdf")]) == 1


@pytest.mark.parametrize(
    "field,value",
    [
        ("company", "Sample Company Ltd"),
        ("customer", ["Customer Name"]),
        ("items", [["Widget", "10"]]),
        ("items", "Widget"),
        ("discount", 10),
    ],
)
def test_wrong_shapes_are_validation_errors(field, value):
    with pytest.raises(ValidationError):
        document_from_mapping(_document(**{field: value}))


def test_non_mapping_address_is_a_validation_error():
    company = _document()["company"]
    company["address"] = "1 Road, Town"

    with pytest.raises(ValidationError):
        document_from_mapping(_document(company=company))


def test_cli_reports_wrong_shapes(tmp_path):
    source = tmp_path / "docs.json"
    source.write_text(json.dumps({"documents": ["INV-001"]}), encoding="utf-8")

    assert app.main([str(source), "-o", str(tmp_path / "out.pdf")]) == 1
