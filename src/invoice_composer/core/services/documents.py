from __future__ import annotations

import base64
import binascii
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from invoice_composer.core.errors import ValidationError
from invoice_composer.core.models.contact import Address, Contact
from invoice_composer.core.models.document import Document, DocumentKind
from invoice_composer.core.models.header_footer import HeaderFooter
from invoice_composer.core.models.item import Discount, LineItem, Tax
from invoice_composer.core.models.options import Options


@dataclass
class DocumentBundle:
    documents: list[Document]
    header: HeaderFooter | None = None
    footer: HeaderFooter | None = None
    options: Options | None = None


def _text(value) -> str:
    return "" if value is None else str(value)


def _mapping(value, what: str) -> Mapping | None:
    if not value:
        return None
    if not isinstance(value, Mapping):
        raise ValidationError(f"{what}: expected an object, got {type(value).__name__}")
    return value


def _list(value, what: str) -> list:
    if not value:
        return []
    if not isinstance(value, list):
        raise ValidationError(f"{what}: expected a list, got {type(value).__name__}")
    return value


def _tax(data) -> Tax | None:
    data = _mapping(data, "tax")
    if data is None:
        return None
    return Tax(percent=_text(data.get("percent", "0")))


def _discount(data) -> Discount | None:
    data = _mapping(data, "discount")
    if data is None:
        return None
    return Discount(percent=_text(data.get("percent")), amount=_text(data.get("amount")))


def _logo(value) -> bytes | None:
    if not value:
        return None
    try:
        return base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError):
        return None


def _contact(data, what: str) -> Contact | None:
    data = _mapping(data, what)
    if data is None:
        return None
    address = _mapping(data.get("address"), f"{what} address")
    return Contact(
        name=_text(data.get("name")),
        logo=_logo(data.get("logo")),
        address=Address(
            address=_text(address.get("address")),
            address2=_text(address.get("address2")),
            postal_code=_text(address.get("postal_code")),
            city=_text(address.get("city")),
            country=_text(address.get("country")),
        )
        if address
        else None,
        phone=_text(data.get("phone")),
        additional_info=[_text(line) for line in _list(data.get("additional_info"), f"{what} additional_info")],
    )


def _item(data) -> LineItem:
    data = _mapping(data, "item") or {}
    return LineItem(
        name=_text(data.get("name")),
        description=_text(data.get("description")),
        unit_cost=_text(data.get("unit_cost")),
        quantity=_text(data.get("quantity", "1")),
        tax=_tax(data.get("tax")),
        discount=_discount(data.get("discount")),
    )


def document_from_mapping(data) -> Document:
    data = _mapping(data, "document") or {}
    kind_raw = _text(data.get("kind") or data.get("type") or "INVOICE").upper()
    try:
        kind = DocumentKind(kind_raw)
    except ValueError:
        raise ValidationError(f"Unknown document kind: {kind_raw!r}") from None
    return Document(
        kind=kind,
        ref=_text(data.get("ref")),
        version=_text(data.get("version")),
        client_ref=_text(data.get("client_ref")),
        date=_text(data.get("date")),
        payment_term=_text(data.get("payment_term")),
        description=_text(data.get("description")),
        notes=_text(data.get("notes")),
        barcode=_text(data.get("barcode")),
        company=_contact(data.get("company"), "company"),
        customer=_contact(data.get("customer"), "customer"),
        items=[_item(item) for item in _list(data.get("items"), "items")],
        discount=_discount(data.get("discount")),
        default_tax=_tax(data.get("default_tax")),
    )


def _header_footer(data, what: str) -> HeaderFooter | None:
    data = _mapping(data, what)
    if data is None:
        return None
    return HeaderFooter(
        text=_text(data.get("text")),
        font_size=float(data.get("font_size") or 0),
        pagination=bool(data.get("pagination", False)),
    )


def load_documents(path: str | Path) -> DocumentBundle:
    """
    Load documents from JSON.

    Accepts either a list of documents or an object with `documents` and
    optional `header`, `footer` and `options`.
    """
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if isinstance(data, list):
        data = {"documents": data}
    if not isinstance(data, dict):
        raise ValidationError(f"{path}: expected a list or an object of documents")
    raw_options = _mapping(data.get("options"), "options")
    raw_documents = _list(data.get("documents"), f"{path}: documents")
    return DocumentBundle(
        documents=[document_from_mapping(item) for item in raw_documents],
        header=_header_footer(data.get("header"), "header"),
        footer=_header_footer(data.get("footer"), "footer"),
        options=Options.from_mapping(raw_options) if raw_options else None,
    )
