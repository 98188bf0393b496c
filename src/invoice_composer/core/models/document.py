from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, List

from invoice_composer.core.errors import ValidationError
from invoice_composer.core.models.contact import Contact
from invoice_composer.core.models.item import Discount, LineItem, Tax

if TYPE_CHECKING:
    from invoice_composer.core.models.header_footer import HeaderFooter
    from invoice_composer.core.models.options import Options

REF_MAX_LENGTH = 32
VERSION_MAX_LENGTH = 32
CLIENT_REF_MAX_LENGTH = 64
CONTACT_NAME_MAX_LENGTH = 256


class DocumentKind(str, Enum):
    INVOICE = "INVOICE"
    QUOTATION = "QUOTATION"
    DELIVERY_NOTE = "DELIVERY_NOTE"


@dataclass
class Document:
    """
    A billing document (invoice, quotation or delivery note).

    Populated through setters by the caller, then read-only while a build runs.
    """

    kind: DocumentKind = DocumentKind.INVOICE
    ref: str = ""
    version: str = ""
    client_ref: str = ""
    date: str = ""
    payment_term: str = ""
    description: str = ""
    notes: str = ""
    barcode: str = ""
    company: Contact | None = None
    customer: Contact | None = None
    items: List[LineItem] = field(default_factory=list)
    discount: Discount | None = None
    default_tax: Tax | None = None

    def set_ref(self, ref: str) -> Document:
        self.ref = ref
        return self

    def set_version(self, version: str) -> Document:
        self.version = version
        return self

    def set_client_ref(self, client_ref: str) -> Document:
        self.client_ref = client_ref
        return self

    def set_date(self, date: str) -> Document:
        self.date = date
        return self

    def set_payment_term(self, payment_term: str) -> Document:
        self.payment_term = payment_term
        return self

    def set_description(self, description: str) -> Document:
        self.description = description
        return self

    def set_notes(self, notes: str) -> Document:
        self.notes = notes
        return self

    def set_barcode(self, payload: str) -> Document:
        self.barcode = payload
        return self

    def set_company(self, company: Contact) -> Document:
        self.company = company
        return self

    def set_customer(self, customer: Contact) -> Document:
        self.customer = customer
        return self

    def set_discount(self, discount: Discount | None) -> Document:
        self.discount = discount
        return self

    def set_default_tax(self, tax: Tax | None) -> Document:
        self.default_tax = tax
        return self

    def append_item(self, item: LineItem) -> Document:
        self.items.append(item)
        return self

    def validate(self) -> None:
        """Raise ValidationError (or InvalidAmount) when the document cannot be rendered."""
        if not isinstance(self.kind, DocumentKind):
            try:
                self.kind = DocumentKind(str(self.kind).upper())
            except ValueError:
                raise ValidationError(f"Unknown document kind: {self.kind!r}") from None
        if not self.ref:
            raise ValidationError("Document ref is required")
        if len(self.ref) > REF_MAX_LENGTH:
            raise ValidationError(f"Document ref longer than {REF_MAX_LENGTH} characters: {self.ref!r}")
        if len(self.version) > VERSION_MAX_LENGTH:
            raise ValidationError(f"Document version longer than {VERSION_MAX_LENGTH} characters")
        if len(self.client_ref) > CLIENT_REF_MAX_LENGTH:
            raise ValidationError(f"Client ref longer than {CLIENT_REF_MAX_LENGTH} characters")
        _validate_contact(self.company, "company", self.ref)
        _validate_contact(self.customer, "customer", self.ref)

        for item in self.items:
            if not item.name:
                raise ValidationError(f"{self.ref}: item name is required")
            item.unit_cost_value()
            item.quantity_value()
            if item.tax is not None:
                item.tax.rate()
            if item.discount is not None:
                item.discount.value()
        if self.discount is not None:
            self.discount.value()
        if self.default_tax is not None:
            self.default_tax.rate()

    def build(
        self,
        options: Options | None = None,
        header: HeaderFooter | None = None,
        footer: HeaderFooter | None = None,
    ) -> bytes:
        """Render this document alone and return the PDF bytes."""
        from invoice_composer.utils.pdf.renderers.pdf_renderer import MultiDocument

        composer = MultiDocument(options)
        composer.set_header(header)
        composer.set_footer(footer)
        composer.add_document(self)
        return composer.build()


def _validate_contact(contact: Contact | None, role: str, ref: str) -> None:
    if contact is None:
        raise ValidationError(f"{ref}: {role} contact is required")
    name = (contact.name or "").strip()
    if not name:
        raise ValidationError(f"{ref}: {role} name is required")
    if len(name) > CONTACT_NAME_MAX_LENGTH:
        raise ValidationError(f"{ref}: {role} name longer than {CONTACT_NAME_MAX_LENGTH} characters")
