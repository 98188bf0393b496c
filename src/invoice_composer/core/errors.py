"""
Exceptions raised while building billing documents.
"""


class InvoiceComposerError(Exception):
    """Base exception for the document composer."""


class ValidationError(InvoiceComposerError):
    """A document is structurally invalid (missing company name, empty ref, ...)."""


class NumericFormatError(InvoiceComposerError):
    """A numeric field of a document could not be parsed."""


class InvalidAmount(NumericFormatError):
    """Unit cost, quantity, tax or discount is not a non-negative decimal."""

    def __init__(self, field: str, value):
        self.field = field
        self.value = value
        super().__init__(f"Invalid amount for {field}: {value!r}")


class AssetDecodeFailure(InvoiceComposerError):
    """Logo or barcode image could not be produced. Never leaves the asset layer."""
