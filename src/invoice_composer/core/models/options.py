"""
Rendering options: labels, colours, font and currency formatting.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Mapping, NamedTuple, Sequence

from invoice_composer.core.calculations.money import MoneyFormatter


class Color(NamedTuple):
    r: int
    g: int
    b: int

    @classmethod
    def coerce(cls, value, fallback: Color) -> Color:
        """Accept a Color or any sequence; fewer than 3 components yields `fallback`."""
        if isinstance(value, Color):
            return value
        if not isinstance(value, Sequence) or isinstance(value, str) or len(value) < 3:
            return fallback
        try:
            r, g, b = (max(0, min(255, int(c))) for c in value[:3])
        except (TypeError, ValueError):
            return fallback
        return cls(r, g, b)

    def as_unit(self) -> tuple[float, float, float]:
        return self.r / 255.0, self.g / 255.0, self.b / 255.0


WHITE = Color(255, 255, 255)

# Used when a colour is supplied with fewer than 3 components.
COLOR_FALLBACKS = {
    "base_text_color": Color(35, 35, 35),
    "grey_text_color": Color(128, 128, 128),
    "grey_bg_color": Color(240, 240, 240),
    "dark_bg_color": Color(0, 0, 0),
}


@dataclass
class Options:
    auto_print: bool = False

    currency_symbol: str = "€ "
    currency_precision: int = 2
    currency_decimal: str = "."
    currency_thousand: str = " "
    currency_format: str = "%s%v"
    currency_format_negative: str = "-%s%v"
    currency_format_zero: str = "%s%v"

    text_type_invoice: str = "INVOICE"
    text_type_quotation: str = "QUOTATION"
    text_type_delivery_note: str = "DELIVERY NOTE"

    text_ref_title: str = "Ref."
    text_version_title: str = "Version"
    text_client_ref_title: str = "Customer ref."
    text_date_title: str = "Date"
    text_payment_term_title: str = "Payment term"
    text_phone_title: str = "Tel"

    text_items_name_title: str = "Name"
    text_items_unit_cost_title: str = "Unit price"
    text_items_quantity_title: str = "Quantity"
    text_items_total_ht_title: str = "Total no tax"
    text_items_tax_title: str = "Tax"
    text_items_discount_title: str = "Discount"
    text_items_total_ttc_title: str = "Total"

    text_total_total: str = "TOTAL"
    text_total_discounted: str = "TOTAL DISCOUNTED"
    text_total_tax: str = "TAX"
    text_total_with_tax: str = "TOTAL WITH TAX"

    base_text_color: Color = field(default_factory=lambda: Color(35, 35, 35))
    grey_text_color: Color = field(default_factory=lambda: Color(82, 82, 82))
    grey_bg_color: Color = field(default_factory=lambda: Color(232, 232, 232))
    dark_bg_color: Color = field(default_factory=lambda: Color(212, 212, 212))

    font: str = "Helvetica"
    bold_font: str = "Helvetica"

    def __setattr__(self, name: str, value) -> None:
        if name in COLOR_FALLBACKS:
            value = Color.coerce(value, COLOR_FALLBACKS[name])
        super().__setattr__(name, value)

    def __post_init__(self) -> None:
        try:
            self.currency_precision = max(0, int(self.currency_precision))
        except (TypeError, ValueError):
            self.currency_precision = 2
        self.font = self.font or "Helvetica"
        self.bold_font = self.bold_font or self.font

    @classmethod
    def from_mapping(cls, data: Mapping) -> Options:
        """Build options from a plain mapping, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in (data or {}).items() if k in known})

    def money_formatter(self) -> MoneyFormatter:
        return MoneyFormatter(
            symbol=self.currency_symbol,
            precision=self.currency_precision,
            thousand=self.currency_thousand,
            decimal=self.currency_decimal,
            template=self.currency_format,
            template_negative=self.currency_format_negative,
            template_zero=self.currency_format_zero,
        )

    def title_for(self, kind) -> str:
        value = getattr(kind, "value", kind)
        return {
            "INVOICE": self.text_type_invoice,
            "QUOTATION": self.text_type_quotation,
            "DELIVERY_NOTE": self.text_type_delivery_note,
        }.get(str(value), self.text_type_invoice)
