from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable

from invoice_composer.core.calculations.money import HUNDRED, ZERO, parse_amount
from invoice_composer.core.models.item import Discount, LineItem, Tax


@dataclass(frozen=True)
class LineBreakdown:
    subtotal: Decimal
    discount_amount: Decimal
    discounted_subtotal: Decimal
    tax_amount: Decimal

    @property
    def total(self) -> Decimal:
        return self.discounted_subtotal + self.tax_amount


@dataclass(frozen=True)
class TotalsBreakdown:
    total_without_tax_without_discount: Decimal
    total_without_tax: Decimal
    discount_amount: Decimal
    tax_total: Decimal

    @property
    def total_without_tax_discounted(self) -> Decimal:
        return self.total_without_tax - self.discount_amount

    @property
    def total_with_tax(self) -> Decimal:
        return self.total_without_tax - self.discount_amount + self.tax_total


def apply_discount(amount: Decimal, discount: Discount | None) -> Decimal:
    """Return the discount value for `amount`, never more than `amount` itself."""
    if discount is None:
        return ZERO
    is_percent, value = discount.value()
    reduction = amount * value / HUNDRED if is_percent else value
    return min(reduction, amount)


class LineItemCalculator:
    """Per-line subtotal, discount, tax and total."""

    @staticmethod
    def calculate(unit_cost, quantity, discount: Discount | None = None, tax: Tax | None = None) -> LineBreakdown:
        u = parse_amount(unit_cost, "unit_cost")
        q = parse_amount(quantity, "quantity")
        subtotal = u * q
        discount_amount = apply_discount(subtotal, discount)
        discounted = max(ZERO, subtotal - discount_amount)
        tax_amount = discounted * tax.rate() / HUNDRED if tax is not None else ZERO
        return LineBreakdown(
            subtotal=subtotal,
            discount_amount=discount_amount,
            discounted_subtotal=discounted,
            tax_amount=tax_amount,
        )

    @classmethod
    def for_item(cls, item: LineItem, default_tax: Tax | None = None) -> LineBreakdown:
        tax = item.tax if item.tax is not None else default_tax
        return cls.calculate(item.unit_cost, item.quantity, item.discount, tax)


class DocumentTotals:
    """Aggregates line breakdowns plus an optional document-level discount."""

    def __init__(self, default_tax: Tax | None = None):
        self.default_tax = default_tax

    def summarize(self, items: Iterable[LineItem], discount: Discount | None = None) -> TotalsBreakdown:
        subtotal = ZERO
        without_tax = ZERO
        tax_total = ZERO
        for item in items:
            line = LineItemCalculator.for_item(item, self.default_tax)
            subtotal += line.subtotal
            without_tax += line.discounted_subtotal
            tax_total += line.tax_amount
        return TotalsBreakdown(
            total_without_tax_without_discount=subtotal,
            total_without_tax=without_tax,
            discount_amount=apply_discount(without_tax, discount),
            tax_total=tax_total,
        )
