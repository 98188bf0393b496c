from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from invoice_composer.core.calculations.money import parse_amount


@dataclass
class Tax:
    """Percentage tax applied to the discounted subtotal of a line."""

    percent: str = "0"

    def rate(self) -> Decimal:
        return parse_amount(self.percent, "tax.percent")


@dataclass
class Discount:
    """Either a percentage or a fixed amount; percent wins when both are set."""

    percent: str = ""
    amount: str = ""

    def is_percent(self) -> bool:
        return bool(str(self.percent or "").strip())

    def value(self) -> tuple[bool, Decimal]:
        """Return (is_percent, value)."""
        if self.is_percent():
            return True, parse_amount(self.percent, "discount.percent")
        if str(self.amount or "").strip():
            return False, parse_amount(self.amount, "discount.amount")
        return False, Decimal("0")


@dataclass
class LineItem:
    """One billable row of a document."""

    name: str
    unit_cost: str
    quantity: str = "1"
    description: str = ""
    tax: Tax | None = None
    discount: Discount | None = None

    def unit_cost_value(self) -> Decimal:
        return parse_amount(self.unit_cost, "unit_cost")

    def quantity_value(self) -> Decimal:
        return parse_amount(self.quantity, "quantity")
