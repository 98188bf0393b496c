"""
Decimal parsing and currency formatting.
Formatting parameters are always explicit (no locale detection).
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from invoice_composer.core.errors import InvalidAmount

ZERO = Decimal("0")
HUNDRED = Decimal("100")


def parse_amount(value, field: str = "amount") -> Decimal:
    """
    Parse a decimal string (or number) into a non-negative Decimal.
    Raises InvalidAmount for empty, malformed, non-finite or negative input.
    """
    if isinstance(value, bool) or value is None:
        raise InvalidAmount(field, value)
    if isinstance(value, Decimal):
        number = value
    else:
        text = str(value).strip()
        if not text:
            raise InvalidAmount(field, value)
        try:
            number = Decimal(text)
        except (InvalidOperation, ValueError):
            raise InvalidAmount(field, value) from None
    if not number.is_finite() or number < 0:
        raise InvalidAmount(field, value)
    return number


def round_amount(amount: Decimal, precision: int) -> Decimal:
    quantum = Decimal(1).scaleb(-precision) if precision > 0 else Decimal(1)
    return Decimal(amount).quantize(quantum, rounding=ROUND_HALF_UP)


def _group_thousands(digits: str, separator: str) -> str:
    groups: list[str] = []
    while len(digits) > 3:
        groups.insert(0, digits[-3:])
        digits = digits[:-3]
    groups.insert(0, digits)
    return separator.join(groups)


@dataclass(frozen=True)
class MoneyFormatter:
    """
    Formats amounts as currency strings.

    Templates contain `%v` (formatted amount) and `%s` (symbol). The negative
    template receives the absolute value, e.g. "-%s%v".
    """

    symbol: str = "€ "
    precision: int = 2
    thousand: str = " "
    decimal: str = "."
    template: str = "%s%v"
    template_negative: str = "-%s%v"
    template_zero: str = "%s%v"

    def format_number(self, amount) -> str:
        """Round, group and join an absolute amount (no symbol, no sign)."""
        rounded = round_amount(abs(Decimal(str(amount))), self.precision)
        text = f"{rounded:f}"
        integer, _, fraction = text.partition(".")
        out = _group_thousands(integer, self.thousand)
        if self.precision > 0:
            out += self.decimal + fraction.ljust(self.precision, "0")[: self.precision]
        return out

    def format(self, amount) -> str:
        value = Decimal(str(amount))
        if value == ZERO:
            template = self.template_zero
        elif value < ZERO:
            template = self.template_negative
        else:
            template = self.template
        return template.replace("%v", self.format_number(value)).replace("%s", self.symbol)
