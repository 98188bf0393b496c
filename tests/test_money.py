from decimal import Decimal

import pytest

from invoice_composer.core.calculations.money import MoneyFormatter, parse_amount
from invoice_composer.core.errors import InvalidAmount, NumericFormatError


def test_precision_zero_rounds_before_dropping_fraction():
    money = MoneyFormatter(symbol="€ ", precision=0, thousand=" ", decimal=".", template="%v %s")

    assert money.format(Decimal("100.75")) == "101 € "
    assert money.format(Decimal("100.75")) == money.format(Decimal("101.00"))


def test_groups_thousands_and_keeps_precision():
    money = MoneyFormatter(symbol="€ ", precision=2, thousand=" ", decimal=",")

    assert money.format(Decimal("1234567.5")) == "€ 1 234 567,50"
    assert money.format("999") == "€ 999,00"


def test_half_up_rounding():
    money = MoneyFormatter(symbol="", precision=2, thousand=",", decimal=".")

    assert money.format(Decimal("2.675")) == "2.68"
    assert money.format(Decimal("0.005")) == "0.01"


def test_negative_and_zero_templates():
    money = MoneyFormatter(
        symbol="$",
        precision=2,
        thousand=",",
        decimal=".",
        template="%s%v",
        template_negative="(%s%v)",
        template_zero="%s--",
    )

    assert money.format(Decimal("-1500")) == "($1,500.00)"
    assert money.format(Decimal("0")) == "$--"
    assert money.format(Decimal("0.00")) == "$--"


def test_zero_branch_does_not_depend_on_precision():
    money = MoneyFormatter(symbol="", precision=0, thousand=" ", decimal=".", template_zero="zero")

    assert money.format(0) == "zero"
    assert money.format(Decimal("0.2")) == "0"


@pytest.mark.parametrize("value", ["", "abc", "1,5", "-3", "NaN", "Infinity", None])
def test_parse_amount_rejects_invalid_values(value):
    with pytest.raises(InvalidAmount) as excinfo:
        parse_amount(value, "unit_cost")

    assert isinstance(excinfo.value, NumericFormatError)
    assert excinfo.value.field == "unit_cost"


def test_parse_amount_accepts_decimal_strings():
    assert parse_amount(" 12.50 ") == Decimal("12.50")
    assert parse_amount(3) == Decimal("3")
