from datetime import date, datetime
from decimal import Decimal

import pytest

from retail_pos.services.currency import format_currency, format_display_date, parse_currency


@pytest.mark.parametrize(
    "amount, expected",
    [
        (0, "TSh 0.00"),
        (1234.5, "TSh 1,234.50"),
        (Decimal("1000000"), "TSh 1,000,000.00"),
        (-5, "-TSh 5.00"),
    ],
)
def test_format_currency(amount, expected):
    assert format_currency(amount) == expected


def test_format_currency_custom_symbol():
    assert format_currency(10, symbol="$") == "$ 10.00"


@pytest.mark.parametrize(
    "text, expected",
    [
        ("TSh 1,234.50", 1234.5),
        ("-TSh 5.00", -5.0),
        ("abc", 0.0),
        ("", 0.0),
        ("1.2.3", 1.2),
    ],
)
def test_parse_currency(text, expected):
    assert parse_currency(text) == expected


def test_format_then_parse_recovers_amount():
    assert parse_currency(format_currency(98765.43)) == 98765.43


def test_format_display_date():
    assert format_display_date(date(2024, 3, 9)) == "09/03/2024"
    assert format_display_date(datetime(2024, 12, 31, 23, 59)) == "31/12/2024"
    assert format_display_date("2024-01-05T10:00:00Z") == "05/01/2024"
