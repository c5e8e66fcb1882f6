from decimal import Decimal

import pytest

from utils.formatting import format_indian_currency


@pytest.mark.parametrize("amount, expected", [
    (Decimal("15000"), "₹ 15,000.00"),
    (Decimal("150000.5"), "₹ 1,50,000.50"),
    (12345678, "₹ 1,23,45,678.00"),
    ("999", "₹ 999.00"),
    (None, "₹ 0.00"),
    (Decimal("-2500"), "-₹ 2,500.00"),
])
def test_format_indian_currency(amount, expected):
    assert format_indian_currency(amount) == expected
