from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Union

RUPEE = "₹"


def _group_lakhs(digits: str) -> str:
    # Indian grouping: last three digits, then pairs (12,34,567)
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    pairs = []
    while len(head) > 2:
        pairs.insert(0, head[-2:])
        head = head[:-2]
    if head:
        pairs.insert(0, head)
    return ",".join(pairs + [tail])


def format_indian_currency(amount: Optional[Union[Decimal, int, float, str]]) -> str:
    """Rupee amount with lakh/crore grouping, e.g. ``₹ 1,50,000.00``."""
    if amount is None:
        amount = Decimal(0)
    amount = Decimal(str(amount)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if amount < 0 else ""
    integer_part, decimal_part = f"{abs(amount):.2f}".split(".")
    return f"{sign}{RUPEE} {_group_lakhs(integer_part)}.{decimal_part}"
