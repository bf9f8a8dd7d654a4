from decimal import Decimal
from typing import Iterable

from stock_analytics.errors import InvalidValueError
from stock_analytics.schemas import Item


def item_total_value(item: Item) -> Decimal:
    """
    Returns quantity x unit price at full Decimal precision.
    Raises InvalidValueError instead of clamping negative inputs.
    """
    if item.quantity < 0:
        raise InvalidValueError(item.id, f"negative quantity ({item.quantity})")
    if item.unit_price < 0:
        raise InvalidValueError(item.id, f"negative unit price ({item.unit_price})")
    return item.quantity * item.unit_price


def inventory_value(items: Iterable[Item]) -> Decimal:
    """Sums the total value of every item. Propagates InvalidValueError."""
    return sum((item_total_value(item) for item in items), Decimal("0"))
