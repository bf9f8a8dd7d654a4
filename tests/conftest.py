from datetime import datetime, timezone
from decimal import Decimal

import pytest

from stock_analytics.schemas import Item, Movement, MovementType


@pytest.fixture()
def make_item():
    counter = {"n": 0}

    def _make(
        quantity=10,
        unit_price="1",
        reorder_point=5,
        name=None,
        category="General",
        damaged=False,
        sku=None,
        item_id=None,
    ):
        counter["n"] += 1
        n = counter["n"]
        return Item(
            id=item_id or f"item-{n}",
            name=name or f"Item {n:02d}",
            sku=sku or f"SKU-{n:03d}",
            category=category,
            quantity=quantity,
            reorder_point=reorder_point,
            unit_price=Decimal(str(unit_price)),
            damaged=damaged,
        )

    return _make


@pytest.fixture()
def make_movement():
    counter = {"n": 0}

    def _make(item_id="item-1", type=MovementType.IN, quantity=1):
        counter["n"] += 1
        return Movement(
            id=f"mv-{counter['n']}",
            item_id=item_id,
            type=type,
            quantity=quantity,
            timestamp=datetime(2024, 1, 1, tzinfo=timezone.utc),
        )

    return _make


@pytest.fixture()
def scenario_items(make_item):
    """In stock, low stock and out of stock; total value 1050."""
    return [
        make_item(quantity=100, reorder_point=20, unit_price=10, name="Bolts"),
        make_item(quantity=5, reorder_point=20, unit_price=10, name="Nuts"),
        make_item(quantity=0, reorder_point=5, unit_price=50, name="Washers"),
    ]
