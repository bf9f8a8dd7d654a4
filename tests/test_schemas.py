from decimal import Decimal

import pandas as pd
import pytest
from pydantic import ValidationError

from stock_analytics.parsers import parse_items, parse_movements, records_from_frame
from stock_analytics.schemas import Item, Movement, MovementType

API_PRODUCT = {
    "_id": "65a1f0",
    "name": "Steel Bolt M8",
    "sku": "BLT-M8",
    "category": "Fasteners",
    "quantity": 120,
    "reorderPoint": 25,
    "unitPrice": 4.5,
    "location": "Aisle 3",
    "supplier": "Acme",
    "status": "In Stock",
}


def test_item_from_api_shape():
    item = Item.model_validate(API_PRODUCT)
    assert item.id == "65a1f0"
    assert item.reorder_point == 25
    assert item.unit_price == Decimal("4.5")
    assert item.damaged is False


def test_damaged_status_sets_flag():
    item = Item.model_validate({**API_PRODUCT, "status": "Damaged"})
    assert item.damaged is True


def test_item_defaults():
    item = Item.model_validate(
        {"_id": 7, "name": "Tape", "sku": 1001, "quantity": 3, "unitPrice": "2"}
    )
    assert item.id == "7"
    assert item.sku == "1001"
    assert item.reorder_point == 10
    assert item.location == "Main Warehouse"
    assert item.category is None


def test_negative_reorder_point_rejected():
    with pytest.raises(ValidationError):
        Item.model_validate({**API_PRODUCT, "reorderPoint": -1})


def test_movement_with_populated_product():
    movement = Movement.model_validate(
        {
            "_id": "t1",
            "productId": {"_id": "65a1f0", "name": "Steel Bolt M8"},
            "type": "DAMAGE",
            "quantity": 2,
            "performedBy": "Priya",
            "createdAt": "2024-05-01T10:00:00Z",
        }
    )
    assert movement.item_id == "65a1f0"
    assert movement.type is MovementType.DAMAGE
    assert movement.performed_by == "Priya"
    assert movement.notes is None


def test_movement_requires_positive_quantity():
    with pytest.raises(ValidationError):
        Movement.model_validate(
            {"_id": "t2", "productId": "p", "type": "IN", "quantity": 0, "createdAt": "2024-05-01T00:00:00"}
        )


def test_movement_rejects_unknown_type():
    with pytest.raises(ValidationError):
        Movement.model_validate(
            {"_id": "t3", "productId": "p", "type": "LOST", "quantity": 1, "createdAt": "2024-05-01T00:00:00"}
        )


def test_movements_are_immutable():
    movement = Movement.model_validate(
        {"_id": "t4", "productId": "p", "type": "IN", "quantity": 1, "createdAt": "2024-05-01T00:00:00"}
    )
    with pytest.raises(ValidationError):
        movement.quantity = 5


def test_parse_items_skips_bad_records():
    records = [API_PRODUCT, {"_id": "x", "name": "No price", "sku": "NP", "quantity": 1}]
    items = parse_items(records)
    assert [i.id for i in items] == ["65a1f0"]


def test_parse_movements_skips_bad_records():
    records = [
        {"_id": "t1", "productId": "p", "type": "OUT", "quantity": 1, "createdAt": "2024-05-01T00:00:00"},
        {"_id": "t2", "productId": "p", "type": "OUT", "quantity": -1, "createdAt": "2024-05-01T00:00:00"},
    ]
    assert [m.id for m in parse_movements(records)] == ["t1"]


def test_records_from_frame_drops_empty_cells():
    df = pd.DataFrame(
        [{"_id": "1", "name": "Glue", "category": "", "notes": None, "quantity": float("nan")}]
    )
    assert records_from_frame(df) == [{"_id": "1", "name": "Glue"}]
    assert records_from_frame(None) == []


def test_parse_movements_reads_api_product_reference():
    records = [
        {
            "_id": "t1",
            "productId": {"_id": "p1", "name": "Bolt"},
            "type": "IN",
            "quantity": 3,
            "createdAt": "2024-05-01T09:00:00Z",
        },
        {"_id": "t2", "productId": "p2", "type": "OUT", "quantity": 1, "createdAt": "2024-05-02T09:00:00Z"},
    ]
    movements = parse_movements(records)
    assert [m.item_id for m in movements] == ["p1", "p2"]
    assert movements[0].model_dump(by_alias=True)["productId"] == "p1"


def test_legacy_product_key_still_accepted():
    movement = Movement.model_validate(
        {"_id": "t9", "product": "p9", "type": "RETURN", "quantity": 1, "createdAt": "2024-05-01T00:00:00"}
    )
    assert movement.item_id == "p9"


def test_float_identifiers_from_pandas_are_normalised():
    movement = Movement.model_validate(
        {"_id": 12.0, "productId": 7.0, "type": "IN", "quantity": 1, "createdAt": "2024-05-01T00:00:00"}
    )
    assert movement.id == "12"
    assert movement.item_id == "7"

    populated = Movement.model_validate(
        {"_id": 13, "productId": {"_id": 8.0}, "type": "IN", "quantity": 1, "createdAt": "2024-05-01T00:00:00"}
    )
    assert populated.item_id == "8"


def test_movement_of_deleted_product_has_no_item():
    movement = Movement.model_validate(
        {"_id": "t5", "productId": None, "type": "OUT", "quantity": 1, "createdAt": "2024-05-01T00:00:00"}
    )
    assert movement.item_id is None
