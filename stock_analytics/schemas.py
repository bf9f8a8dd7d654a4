from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from . import settings


class StockStatus(str, Enum):
    """Derived stock status. Values are the display strings the CRUD API uses."""

    IN_STOCK = "In Stock"
    LOW_STOCK = "Low Stock"
    OUT_OF_STOCK = "Out of Stock"
    DAMAGED = "Damaged"


class MovementType(str, Enum):
    IN = "IN"
    OUT = "OUT"
    DAMAGE = "DAMAGE"
    RETURN = "RETURN"


class AlertSeverity(str, Enum):
    CRITICAL = "critical"
    WARNING = "warning"


class AbcClass(str, Enum):
    A = "A"
    B = "B"
    C = "C"


def _identifier_to_str(value: Any) -> Any:
    # pandas turns numeric id columns with gaps into floats (7 -> 7.0).
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(int(value)) if float(value).is_integer() else str(value)
    return value


# --- Record Store models ---


class Item(BaseModel):
    """
    A single inventory item as supplied by the record store.
    Accepts the CRUD API's camelCase field names as well as the Python names.
    Quantity and unit price are not range-checked here: the valuation step
    reports negative values per record instead of rejecting the whole batch.
    """

    id: str = Field(..., alias="_id")
    name: str
    sku: str
    category: Optional[str] = None
    quantity: int
    reorder_point: int = Field(
        default=settings.DEFAULT_REORDER_POINT, ge=0, alias="reorderPoint"
    )
    unit_price: Decimal = Field(..., alias="unitPrice")
    location: str = settings.DEFAULT_LOCATION
    supplier: str = ""
    damaged: bool = False

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    @model_validator(mode="before")
    @classmethod
    def apply_status_override(cls, data: Any) -> Any:
        # A stored "Damaged" status is the only status the API sets by hand.
        if isinstance(data, dict) and data.get("status") == StockStatus.DAMAGED.value:
            data = {**data, "damaged": True}
        return data

    @field_validator("id", "sku", mode="before")
    @classmethod
    def coerce_identifier(cls, value: Any) -> Any:
        return _identifier_to_str(value)


class Movement(BaseModel):
    """An append-only stock movement (a "transaction" in the CRUD API)."""

    id: str = Field(..., alias="_id")
    # None when the referenced product no longer exists.
    item_id: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("productId", "product", "itemId", "item_id"),
        serialization_alias="productId",
    )
    type: MovementType
    quantity: int = Field(..., gt=0)
    performed_by: str = Field(default="Admin", alias="performedBy")
    notes: Optional[str] = None
    timestamp: datetime = Field(
        ...,
        validation_alias=AliasChoices("createdAt", "timestamp"),
        serialization_alias="createdAt",
    )

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    @field_validator("item_id", mode="before")
    @classmethod
    def unwrap_product(cls, value: Any) -> Any:
        # The API may return the referenced product populated.
        if isinstance(value, dict):
            value = value.get("_id", value.get("id"))
        return _identifier_to_str(value)

    @field_validator("id", mode="before")
    @classmethod
    def coerce_identifier(cls, value: Any) -> Any:
        return _identifier_to_str(value)


# --- Derived (analytics) models ---


class _Derived(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )


class ItemMetrics(_Derived):
    """Per-item side outputs attached to an item for list/table display."""

    item_id: str
    name: str
    sku: str
    category: Optional[str] = None
    quantity: int
    reorder_point: int
    unit_price: Decimal
    status: StockStatus
    total_value: Decimal


class StockAlert(_Derived):
    item_id: str
    item_name: str
    current_stock: int
    reorder_point: int
    severity: AlertSeverity


class AbcEntry(_Derived):
    rank: int = Field(..., ge=1)
    cumulative_percent: Decimal
    classification: AbcClass


class ItemDiagnostic(_Derived):
    item_id: str
    item_name: str
    reason: str


class RecentMovement(_Derived):
    """A movement joined to the name of the item it moved, for activity tables."""

    movement_id: str
    item_id: Optional[str] = None
    item_name: str
    type: MovementType
    quantity: int
    performed_by: str
    notes: Optional[str] = None
    timestamp: datetime


class AnalyticsSnapshot(_Derived):
    """
    One immutable, fully computed analytics result for a single pull of
    item/movement data. Serializes with camelCase keys.
    """

    total_item_count: int = 0
    total_inventory_value: Decimal = Decimal("0")
    low_stock_count: int = 0
    damaged_count: int = 0
    category_breakdown: dict[str, int] = Field(default_factory=dict)
    status_breakdown: dict[StockStatus, int] = Field(default_factory=dict)
    top_items_by_value: tuple[ItemMetrics, ...] = ()
    alerts: tuple[StockAlert, ...] = ()
    abc_classification: dict[str, AbcEntry] = Field(default_factory=dict)
    abc_class_counts: dict[AbcClass, int] = Field(default_factory=dict)
    movement_count: int = 0
    movements_by_type: dict[MovementType, int] = Field(default_factory=dict)
    recent_movements: tuple[RecentMovement, ...] = ()
    item_metrics: tuple[ItemMetrics, ...] = ()
    diagnostics: tuple[ItemDiagnostic, ...] = ()
    generated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
