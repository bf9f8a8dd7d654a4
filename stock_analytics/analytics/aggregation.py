from collections import Counter
from datetime import datetime, timezone
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from stock_analytics import settings
from stock_analytics.schemas import (
    Item,
    ItemMetrics,
    Movement,
    MovementType,
    RecentMovement,
    StockStatus,
)
from stock_analytics.analytics.status import needs_reorder


def value_order_key(metrics: ItemMetrics):
    """Descending value, then ascending name, then id. Shared by rankings and ABC."""
    return (-metrics.total_value, metrics.name, metrics.item_id)


def category_label(category: Optional[str]) -> str:
    if category is None or not category.strip():
        return settings.UNCATEGORIZED_LABEL
    return category.strip()


def category_breakdown(metrics: Iterable[ItemMetrics]) -> dict[str, int]:
    """Counts items per category. Blank categories are grouped, never dropped."""
    counts = Counter(category_label(m.category) for m in metrics)
    return dict(sorted(counts.items()))


def status_breakdown(metrics: Iterable[ItemMetrics]) -> dict[StockStatus, int]:
    counts = Counter(m.status for m in metrics)
    return {status: counts.get(status, 0) for status in StockStatus}


def total_value(metrics: Iterable[ItemMetrics]) -> Decimal:
    return sum((m.total_value for m in metrics), Decimal("0"))


def low_stock_count(metrics: Iterable[ItemMetrics]) -> int:
    """Alert-eligible items: Low Stock and Out of Stock."""
    return sum(1 for m in metrics if needs_reorder(m.status))


def damaged_count(metrics: Iterable[ItemMetrics]) -> int:
    return sum(1 for m in metrics if m.status is StockStatus.DAMAGED)


def top_items_by_value(
    metrics: Sequence[ItemMetrics], top_n: Optional[int] = None
) -> list[ItemMetrics]:
    if top_n is None:
        top_n = settings.DEFAULT_TOP_N
    if top_n < 0:
        raise ValueError(f"top_n must be >= 0, got {top_n}")
    return sorted(metrics, key=value_order_key)[:top_n]


def movement_summary(movements: Iterable[Movement]) -> tuple[int, dict[MovementType, int]]:
    """Returns the number of movements and their count per movement type."""
    counts = Counter(m.type for m in movements)
    by_type = {movement_type: counts.get(movement_type, 0) for movement_type in MovementType}
    return sum(by_type.values()), by_type


def _as_aware(ts: datetime) -> datetime:
    # Exports may mix naive and offset timestamps; naive ones are UTC.
    return ts if ts.tzinfo is not None else ts.replace(tzinfo=timezone.utc)


def recent_movements(
    movements: Iterable[Movement],
    items: Iterable[Item],
    limit: Optional[int] = None,
) -> list[RecentMovement]:
    """
    The newest movements first (ties by movement id), each joined to the
    name of its item. Movements of items no longer present show as Unknown.
    """
    if limit is None:
        limit = settings.RECENT_MOVEMENTS_LIMIT
    if limit < 0:
        raise ValueError(f"limit must be >= 0, got {limit}")

    names = {item.id: item.name for item in items}
    ordered = sorted(movements, key=lambda m: m.id)
    ordered.sort(key=lambda m: _as_aware(m.timestamp), reverse=True)

    return [
        RecentMovement(
            movement_id=m.id,
            item_id=m.item_id,
            item_name=names.get(m.item_id, settings.UNKNOWN_ITEM_LABEL),
            type=m.type,
            quantity=m.quantity,
            performed_by=m.performed_by,
            notes=m.notes,
            timestamp=m.timestamp,
        )
        for m in ordered[:limit]
    ]
