import logging
import warnings
from typing import Iterable, Optional

from stock_analytics.errors import EmptyCollectionWarning, InvalidValueError
from stock_analytics.schemas import (
    AnalyticsSnapshot,
    Item,
    ItemDiagnostic,
    ItemMetrics,
    Movement,
)
from stock_analytics.analytics import aggregation
from stock_analytics.analytics.abc_analysis import abc_class_counts, classify_abc
from stock_analytics.analytics.alerts import generate_alerts
from stock_analytics.analytics.status import classify_status
from stock_analytics.analytics.valuation import item_total_value

logger = logging.getLogger(__name__)


def item_metrics(item: Item) -> ItemMetrics:
    """Status and total value of one item. Raises InvalidValueError for negative inputs."""
    return ItemMetrics(
        item_id=item.id,
        name=item.name,
        sku=item.sku,
        category=item.category,
        quantity=item.quantity,
        reorder_point=item.reorder_point,
        unit_price=item.unit_price,
        status=classify_status(item),
        total_value=item_total_value(item),
    )


def annotate_items(
    items: Iterable[Item],
) -> tuple[list[ItemMetrics], list[ItemDiagnostic]]:
    """
    Computes the per-item side outputs once. Items that fail valuation are
    kept out of the metrics and reported as diagnostics instead.
    """
    metrics: list[ItemMetrics] = []
    diagnostics: list[ItemDiagnostic] = []
    for item in items:
        try:
            metrics.append(item_metrics(item))
        except InvalidValueError as e:
            logger.warning(f"⚠️ Excluding item '{item.name}' from analytics: {e.reason}")
            diagnostics.append(
                ItemDiagnostic(item_id=item.id, item_name=item.name, reason=e.reason)
            )
    return metrics, diagnostics


def compute_analytics(
    items: Iterable[Item],
    movements: Iterable[Movement],
    top_n: Optional[int] = None,
    recent_limit: Optional[int] = None,
) -> AnalyticsSnapshot:
    """
    Builds one analytics snapshot from a point-in-time copy of the items and
    movements. Item values are computed once and shared by the alert,
    aggregate and ABC steps. Never raises for bad individual records.
    """
    items = tuple(items)
    movements = tuple(movements)

    if not items:
        warnings.warn(
            "No items supplied; returning an all-zero snapshot.",
            EmptyCollectionWarning,
            stacklevel=2,
        )
        logger.warning("⚠️ No items supplied; analytics snapshot will be empty.")

    metrics, diagnostics = annotate_items(items)
    abc_entries = classify_abc(metrics)
    movement_count, movements_by_type = aggregation.movement_summary(movements)
    recent = aggregation.recent_movements(movements, items, recent_limit)

    return AnalyticsSnapshot(
        total_item_count=len(metrics),
        total_inventory_value=aggregation.total_value(metrics),
        low_stock_count=aggregation.low_stock_count(metrics),
        damaged_count=aggregation.damaged_count(metrics),
        category_breakdown=aggregation.category_breakdown(metrics),
        status_breakdown=aggregation.status_breakdown(metrics),
        top_items_by_value=tuple(aggregation.top_items_by_value(metrics, top_n)),
        alerts=tuple(generate_alerts(metrics)),
        abc_classification=abc_entries,
        abc_class_counts=abc_class_counts(abc_entries.values()),
        movement_count=movement_count,
        movements_by_type=movements_by_type,
        recent_movements=tuple(recent),
        item_metrics=tuple(metrics),
        diagnostics=tuple(diagnostics),
    )
