from typing import Iterable

from stock_analytics.schemas import AlertSeverity, ItemMetrics, StockAlert, StockStatus
from stock_analytics.analytics.status import needs_reorder

_SEVERITY_ORDER = {AlertSeverity.CRITICAL: 0, AlertSeverity.WARNING: 1}


def alert_severity(metrics: ItemMetrics) -> AlertSeverity:
    if metrics.status is StockStatus.OUT_OF_STOCK:
        return AlertSeverity.CRITICAL
    return AlertSeverity.WARNING


def generate_alerts(metrics: Iterable[ItemMetrics]) -> list[StockAlert]:
    """
    Emits one reorder alert per Low Stock / Out of Stock item,
    critical first, then by item name.
    Damaged items are reported through the damaged count, not here.
    """
    alerts = [
        StockAlert(
            item_id=m.item_id,
            item_name=m.name,
            current_stock=m.quantity,
            reorder_point=m.reorder_point,
            severity=alert_severity(m),
        )
        for m in metrics
        if needs_reorder(m.status)
    ]
    alerts.sort(key=lambda a: (_SEVERITY_ORDER[a.severity], a.item_name, a.item_id))
    return alerts
