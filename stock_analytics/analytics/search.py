from typing import Iterable, Optional, Union

from stock_analytics.schemas import ItemMetrics, StockStatus


def parse_status(value: Union[StockStatus, str]) -> StockStatus:
    """
    Accepts a StockStatus, its display value ("Low Stock"),
    or the slug used by the products page filter ("low-stock").
    """
    if isinstance(value, StockStatus):
        return value
    normalized = value.strip().lower()
    for status in StockStatus:
        if normalized in (status.value.lower(), status.value.lower().replace(" ", "-")):
            return status
    raise ValueError(f"Unknown stock status: {value!r}")


def matches_term(metrics: ItemMetrics, term: str) -> bool:
    needle = term.strip().lower()
    if not needle:
        return True
    haystack = (metrics.name, metrics.sku, metrics.category or "")
    return any(needle in field.lower() for field in haystack)


def search_items(
    metrics: Iterable[ItemMetrics],
    term: str = "",
    status: Optional[Union[StockStatus, str]] = None,
) -> list[ItemMetrics]:
    """Filters items by a case-insensitive name/SKU/category term and an optional status."""
    wanted = parse_status(status) if status is not None else None
    return [
        m
        for m in metrics
        if matches_term(m, term) and (wanted is None or m.status is wanted)
    ]
