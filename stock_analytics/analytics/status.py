from stock_analytics.schemas import Item, StockStatus

# Statuses that mean the item needs restocking.
REORDER_STATUSES = frozenset({StockStatus.LOW_STOCK, StockStatus.OUT_OF_STOCK})


def classify_status(item: Item) -> StockStatus:
    """
    Derives the stock status of an item. Precedence:
    damaged flag, then empty stock, then at/below the reorder point.
    """
    if item.damaged:
        return StockStatus.DAMAGED
    if item.quantity == 0:
        return StockStatus.OUT_OF_STOCK
    if item.quantity <= item.reorder_point:
        return StockStatus.LOW_STOCK
    return StockStatus.IN_STOCK


def needs_reorder(status: StockStatus) -> bool:
    return status in REORDER_STATUSES
