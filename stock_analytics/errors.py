class StockAnalyticsError(Exception):
    """Base class for errors raised by the analytics core."""


class InvalidValueError(StockAnalyticsError, ValueError):
    """An item carries a negative quantity or unit price."""

    def __init__(self, item_id: str, reason: str):
        self.item_id = item_id
        self.reason = reason
        super().__init__(f"Item '{item_id}': {reason}")


class EmptyCollectionWarning(UserWarning):
    """No items were supplied; the snapshot is all zeros."""
