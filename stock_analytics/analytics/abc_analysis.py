from decimal import Decimal
from typing import Iterable, Optional, Sequence

from stock_analytics import settings
from stock_analytics.schemas import AbcClass, AbcEntry, ItemMetrics
from stock_analytics.analytics.aggregation import value_order_key

_ZERO = Decimal("0")
_HUNDRED = Decimal("100")


def _thresholds(a_threshold: Optional[int], b_threshold: Optional[int]) -> tuple[int, int]:
    if a_threshold is None:
        a_threshold = settings.ABC_A_THRESHOLD
    if b_threshold is None:
        b_threshold = settings.ABC_B_THRESHOLD
    return a_threshold, b_threshold


def abc_class_for(
    cumulative_percent: Decimal,
    a_threshold: Optional[int] = None,
    b_threshold: Optional[int] = None,
) -> AbcClass:
    a_threshold, b_threshold = _thresholds(a_threshold, b_threshold)
    # Upper bounds are inclusive: exactly 70 is A, exactly 90 is B.
    if cumulative_percent <= a_threshold:
        return AbcClass.A
    if cumulative_percent <= b_threshold:
        return AbcClass.B
    return AbcClass.C


def classify_abc(
    metrics: Sequence[ItemMetrics],
    a_threshold: Optional[int] = None,
    b_threshold: Optional[int] = None,
) -> dict[str, AbcEntry]:
    """
    Pareto (ABC) classification of items by their share of inventory value.

    Items are ranked by descending value (ties by name), a running share of
    the total value is accumulated, and each item is classed by the share
    reached once it is included. When the total value is zero every item is
    class C with a cumulative percent of 0.

    Returns a mapping of item id to its rank, cumulative percent and class,
    in rank order.
    """
    a_threshold, b_threshold = _thresholds(a_threshold, b_threshold)
    if not 0 < a_threshold <= b_threshold <= 100:
        raise ValueError(
            f"ABC thresholds must satisfy 0 < A <= B <= 100, got A={a_threshold}, B={b_threshold}"
        )

    ranked = sorted(metrics, key=value_order_key)
    total = sum((m.total_value for m in ranked), _ZERO)

    entries: dict[str, AbcEntry] = {}
    running = _ZERO
    for rank, m in enumerate(ranked, start=1):
        if total == 0:
            cumulative_percent = _ZERO
            classification = AbcClass.C
        else:
            running += m.total_value
            cumulative_percent = running * _HUNDRED / total
            classification = abc_class_for(cumulative_percent, a_threshold, b_threshold)
        entries[m.item_id] = AbcEntry(
            rank=rank,
            cumulative_percent=cumulative_percent,
            classification=classification,
        )
    return entries


def abc_class_counts(entries: Iterable[AbcEntry]) -> dict[AbcClass, int]:
    counts = {abc_class: 0 for abc_class in AbcClass}
    for entry in entries:
        counts[entry.classification] += 1
    return counts
