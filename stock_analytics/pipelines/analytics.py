import logging
from typing import Any, Optional

from stock_analytics import data_handler, settings, utils
from stock_analytics.analytics.snapshot import compute_analytics
from stock_analytics.parsers import parse_items, parse_movements
from stock_analytics.pipeline import DataPipeline
from stock_analytics.schemas import AnalyticsSnapshot
from stock_analytics.sources import RawRecords, RecordSource

logger = logging.getLogger(__name__)


class AnalyticsPipeline(DataPipeline):
    def __init__(
        self,
        source: RecordSource,
        top_n: Optional[int] = None,
        test_mode: bool = False,
    ):
        super().__init__("analytics", test_mode=test_mode)
        self.source = source
        self.top_n = top_n

    def extract(self) -> Optional[tuple[RawRecords, RawRecords]]:
        logger.info(f"--- Pulling records from the record store ({self.source.name}) ---")
        raw = self.source.fetch()
        if raw is None:
            return None

        raw_items, raw_movements = raw
        self.status_summary["source"] = self.source.name
        self.status_summary["raw_items"] = len(raw_items)
        self.status_summary["raw_movements"] = len(raw_movements)
        logger.info(f"  > {len(raw_items)} item record(s), {len(raw_movements)} movement record(s)")
        return raw_items, raw_movements

    def transform(self, raw_data: tuple[RawRecords, RawRecords]) -> Optional[AnalyticsSnapshot]:
        raw_items, raw_movements = raw_data

        logger.info("\n--- Validating records against schema ---")
        items = parse_items(raw_items)
        movements = parse_movements(raw_movements)
        self.status_summary["rejected_items"] = len(raw_items) - len(items)
        self.status_summary["rejected_movements"] = len(raw_movements) - len(movements)

        logger.info("\n--- Computing analytics ---")
        snapshot = compute_analytics(items, movements, top_n=self.top_n)

        logger.info(f"  > Items analysed: {snapshot.total_item_count}")
        logger.info(f"  > Inventory value: {utils.format_currency(snapshot.total_inventory_value)}")
        logger.info(f"  > Reorder alerts: {len(snapshot.alerts)} | Damaged: {snapshot.damaged_count}")
        counts = ", ".join(f"{k.value}={v}" for k, v in snapshot.abc_class_counts.items())
        logger.info(f"  > ABC classes: {counts}")
        if snapshot.diagnostics:
            logger.warning(f"⚠️ {len(snapshot.diagnostics)} item(s) excluded from aggregates.")
        return snapshot

    def load(self, result: AnalyticsSnapshot) -> None:
        # 1. Save outputs (JSON snapshot, CSV item table)
        data_handler.save_outputs(result, settings.REPORT_FILENAME_BASE)

        # 2. Post to Webhook
        if not self.test_mode:
            metadata: dict[str, Any] = {
                **self.status_summary,
                "generatedAt": result.generated_at.isoformat(),
            }
            data_handler.post_to_webhook(result, metadata=metadata, report_type=self.report_type)
        else:
            logger.info("🧪 Test Mode: Skipping webhook post.")
