import json
import logging
from pathlib import Path
from typing import Any, Optional

import pandas as pd
import requests

from . import settings
from . import utils
from .schemas import AnalyticsSnapshot

logger = logging.getLogger(__name__)


def item_table(snapshot: AnalyticsSnapshot) -> pd.DataFrame:
    """Flattens the per-item metrics and ABC classes into a display table."""
    rows = []
    for m in snapshot.item_metrics:
        abc = snapshot.abc_classification.get(m.item_id)
        rows.append(
            {
                "Rank": abc.rank if abc else None,
                "ID": m.item_id,
                "Name": m.name,
                "SKU": m.sku,
                "Category": m.category or settings.UNCATEGORIZED_LABEL,
                "Quantity": m.quantity,
                "Reorder Point": m.reorder_point,
                "Unit Price": utils.format_currency(m.unit_price),
                "Total Value": utils.format_currency(m.total_value),
                "Status": m.status.value,
                "Class": abc.classification.value if abc else None,
                "Cumulative %": f"{abc.cumulative_percent:.2f}" if abc else None,
            }
        )

    df = pd.DataFrame(rows)
    if not df.empty:
        df = df.sort_values("Rank").reset_index(drop=True)
    return df


def save_outputs(
    snapshot: AnalyticsSnapshot, report_name: str, output_dir: Optional[Path] = None
) -> dict[str, Path]:
    """Saves the snapshot to JSON and, if enabled, the item table to CSV, with dated filenames."""
    output_dir = output_dir or settings.OUTPUT_DIR
    output_dir.mkdir(parents=True, exist_ok=True)
    date_suffix = utils.get_date_suffix_for_filename()
    written: dict[str, Path] = {}

    json_path = output_dir / f"{report_name}_{date_suffix}.json"
    with open(json_path, "w", encoding="utf-8") as f:
        json.dump(snapshot.model_dump(mode="json", by_alias=True), f, indent=2, ensure_ascii=False)
    logger.info(f"✅ Analytics snapshot saved to: {json_path}")
    written["json"] = json_path

    if settings.SAVE_CSV_OUTPUT:
        csv_path = output_dir / f"{report_name}_items_{date_suffix}.csv"
        item_table(snapshot).to_csv(csv_path, index=False)
        logger.info(f"✅ Item table saved to: {csv_path}")
        written["csv"] = csv_path
    else:
        logger.info("INFO: Skipping CSV item table as per configuration.")

    return written


def post_to_webhook(
    snapshot: AnalyticsSnapshot,
    metadata: Optional[dict[str, Any]] = None,
    report_type: str = "analytics",
) -> bool:
    """
    Posts the snapshot and run metadata to the webhook.
    Failures are logged and reported through the return value.
    """
    if not settings.WEBHOOK_URL:
        logger.warning("⚠️ WEBHOOK_URL not set. Skipping webhook post.")
        return False

    logger.info(f"🚀 Posting {report_type} snapshot to webhook: {settings.WEBHOOK_URL}")

    payload = {
        "reportType": report_type,
        "reportData": snapshot.model_dump(mode="json", by_alias=True),
        "metadata": metadata or {},
    }

    try:
        response = requests.post(settings.WEBHOOK_URL, json=payload, timeout=15)
        response.raise_for_status()
        logger.info("✅ Snapshot successfully posted to webhook.")
        return True
    except requests.exceptions.RequestException as e:
        logger.error(f"❌ Error posting to webhook: {e}")
        return False
