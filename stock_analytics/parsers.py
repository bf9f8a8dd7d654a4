import logging
from typing import Any, Iterable, Type, TypeVar

import pandas as pd
from pydantic import BaseModel, ValidationError

from .schemas import Item, Movement

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return bool(pd.api.types.is_scalar(value) and pd.isna(value))


def _clean_record(record: dict) -> dict[str, Any]:
    """Drops empty cells so model defaults apply instead of NaN/blank strings."""
    return {str(k): v for k, v in record.items() if not _is_missing(v)}


def records_from_frame(df: pd.DataFrame | None) -> list[dict[str, Any]]:
    if df is None or df.empty:
        return []
    return [_clean_record(rec) for rec in df.to_dict("records")]


def _parse_records(
    records: Iterable[dict], model: Type[ModelT], label: str
) -> list[ModelT]:
    """
    Validates raw records one by one. A bad record is logged and skipped so
    a single malformed row never discards the rest of the export.
    """
    parsed: list[ModelT] = []
    skipped = 0
    for index, record in enumerate(records):
        try:
            parsed.append(model.model_validate(record))
        except ValidationError as e:
            skipped += 1
            logger.error(f"❌ Skipping {label} record #{index}: {e.error_count()} validation error(s).")
            logger.error(e)

    if skipped:
        logger.warning(f"⚠️ {skipped} {label} record(s) failed validation.")
    logger.info(f"✅ Parsed {len(parsed)} {label} record(s).")
    return parsed


def parse_items(records: Iterable[dict]) -> list[Item]:
    return _parse_records(records, Item, "item")


def parse_movements(records: Iterable[dict]) -> list[Movement]:
    return _parse_records(records, Movement, "movement")
