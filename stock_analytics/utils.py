import logging
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from pathlib import Path
from typing import Union

import pandas as pd

from . import settings

logger = logging.getLogger(__name__)


def get_date_suffix_for_filename() -> str:
    """Returns the current date as a YYYY-MM-DD string for filenames."""
    return datetime.now().strftime("%Y-%m-%d")


def format_currency(
    value: Union[Decimal, int, float],
    symbol: str = settings.CURRENCY_SYMBOL,
    digits: int = 2,
) -> str:
    """
    Renders a money value for people, e.g. 1050 -> '₹1,050.00'.
    Only for output; the analytics themselves keep raw Decimals.
    """
    amount = Decimal(str(value))
    quantum = Decimal(1).scaleb(-digits)
    rounded = amount.quantize(quantum, rounding=ROUND_HALF_UP)
    sign = "-" if rounded < 0 else ""
    return f"{sign}{symbol}{abs(rounded):,.{digits}f}"


def load_table(file_path: Path) -> pd.DataFrame | None:
    """
    Loads a record export (.csv or .json) into a DataFrame.
    CSV files are read as UTF-8 (BOM tolerant) with a latin-1 fallback.
    Returns None when the file is missing or unreadable.
    """
    if not file_path.exists():
        logger.error(f"❌ Export not found at {file_path}.")
        return None

    try:
        if file_path.suffix.lower() == ".json":
            return pd.read_json(file_path, orient="records", dtype=False)
        # Identifiers and SKUs stay text; numeric columns are parsed by the schemas.
        return pd.read_csv(
            file_path, encoding="utf-8-sig", dtype=str, keep_default_na=False
        )

    except UnicodeDecodeError:
        logger.info(f"INFO: UTF-8 decoding failed for {file_path.name}. Retrying with 'latin-1'.")
        try:
            return pd.read_csv(file_path, encoding="latin-1", dtype=str, keep_default_na=False)
        except (ValueError, OSError) as e_latin1:
            logger.error(f"❌ Could not read {file_path.name} even with latin-1. Reason: {e_latin1}")
            return None

    except (ValueError, OSError) as e_general:
        logger.error(f"❌ Could not read {file_path.name}. Reason: {e_general}")
        return None
