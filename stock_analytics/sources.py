import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Optional

import requests

from . import settings
from .utils import load_table
from .parsers import records_from_frame

logger = logging.getLogger(__name__)

RawRecords = list[dict[str, Any]]


class RecordSource(ABC):
    """
    Read-only access to the record store. A source is asked once per run
    for the current items and movements.
    """

    name = "source"

    @abstractmethod
    def fetch(self) -> Optional[tuple[RawRecords, RawRecords]]:
        """Returns (raw item records, raw movement records), or None if unavailable."""


class FileRecordSource(RecordSource):
    """Reads CSV or JSON exports of the products and transactions collections."""

    name = "files"

    def __init__(self, items_path: Path, movements_path: Optional[Path] = None):
        self.items_path = Path(items_path)
        self.movements_path = Path(movements_path) if movements_path else None

    def fetch(self) -> Optional[tuple[RawRecords, RawRecords]]:
        logger.info(f"  > Reading items from: {self.items_path.name}")
        items_df = load_table(self.items_path)
        if items_df is None:
            return None

        movements: RawRecords = []
        if self.movements_path is not None:
            logger.info(f"  > Reading movements from: {self.movements_path.name}")
            movements_df = load_table(self.movements_path)
            if movements_df is None:
                logger.info("  > INFO: Movements export unavailable. Continuing without it.")
            else:
                movements = records_from_frame(movements_df)

        return records_from_frame(items_df), movements


class ApiRecordSource(RecordSource):
    """Pulls products and transactions from the inventory CRUD API."""

    name = "api"

    def __init__(self, base_url: str, timeout: int = settings.API_TIMEOUT):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _get(self, path: str) -> RawRecords:
        logger.debug(f"GET {self.base_url}{path}")
        response = requests.get(f"{self.base_url}{path}", timeout=self.timeout)
        response.raise_for_status()
        payload = response.json()
        if not isinstance(payload, list):
            raise ValueError(f"Expected a list from {path}, got {type(payload).__name__}")
        return payload

    def fetch(self) -> Optional[tuple[RawRecords, RawRecords]]:
        logger.info(f"  > Fetching records from: {self.base_url}")
        try:
            items = self._get("/products")
            movements = self._get("/transactions")
        except (requests.exceptions.RequestException, ValueError) as e:
            logger.error(f"❌ Error fetching records from API: {e}")
            return None
        return items, movements
