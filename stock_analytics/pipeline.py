import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

logger = logging.getLogger(__name__)


class DataPipeline(ABC):
    """
    Abstract base class for reporting pipelines.
    Follows an Extract -> Transform -> Load (ETL) pattern.
    """

    def __init__(self, report_type: str, test_mode: bool = False):
        self.report_type = report_type
        self.test_mode = test_mode
        # Run metadata shared with the load step (record counts, source name, ...)
        self.status_summary: dict[str, Any] = {}

    def run(self) -> Optional[Any]:
        """
        Orchestrates the pipeline execution. Returns the transformed result,
        or None if extraction or transformation failed.
        """
        logger.info(f"🚀 STEP: {self.report_type.upper()} REPORT")
        logger.info("-" * 30)

        # --- 1. EXTRACT ---
        raw_data = self.extract()
        if raw_data is None:
            logger.error(f"❌ No data extracted for {self.report_type}. Nothing to report.")
            return None

        # --- 2. TRANSFORM ---
        result = self.transform(raw_data)
        if result is None:
            logger.error(f"❌ Transformation failed for {self.report_type}.")
            return None

        # --- 3. LOAD ---
        self.load(result)

        logger.info(f"✅ {self.report_type.capitalize()} Pipeline Finished.\n")
        logger.info("=" * 60)
        return result

    @abstractmethod
    def extract(self) -> Optional[Any]:
        """
        Pulls the raw records from the source.
        Should also populate self.status_summary as it goes.
        """

    @abstractmethod
    def transform(self, raw_data: Any) -> Optional[Any]:
        """Validates the raw records and computes the report."""

    @abstractmethod
    def load(self, result: Any) -> None:
        """Saves the report and delivers it downstream."""
