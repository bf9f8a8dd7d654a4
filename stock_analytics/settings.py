import os
from pathlib import Path
from dotenv import load_dotenv

# --- Base Directory ---
BASE_DIR = Path(__file__).resolve().parent.parent

# --- Load Environment Variables ---
load_dotenv(BASE_DIR / ".env")


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


# --- Path Configuration ---
INPUT_DIR = BASE_DIR / os.getenv("INPUT_DIR", "input")
OUTPUT_DIR = BASE_DIR / os.getenv("OUTPUT_DIR", "output")
LOG_DIR = BASE_DIR / os.getenv("LOG_DIR", "logs")

# --- Record Store Exports ---
ITEMS_FILENAME = os.getenv("ITEMS_FILENAME", "products.csv")
MOVEMENTS_FILENAME = os.getenv("MOVEMENTS_FILENAME", "transactions.csv")

# --- Inventory API ---
INVENTORY_API_URL = os.getenv("INVENTORY_API_URL")
API_TIMEOUT = int(os.getenv("API_TIMEOUT", "15"))

# --- Outputs ---
REPORT_FILENAME_BASE = os.getenv("REPORT_FILENAME", "inventory_analytics")
SAVE_CSV_OUTPUT = _env_bool("SAVE_CSV_OUTPUT", True)

# --- Webhook ---
WEBHOOK_URL = os.getenv("WEBHOOK_URL")

# --- Shared Business Logic ---
DEFAULT_TOP_N = int(os.getenv("DEFAULT_TOP_N", "10"))
RECENT_MOVEMENTS_LIMIT = int(os.getenv("RECENT_MOVEMENTS_LIMIT", "20"))
UNKNOWN_ITEM_LABEL = "Unknown"

# Cumulative value percentages closing the A and B classes (inclusive).
ABC_A_THRESHOLD = int(os.getenv("ABC_A_THRESHOLD", "70"))
ABC_B_THRESHOLD = int(os.getenv("ABC_B_THRESHOLD", "90"))

UNCATEGORIZED_LABEL = os.getenv("UNCATEGORIZED_LABEL", "Uncategorized")
DEFAULT_LOCATION = "Main Warehouse"
DEFAULT_REORDER_POINT = 10

# --- Presentation ---
CURRENCY_SYMBOL = os.getenv("CURRENCY_SYMBOL", "₹")
