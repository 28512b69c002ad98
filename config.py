"""
Run configuration for the vendor order generator.

Defaults live here as module-level constants. A .env file (or the process
environment) can override the handful of values an operator actually
changes between runs: buffer %, farm name, sheet names, output directory.
"""

import math
import os

from dotenv import load_dotenv

load_dotenv()

# ── Buffer ────────────────────────────────────────────────────────
DEFAULT_BUFFER_PERCENT = 12.0

# ── Orders sheet layout (0-based columns) ─────────────────────────
PRODUCT_COLUMN_INDEX = 2
QUANTITY_COLUMN_INDEX = 3

# Footer / summary rows in the orders sheet, not products
SKIP_KEYWORDS = ["order value", "total value", "total"]

# ── Fuzzy matching ────────────────────────────────────────────────
SUBSTRING_WEIGHT = 0.30
JACCARD_WEIGHT = 0.30
LEVENSHTEIN_WEIGHT = 0.20
INITIALS_WEIGHT = 0.20
MIN_FUZZY_SCORE = 0.30
MIN_TOKEN_LEN = 3            # tokens shorter than this are ignored
SUGGESTION_MIN_SCORE = 60    # thefuzz 0-100 scale, advisory only

# ── Sheets & output ───────────────────────────────────────────────
ORDERS_SHEET = os.environ.get("ORDERS_SHEET", "Orders List")
MAPPING_SHEET = os.environ.get("MAPPING_SHEET", "Sheet1")
SALAD_SHEET = os.environ.get("SALAD_SHEET", "Sheet1")
OUTPUT_DIR = os.environ.get("OUTPUT_DIR", "output")

FARM_NAME = os.environ.get("FARM_NAME", "Arkoun Farms")


def parse_buffer_percent(raw) -> float:
    """
    Interpret a buffer value the way operators type it.

    "12", 12, "12%" -> 12.0. A fraction in (0, 1) is a percent-formatted
    cell (0.12 -> 12.0). Empty, non-numeric or infinite values fall back
    to the default.
    """
    if raw is None or isinstance(raw, bool):
        return DEFAULT_BUFFER_PERCENT

    text = str(raw).strip().rstrip("%").strip()
    if not text:
        return DEFAULT_BUFFER_PERCENT

    try:
        value = float(text)
    except ValueError:
        return DEFAULT_BUFFER_PERCENT

    if not math.isfinite(value):
        return DEFAULT_BUFFER_PERCENT
    if 0 < value < 1:
        value = round(value * 100, 6)
    return value


def default_buffer_percent() -> float:
    """Buffer % from VENDOR_BUFFER_PERCENT, or the built-in default."""
    return parse_buffer_percent(os.environ.get("VENDOR_BUFFER_PERCENT"))
