"""
Quantity parsing and display.

Two quantity systems live side by side in the sheets:
  - weight products, measured in grams ("500 gms", "1 kg", "(per 250g)")
  - unit products, counted in packs ("6 pcs", "1 bunch", "one head")

Weights are carried as grams (float) internally and only turned into
"gms"/"kg" strings at display time.
"""

import math
import re

_NAME_GRAM_PATTERNS = [
    re.compile(r"\(.*?\bper\s+(\d{1,4}(?:\.\d+)?)\s*g(?:rams|ms)?\b.*?\)", re.IGNORECASE),
    re.compile(r"\(\s*(\d{1,4}(?:\.\d+)?)\s*g(?:rams|ms)?\s*\)", re.IGNORECASE),
    re.compile(r"\b(\d{1,4}(?:\.\d+)?)\s*g(?:rams|ms)?\b", re.IGNORECASE),
]
_NAME_KG_RE = re.compile(r"\b(\d+(?:\.\d+)?)\s*kg\b", re.IGNORECASE)

UNIT_WORD_RE = re.compile(r"(unit|units|pcs?|pieces?|piece|bunch(?:es)?|head(?:s)?|pack|packs)", re.IGNORECASE)
WEIGHT_WORD_RE = re.compile(r"(g\b|gms|gram|kg)", re.IGNORECASE)
_GRAM_WORD_RE = re.compile(r"g\b|gms|gram", re.IGNORECASE)
_NUMBER_RE = re.compile(r"(\d+(?:\.\d+)?)")

_PLACEHOLDERS = ("—", "-")

WORD_NUMBERS = {
    "one": 1, "two": 2, "three": 3, "four": 4, "five": 5,
    "six": 6, "seven": 7, "eight": 8, "nine": 9, "ten": 10,
}
_LEADING_WORD_NUMBER_RE = re.compile(r"^(" + "|".join(WORD_NUMBERS) + r")\b", re.IGNORECASE)
_PATTERN_QTY_RE = re.compile(r"(\d+(?:\.\d+)?)\s*([A-Za-z].*)")


def fmt_number(value) -> str:
    """3.0 -> "3", 2.5 -> "2.5". Sheets mix ints and floats freely."""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return f"{value:.10g}"


def parse_grams_from_name(name) -> float | None:
    """
    Per-unit weight embedded in a product name, in grams.

    Tried in order: "(... per 250 g ...)", "(250g)", bare "250 gms",
    bare "1.5 kg". Returns None when the name carries no weight.
    """
    if not name:
        return None
    s = str(name)

    for pattern in _NAME_GRAM_PATTERNS:
        m = pattern.search(s)
        if m:
            return float(m.group(1))

    m = _NAME_KG_RE.search(s)
    if m:
        return float(m.group(1)) * 1000

    return None


def is_unit_pattern(cell) -> bool:
    """True for count-only cells like "6 pcs" or "one bunch"."""
    s = str(cell or "").lower()
    return bool(UNIT_WORD_RE.search(s)) and not WEIGHT_WORD_RE.search(s)


def parse_qty_cell_to_grams(cell) -> float | None:
    """
    Grams described by a reference "Quantity / Units" cell.

    Returns None for blanks and placeholders, for unit-only cells
    ("6 pcs": the product is counted, not weighed), and for bare numbers
    with no unit at all.
    """
    if cell is None or cell == "":
        return None
    s = str(cell).lower().strip()
    if not s or s in _PLACEHOLDERS:
        return None

    if is_unit_pattern(s):
        return None

    m = _NUMBER_RE.search(s)
    if not m:
        return None
    first = float(m.group(1))

    if "kg" in s:
        return first * 1000
    if _GRAM_WORD_RE.search(s):
        return first
    return None


def parse_order_quantity(cell) -> float:
    """
    Ordered unit count from an orders-sheet cell; 0 when unusable.

    Keeps digits and dots only, so "3 nos" -> 3 and "2.5" -> 2.5.
    """
    if cell is None or isinstance(cell, bool):
        return 0
    if isinstance(cell, (int, float)):
        return cell if cell > 0 else 0

    digits = re.sub(r"[^0-9.]", "", str(cell))
    if not digits:
        return 0
    try:
        value = float(digits)
    except ValueError:
        return 0
    return value if value > 0 else 0


def fmt_weight(grams) -> str:
    """
    Grams -> display string.

    0 -> "0 gms", 999 -> "999 gms", 1000 -> "1 kg", 1120 -> "1.12 kg".
    """
    n = float(grams or 0)
    if n == 0:
        return "0 gms"

    if n < 1000:
        return f"{math.floor(n + 0.5)} gms"

    kg = n / 1000
    if kg.is_integer():
        return f"{int(kg)} kg"
    return f"{kg:.2f}".rstrip("0").rstrip(".") + " kg"


def make_s_unit_string(units, pattern) -> str:
    """
    Total pack quantity for a unit product: 4 x "6 pcs" -> "24 pcs".

    Falls back to the raw pattern when it has no leading quantity, and to
    the bare unit count when there is no pattern at all.
    """
    u = float(units or 0)
    p = str(pattern or "").strip()
    if not p:
        return fmt_number(u) if u else ""

    p = _LEADING_WORD_NUMBER_RE.sub(lambda m: str(WORD_NUMBERS[m.group(1).lower()]), p)

    m = _PATTERN_QTY_RE.search(p)
    if not m:
        return p

    per = float(m.group(1))
    if not per or not u:
        return p
    return f"{fmt_number(per * u)} {m.group(2).strip()}"
