"""
Name normalization for ordered products and vendor names.

Order sheets are typed by hand, so the same product shows up as
"Tomato (Desi) - 500g", "tomato desi 500 gms" or "Tomato". Everything that
compares names goes through these helpers first.
"""

import re

from config import MIN_TOKEN_LEN

_PAREN_RE = re.compile(r"\(.*?\)")
_NON_ALNUM_RE = re.compile(r"[^a-z0-9\s]")
_SPACES_RE = re.compile(r"\s+")

_PER_WEIGHT_RE = re.compile(r"\bper\s+\d+(\.\d+)?\s*(gms?|grams?|gm|kg|kgs?|kilo|kilos?)\b")
_WEIGHT_RE = re.compile(r"\b\d+(\.\d+)?\s*(gms?|grams?|gm|kg|kgs?|kilo|kilos?)\b")
_COUNT_RE = re.compile(
    r"\b\d+(\.\d+)?\s*(units?|unit|pcs?|pieces?|piece|bunch(?:es)?|head(?:s)?|pack|packs)\b"
)
_APPROX_RE = re.compile(r"\b(approx)\b")

_HINDI_MARKER_RE = re.compile(r"\bhindi\b", re.IGNORECASE)


def normalize(text) -> str:
    """Lowercase, drop (...) segments and punctuation, collapse spaces."""
    if not text:
        return ""
    s = str(text).lower()
    s = _PAREN_RE.sub("", s)
    s = _NON_ALNUM_RE.sub(" ", s)
    return _SPACES_RE.sub(" ", s).strip()


def base_normalize(text) -> str:
    """
    normalize() plus removal of packaging quantities.

    "Tomato (Desi) - 500g" -> "tomato", "Coriander 1 bunch" -> "coriander".
    Used to compare products regardless of pack size.
    """
    n = normalize(text)
    if not n:
        return ""

    n = _PER_WEIGHT_RE.sub(" ", n)
    n = _WEIGHT_RE.sub(" ", n)
    n = _COUNT_RE.sub(" ", n)
    n = _APPROX_RE.sub(" ", n)
    return _SPACES_RE.sub(" ", n).strip()


def canonicalize_vendor(text) -> str:
    """
    Map a vendor cell to its grouping key.

    Drops a "hindi" marker and folds the many spellings of Andheri
    ("Anderi", "anderhi", ...) into one. Empty input -> "Unknown".
    """
    t = str(text or "").strip()
    if not t:
        return "Unknown"

    t = _HINDI_MARKER_RE.sub("", t, count=1).strip()

    lowered = t.lower()
    if lowered in ("anderi", "andheri") or lowered.startswith("ander"):
        return "Andheri"

    return t or "Unknown"


def tokens(text: str) -> set[str]:
    """Meaningful words of an already-normalized name (3+ chars)."""
    return {t for t in text.split(" ") if len(t) >= MIN_TOKEN_LEN}


def is_microgreens_subscription(name) -> bool:
    # Subscriptions are counted in boxes, whatever weight the name mentions
    n = normalize(name)
    return "microgreen" in n and "subscription" in n
