"""
Ordered product -> vendor matching.

Matching pipeline (first hit wins):
  1. Exact match on the normalized name
  2. Base match on the name with pack sizes stripped ("tomato 500g" -> "tomato")
  3. Core-word match: every meaningful order word appears in a reference name
  4. Weighted fuzzy match over reference names sharing at least one word:
       0.30 substring + 0.30 jaccard + 0.20 levenshtein + 0.20 initials
     accepted at >= 0.30

Salads and boxes never go through here; they are expanded from the salad
breaker instead.
"""

from rapidfuzz.distance import Levenshtein
from thefuzz import fuzz, process

from config import (
    SUBSTRING_WEIGHT, JACCARD_WEIGHT, LEVENSHTEIN_WEIGHT, INITIALS_WEIGHT,
    MIN_FUZZY_SCORE, SUGGESTION_MIN_SCORE,
)
from normalizer import normalize, base_normalize, canonicalize_vendor, tokens
from vendor_data import ReferenceEntry, ReferenceIndex


def match_vendor_for_product(ordered_name: str, index: ReferenceIndex) -> dict | None:
    """
    Resolve an ordered product name to a reference entry.

    Returns None when unmatched, otherwise:
        entry: the ReferenceEntry matched
        vendor: canonical vendor key
        match_type: "exact", "base", "core_word" or "fuzzy"
        matched_key: the reference key that matched
        score: 1.0 for exact/base/core_word, the blended score for fuzzy
    """
    n = normalize(ordered_name)
    if not n:
        return None

    if "salad" in n or "box" in n:
        return None

    # 1. Exact
    if n in index.by_norm:
        return _result(index.by_norm[n], "exact", n, 1.0)

    # 2. Base name
    base_order = base_normalize(ordered_name)
    if not base_order:
        return None
    if base_order in index.by_base:
        return _result(index.by_base[base_order], "base", base_order, 1.0)

    order_tokens = tokens(base_order)
    if not order_tokens:
        return None

    # 3. All order words contained in a reference name
    key = _core_word_match(order_tokens, index.by_base.keys())
    if key is not None:
        return _result(index.by_base[key], "core_word", key, 1.0)

    # 4. Weighted fuzzy
    best_key = None
    best_score = -1.0
    for key in index.by_base:
        key_tokens = tokens(key)
        if not key_tokens or not (order_tokens & key_tokens):
            continue

        score = blended_score(base_order, key, order_tokens, key_tokens)
        if score > best_score:
            best_score = score
            best_key = key

    if best_key is not None and best_score >= MIN_FUZZY_SCORE:
        return _result(index.by_base[best_key], "fuzzy", best_key, round(best_score, 3))

    return None


def _result(entry: ReferenceEntry, match_type: str, key: str, score: float) -> dict:
    return {
        "entry": entry,
        "vendor": canonicalize_vendor(entry.vendor),
        "match_type": match_type,
        "matched_key": key,
        "score": score,
    }


def _core_word_match(order_tokens: set[str], keys) -> str | None:
    """
    Reference key containing every order word.

    Several keys can qualify ("cherry tomato" fits both "cherry tomato red"
    and "cherry tomato yellow local"). Fewest words wins, then shortest key,
    then alphabetical, so the answer does not depend on sheet row order.
    """
    candidates = [k for k in keys if order_tokens <= tokens(k)]
    if not candidates:
        return None
    return min(candidates, key=lambda k: (len(tokens(k)), len(k), k))


def blended_score(a: str, b: str, a_tokens: set[str], b_tokens: set[str]) -> float:
    return (
        SUBSTRING_WEIGHT * substring_similarity(a, b)
        + JACCARD_WEIGHT * jaccard_similarity(a_tokens, b_tokens)
        + LEVENSHTEIN_WEIGHT * levenshtein_similarity(a, b)
        + INITIALS_WEIGHT * initials_similarity(a_tokens, b_tokens)
    )


# ── Similarity signals, all in [0, 1] ─────────────────────────────

def substring_similarity(a: str, b: str) -> float:
    if not a or not b:
        return 0.0
    if a == b:
        return 1.0
    if a in b or b in a:
        return min(len(a), len(b)) / max(len(a), len(b))
    return 0.0


def jaccard_similarity(a_tokens: set, b_tokens: set) -> float:
    if not a_tokens or not b_tokens:
        return 0.0
    inter = len(a_tokens & b_tokens)
    union = len(a_tokens | b_tokens)
    return inter / union if union else 0.0


def levenshtein_similarity(a: str, b: str) -> float:
    if a == b:
        return 1.0
    if not a or not b:
        return 0.0
    # 1 - distance / longer length
    return Levenshtein.normalized_similarity(a, b)


def initials_similarity(a_tokens: set, b_tokens: set) -> float:
    if not a_tokens or not b_tokens:
        return 0.0
    return jaccard_similarity({t[0] for t in a_tokens if t}, {t[0] for t in b_tokens if t})


def suggest_closest(ordered_name: str, index: ReferenceIndex) -> tuple[str, int] | None:
    """
    Closest reference product for an unmatched line, for the reviewer.

    Advisory only: uses thefuzz token_set_ratio over base names and never
    feeds back into aggregation. Returns (canonical name, score 0-100).
    """
    base = base_normalize(ordered_name)
    if not base or not index.by_base:
        return None

    best = process.extractOne(base, list(index.by_base.keys()), scorer=fuzz.token_set_ratio)
    if not best:
        return None
    key, score = best[0], best[1]
    if score < SUGGESTION_MIN_SCORE:
        return None
    return index.by_base[key].canonical, score
