"""
Salad breaker: composite products expanded into their ingredients.

Sheet layout (0-based columns): 1 salad name, 2 ingredient, 3 grams per
salad, 4 vendor. The salad name is only written on the first row of its
block; it carries down until a fully blank row ends the block.

    | # | Greek Salad | Lettuce | 50 | Andheri |
    |   |             | Feta    | 20 | Dadar   |
    |   |             |         |    |         |   <- block ends
"""

import re
from dataclasses import dataclass
from functools import reduce
from types import MappingProxyType

from normalizer import normalize, canonicalize_vendor


@dataclass(frozen=True)
class Ingredient:
    name: str
    grams_per_unit: float
    vendor: str


@dataclass(frozen=True)
class SaladTable:
    recipes: MappingProxyType
    by_norm: MappingProxyType

    def lookup(self, product_name: str) -> tuple | None:
        """Recipe for an ordered name, exact sheet name first, then normalized."""
        name = (product_name or "").strip()
        return self.recipes.get(name) or self.by_norm.get(normalize(name))


def _is_blank(row: list) -> bool:
    return all(c is None or c == "" for c in row)


def _cell(row: list, i: int) -> str:
    if i >= len(row) or row[i] is None:
        return ""
    return str(row[i]).strip()


def _parse_grams(text: str) -> float:
    digits = re.sub(r"[^0-9.]", "", text)
    m = re.match(r"\d*\.?\d+|\d+", digits)
    return float(m.group(0)) if m else 0.0


def _step(state: tuple, row: list) -> tuple:
    """Fold one sheet row into (current salad, recipes)."""
    current, recipes = state

    if _is_blank(row):
        return "", recipes

    current = _cell(row, 1) or current
    ingredient = _cell(row, 2)
    if not current or not ingredient:
        return current, recipes

    item = Ingredient(
        name=ingredient,
        grams_per_unit=_parse_grams(_cell(row, 3)),
        vendor=canonicalize_vendor(_cell(row, 4)),
    )
    recipes.setdefault(current, []).append(item)
    return current, recipes


def build_salad_table(rows: list[list]) -> SaladTable:
    """Parse salad breaker rows (row 0 = header) into recipes."""
    _, recipes = reduce(_step, rows[1:], ("", {}))

    frozen = {name: tuple(items) for name, items in recipes.items()}
    by_norm: dict = {}
    for name, items in frozen.items():
        by_norm.setdefault(normalize(name), items)

    return SaladTable(recipes=MappingProxyType(frozen), by_norm=MappingProxyType(by_norm))
