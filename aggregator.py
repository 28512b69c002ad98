"""
Order aggregation engine.

Walks the Orders List and folds every line into per-vendor, per-product
totals. Each line is resolved exactly once into one of:
  - "salad":     expanded into ingredients (grams per salad x salads ordered)
  - "vendor":    matched to a reference product
  - "unmatched": recorded for the reviewer, nothing added to totals

Totals keep the ordered unit count plus whatever tells us how to turn it
into a purchase quantity: grams per unit (weighed products) or a pack
pattern like "6 pcs" (counted products).
"""

from config import PRODUCT_COLUMN_INDEX, QUANTITY_COLUMN_INDEX, SKIP_KEYWORDS
from matcher import match_vendor_for_product, suggest_closest
from normalizer import canonicalize_vendor, is_microgreens_subscription
from quantities import parse_grams_from_name, parse_order_quantity
from salads import SaladTable
from vendor_data import ReferenceIndex


def resolve_line(product_name: str, index: ReferenceIndex, salads: SaladTable) -> dict:
    """Decide once how an order line is handled. Tagged by "kind"."""
    recipe = salads.lookup(product_name)
    if recipe:
        return {"kind": "salad", "ingredients": recipe}

    match = match_vendor_for_product(product_name, index)
    if match is None:
        return {"kind": "unmatched", "suggestion": suggest_closest(product_name, index)}

    return {"kind": "vendor", "match": match}


def effective_per_unit_grams(product_name: str, entry_grams: float | None) -> float | None:
    """
    Grams per ordered unit for a matched line.

    The order's own name wins ("Spinach 250g" is 250g whatever the mapping
    says), then the mapping's weight. Microgreens subscriptions are always
    counted, never weighed.
    """
    if is_microgreens_subscription(product_name):
        return None

    from_name = parse_grams_from_name(product_name)
    if from_name is not None and from_name > 0:
        return from_name
    if entry_grams is not None and entry_grams > 0:
        return entry_grams
    return None


def add_to_totals(totals: dict, vendor: str, product: str, units: float,
                  per_unit_grams: float | None, unit_pattern: str | None):
    """
    Add units under (vendor, product).

    Null never overwrites known data. When lines disagree, the larger
    weight and the alphabetically first pattern are kept, so the result
    does not depend on line order.
    """
    vendor = canonicalize_vendor(vendor)
    slot = totals.setdefault(vendor, {}).setdefault(
        product, {"units": 0, "per_unit_grams": None, "unit_pattern": None}
    )
    slot["units"] += units

    if per_unit_grams is not None:
        current = slot["per_unit_grams"]
        slot["per_unit_grams"] = per_unit_grams if current is None else max(current, per_unit_grams)

    if unit_pattern:
        current = slot["unit_pattern"]
        slot["unit_pattern"] = unit_pattern if not current else min(current, unit_pattern)


def aggregate_orders(order_rows: list[list], index: ReferenceIndex, salads: SaladTable) -> dict:
    """
    Fold order rows (row 0 = header) into vendor totals.

    Returns:
        totals: {vendor: {product: {units, per_unit_grams, unit_pattern}}}
        unmatched: [{name, quantity, source, reason, suggestion}]
        skipped: [{name, quantity_cell, reason}] lines with no usable quantity
        audit: one entry per processed line describing how it was resolved

    Raises ValueError when the orders sheet has no data rows.
    """
    if len(order_rows) <= 1:
        raise ValueError("Orders sheet appears empty (no data rows).")

    totals: dict = {}
    unmatched: list[dict] = []
    skipped: list[dict] = []
    audit: list[dict] = []

    for row in order_rows[1:]:
        raw_name = row[PRODUCT_COLUMN_INDEX] if len(row) > PRODUCT_COLUMN_INDEX else None
        qty_cell = row[QUANTITY_COLUMN_INDEX] if len(row) > QUANTITY_COLUMN_INDEX else None

        name = str(raw_name).strip() if raw_name is not None else ""
        if not name:
            continue
        if any(k in name.lower() for k in SKIP_KEYWORDS):
            continue

        units = parse_order_quantity(qty_cell)
        if not units:
            skipped.append({
                "name": name,
                "quantity_cell": "" if qty_cell is None else str(qty_cell),
                "reason": "No usable quantity",
            })
            continue

        resolution = resolve_line(name, index, salads)
        kind = resolution["kind"]

        if kind == "salad":
            for ing in resolution["ingredients"]:
                add_to_totals(totals, ing.vendor, ing.name, units, ing.grams_per_unit, None)
            audit.append({
                "name": name, "quantity": units, "kind": kind, "match_type": "salad",
                "score": None, "vendor": ", ".join(sorted({i.vendor for i in resolution["ingredients"]})),
                "product": f"{len(resolution['ingredients'])} ingredient(s)",
            })

        elif kind == "unmatched":
            unmatched.append({
                "name": name,
                "quantity": units,
                "source": "Order",
                "reason": "No vendor match",
                "suggestion": resolution["suggestion"],
            })
            audit.append({
                "name": name, "quantity": units, "kind": kind, "match_type": "none",
                "score": None, "vendor": None, "product": None,
            })

        else:
            match = resolution["match"]
            entry = match["entry"]
            product = entry.canonical or name
            add_to_totals(
                totals, match["vendor"], product, units,
                effective_per_unit_grams(name, entry.per_unit_grams),
                entry.unit_pattern,
            )
            audit.append({
                "name": name, "quantity": units, "kind": kind,
                "match_type": match["match_type"], "score": match["score"],
                "vendor": match["vendor"], "product": product,
            })

    return {"totals": totals, "unmatched": unmatched, "skipped": skipped, "audit": audit}
