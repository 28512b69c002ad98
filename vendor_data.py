"""
Vendor / product reference index, built from the Vendor_Product_Mapping sheet.

Mapping sheet columns (0-based):
  0: Sr No
  1: Product Name mod      (cleaned-up name)
  2: Product List og       (name as it appears on the website / orders)
  3: Quantity / Units      (per ONE ordered unit: "500 gms", "6 pcs", ...)
  4: Vendor                (location / market, used for grouping: Andheri, Dadar)
  5: Vendor_details        (WhatsApp contact name)
  6: Phone
  7: Lang                  (English / Hindi)
  8: Hindi Product Name

Both name columns are indexed, each under its normalize() and
base_normalize() form. Merge rules while scanning rows:
  - a product key keeps the first row that claimed it, but a later row can
    backfill a missing per-unit weight
  - vendor meta: first phone wins, Hindi is sticky, contact fills if empty
  - Hindi product names: first occurrence per base name wins

The returned maps are read-only.
"""

import re
from dataclasses import dataclass, replace
from types import MappingProxyType

from normalizer import normalize, base_normalize, canonicalize_vendor
from quantities import is_unit_pattern, parse_qty_cell_to_grams

ENGLISH = "English"
HINDI = "Hindi"

_HINDI_WORD_RE = re.compile(r"\bhindi\b", re.IGNORECASE)


@dataclass(frozen=True)
class ReferenceEntry:
    vendor: str
    phone: str
    language: str
    canonical: str
    per_unit_grams: float | None = None
    unit_pattern: str | None = None


@dataclass(frozen=True)
class VendorMeta:
    phone: str
    language: str
    contact_name: str


@dataclass(frozen=True)
class ReferenceIndex:
    by_norm: MappingProxyType
    by_base: MappingProxyType
    vendor_meta: MappingProxyType
    hindi_names: MappingProxyType

    def vendor_info(self, vendor: str) -> VendorMeta:
        """Meta for a vendor key, English with no phone when unknown."""
        meta = self.vendor_meta.get(vendor)
        if meta is None:
            return VendorMeta(phone="", language=ENGLISH, contact_name=vendor)
        return meta

    def localized_name(self, canonical_name: str, language: str) -> str:
        return get_localized_name(self, canonical_name, language)


def _cell(row: list, i: int) -> str:
    if i >= len(row) or row[i] is None:
        return ""
    value = row[i]
    # Phone numbers come back from Excel as 919876543210.0
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value).strip()


def _row_language(lang_cell: str, vendor_text: str) -> str:
    if lang_cell.lower() == "hindi" or _HINDI_WORD_RE.search(vendor_text):
        return HINDI
    return ENGLISH


def _merge_meta(vendor_meta: dict, key: str, phone: str, language: str, contact_name: str):
    meta = vendor_meta.get(key)
    if meta is None:
        meta = VendorMeta(phone="", language=language, contact_name=contact_name)

    vendor_meta[key] = VendorMeta(
        phone=meta.phone or phone,
        language=HINDI if language == HINDI else meta.language,
        contact_name=meta.contact_name or contact_name,
    )


def _register_product(index: dict, key: str, entry: ReferenceEntry):
    if not key:
        return
    existing = index.get(key)
    if existing is None:
        index[key] = entry
    elif entry.per_unit_grams and not existing.per_unit_grams:
        index[key] = replace(existing, per_unit_grams=entry.per_unit_grams)


def build_reference_index(rows: list[list]) -> ReferenceIndex:
    """Build the product/vendor lookups from mapping rows (row 0 = header)."""
    by_norm: dict = {}
    by_base: dict = {}
    vendor_meta: dict = {}
    hindi_names: dict = {}

    for row in rows[1:]:
        prod_mod = _cell(row, 1)
        prod_og = _cell(row, 2)
        qty_cell = _cell(row, 3)
        vendor_location = _cell(row, 4)
        vendor_detail = _cell(row, 5)
        phone = _cell(row, 6)
        lang_cell = _cell(row, 7)
        hindi_name = _cell(row, 8)

        language = _row_language(lang_cell, vendor_location or vendor_detail)
        vendor_key = canonicalize_vendor(vendor_location or vendor_detail or "Unknown")
        contact_name = vendor_detail or vendor_key

        # Exactly one of the two is set: counted products vs weighed products
        if is_unit_pattern(qty_cell):
            unit_pattern, per_unit_grams = qty_cell, None
        else:
            unit_pattern, per_unit_grams = None, parse_qty_cell_to_grams(qty_cell)

        _merge_meta(vendor_meta, vendor_key, phone, language, contact_name)
        _merge_meta(vendor_meta, contact_name, phone, language, contact_name)

        for name in (prod_mod, prod_og):
            if not name:
                continue
            entry = ReferenceEntry(
                vendor=vendor_key,
                phone=phone,
                language=language,
                canonical=name,
                per_unit_grams=per_unit_grams,
                unit_pattern=unit_pattern,
            )
            base = base_normalize(name)
            _register_product(by_norm, normalize(name), entry)
            _register_product(by_base, base, entry)

            if hindi_name and base and base not in hindi_names:
                hindi_names[base] = hindi_name

    return ReferenceIndex(
        by_norm=MappingProxyType(by_norm),
        by_base=MappingProxyType(by_base),
        vendor_meta=MappingProxyType(vendor_meta),
        hindi_names=MappingProxyType(hindi_names),
    )


def get_localized_name(index: ReferenceIndex, canonical_name: str, language: str) -> str:
    """Hindi product name for Hindi-speaking vendors, English otherwise."""
    if not language or language.lower() != "hindi":
        return canonical_name
    base = base_normalize(canonical_name)
    if not base:
        return canonical_name
    return index.hindi_names.get(base) or canonical_name
