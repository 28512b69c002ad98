"""
Report generation — outputs per run:
  1. Vendor order lines (units, pack totals, base and buffered weight)
  2. WhatsApp messages, one per vendor, in the vendor's language
  3. Unmatched items for the reviewer
plus a JSON payload, a human-readable report and a match audit trail.
"""

import json
import math
import os
import re
from datetime import datetime, timezone

from config import FARM_NAME
from normalizer import is_microgreens_subscription
from quantities import fmt_number, fmt_weight, make_s_unit_string, parse_grams_from_name
from vendor_data import HINDI, ReferenceIndex

EMPTY = "—"

_WEIGHT_PAREN_RE = re.compile(r"\([^)]*(kg|gms?|grams?)\)", re.IGNORECASE)
_KG_SUFFIX_RE = re.compile(r"[-–]\s*\d+(?:\.\d+)?\s*kg", re.IGNORECASE)


def has_weight(product: str, slot: dict) -> bool:
    g = slot.get("per_unit_grams")
    return g is not None and g > 0 and not is_microgreens_subscription(product)


def unit_phrase(units, language: str = "English") -> str:
    if language == HINDI:
        return f"{fmt_number(units)} यूनिट"
    return f"{fmt_number(units)} {'unit' if units == 1 else 'units'}"


def buffered_units(units, buffer_percent: float) -> int:
    """Ordered units inflated by the buffer, rounded up to whole units."""
    return math.ceil(round(units * (1 + buffer_percent / 100), 9))


def clean_display_name(canonical_name: str, per_unit_grams: float | None) -> str:
    """
    "Spinach (250 gms)" -> "Spinach (250 gms)", "Onion - 1kg" -> "Onion (1 kg)".

    Strips any weight written into the name and re-appends the per-unit
    weight in one consistent format. Names without a known weight are
    returned unchanged.
    """
    s = str(canonical_name or "")
    if is_microgreens_subscription(s):
        return s

    g = per_unit_grams
    if not g or g <= 0:
        g = parse_grams_from_name(s)
    if not g or g <= 0:
        return s

    s = _WEIGHT_PAREN_RE.sub("", s).strip()
    s = _KG_SUFFIX_RE.sub("", s).strip()
    s = re.sub(r"\s+", " ", s)
    s = re.sub(r"\s*-\s*$", "", s).strip()
    return f"{s} ({fmt_weight(g)})"


def _sorted_items(totals: dict):
    for vendor in sorted(totals):
        for product in sorted(totals[vendor]):
            yield vendor, product, totals[vendor][product]


def build_vendor_order_lines(totals: dict, buffer_percent: float) -> list[dict]:
    """Table 1: one row per (vendor, product), vendors then products sorted."""
    lines = []
    for serial, (vendor, product, slot) in enumerate(_sorted_items(totals), 1):
        units = slot["units"]
        row = {
            "serial": serial,
            "display_name": clean_display_name(product, slot.get("per_unit_grams")),
            "vendor": vendor,
            "units": units,
            "s_units": "",
            "base_weight": EMPTY,
            "buffered_weight": EMPTY,
        }

        if has_weight(product, slot):
            base_g = units * slot["per_unit_grams"]
            row["base_weight"] = fmt_weight(base_g)
            row["buffered_weight"] = fmt_weight(base_g * (1 + buffer_percent / 100))
        elif is_microgreens_subscription(product):
            row["s_units"] = unit_phrase(units)
        else:
            s_units = make_s_unit_string(units, slot["unit_pattern"]) if slot.get("unit_pattern") else ""
            row["s_units"] = s_units or unit_phrase(units)

        lines.append(row)
    return lines


def _message_line(index: ReferenceIndex, product: str, slot: dict,
                  language: str, buffer_percent: float) -> str:
    name = index.localized_name(product, language)
    units = slot["units"]

    if is_microgreens_subscription(product):
        return f"• {name} – {unit_phrase(units, language)}"

    if has_weight(product, slot):
        total_g = slot["per_unit_grams"] * buffered_units(units, buffer_percent)
        label = "कुल" if language == HINDI else "Total"
        return f"• {name} – {label} {fmt_weight(total_g)}"

    pattern = slot.get("unit_pattern")
    s_units = make_s_unit_string(units, pattern) if pattern else ""
    if not s_units or s_units == EMPTY:
        s_units = unit_phrase(units, language)
    return f"• {name} – {s_units}"


def build_message_text(vendor: str, lines: list[str], language: str) -> str:
    # Addressed to the market, not the contact person
    body = "\n".join(lines)
    if language == HINDI:
        header = f"प्रिय {vendor},\nआपका कल का ऑर्डर ({vendor}):\n\n"
        footer = f"\n\nकृपया कन्फर्म करें।\nधन्यवाद,\n{FARM_NAME}"
    else:
        header = f"Dear {vendor},\nYour order for tomorrow ({vendor}):\n\n"
        footer = f"\n\nPlease confirm.\nThanks,\n{FARM_NAME}"
    return header + body + footer


def build_whatsapp_messages(totals: dict, index: ReferenceIndex, buffer_percent: float) -> list[dict]:
    """Table 2: one WhatsApp message per vendor."""
    messages = []
    for serial, vendor in enumerate(sorted(totals), 1):
        meta = index.vendor_info(vendor)
        lines = [
            _message_line(index, product, totals[vendor][product], meta.language, buffer_percent)
            for product in sorted(totals[vendor])
        ]
        messages.append({
            "serial": serial,
            "vendor": vendor,
            "phone": meta.phone,
            "language": meta.language,
            "message": build_message_text(vendor, lines, meta.language),
        })
    return messages


def build_unmatched_items(unmatched: list[dict]) -> list[dict]:
    """Table 3: unmatched order lines, with the closest known product if any."""
    items = []
    for serial, u in enumerate(unmatched, 1):
        note = u["reason"]
        if u.get("suggestion"):
            name, score = u["suggestion"]
            note += f" (closest: {name}, {score}%)"
        items.append({
            "serial": serial,
            "name": u["name"],
            "quantity": u["quantity"],
            "source": u["source"],
            "note": note,
        })
    return items


def build_json_payload(buffer_percent: float, order_lines: list[dict], messages: list[dict],
                       unmatched_items: list[dict], skipped: list[dict]) -> dict:
    """Build the structured run payload."""
    return {
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "buffer_percent": buffer_percent,
        "summary": {
            "vendors": len(messages),
            "order_lines": len(order_lines),
            "weighed_lines": sum(1 for r in order_lines if r["base_weight"] != EMPTY),
            "counted_lines": sum(1 for r in order_lines if r["base_weight"] == EMPTY),
            "unmatched_items": len(unmatched_items),
            "skipped_lines": len(skipped),
        },
        "vendor_order_lines": order_lines,
        "whatsapp_messages": messages,
        "unmatched_items": unmatched_items,
        "skipped_lines": skipped,
    }


def build_order_report(order_lines: list[dict], messages: list[dict], unmatched_items: list[dict],
                       skipped: list[dict], buffer_percent: float) -> str:
    """Build the human-readable vendor order report."""
    lines = []
    sep = "=" * 78

    lines.append(sep)
    lines.append("  VENDOR ORDER LIST")
    lines.append(sep)
    lines.append(f"  Buffer: {fmt_number(buffer_percent)}%")
    lines.append("")
    lines.append(f"  {'#':>3}  {'Product':<34} {'Vendor':<12} {'Units':>6} {'S-Units':<10} "
                 f"{'Base':>9} {'+' + fmt_number(buffer_percent) + '%':>9}")
    lines.append(f"  {'-'*3}  {'-'*34} {'-'*12} {'-'*6} {'-'*10} {'-'*9} {'-'*9}")
    for r in order_lines:
        lines.append(
            f"  {r['serial']:>3}  {r['display_name'][:34]:<34} {r['vendor'][:12]:<12} "
            f"{fmt_number(r['units']):>6} {(r['s_units'] or EMPTY)[:10]:<10} "
            f"{r['base_weight']:>9} {r['buffered_weight']:>9}"
        )
    lines.append("")

    lines.append("-" * 78)
    lines.append("  WHATSAPP MESSAGES")
    lines.append("-" * 78)
    for m in messages:
        lines.append(f"  [{m['serial']}] {m['vendor']} | {m['phone'] or 'no phone'} | {m['language']}")
        for text_line in m["message"].split("\n"):
            lines.append(f"      {text_line}")
        lines.append("")

    lines.append("-" * 78)
    lines.append("  UNMATCHED ITEMS")
    lines.append("-" * 78)
    if not unmatched_items:
        lines.append(f"  1. {EMPTY}  All items matched")
    for u in unmatched_items:
        lines.append(f"  {u['serial']}. {u['name']} x {fmt_number(u['quantity'])} "
                     f"[{u['source']}] {u['note']}")

    if skipped:
        lines.append("")
        lines.append("-" * 78)
        lines.append("  SKIPPED LINES (no usable quantity)")
        lines.append("-" * 78)
        for s in skipped:
            lines.append(f"  - {s['name']} (quantity: '{s['quantity_cell']}')")

    lines.append("")
    lines.append(sep)
    return "\n".join(lines)


def build_match_audit(audit: list[dict], skipped: list[dict]) -> str:
    """Build a line-by-line audit of how each order line was resolved."""
    entries = []
    ts = datetime.now(timezone.utc).isoformat()

    entries.append(f"[{ts}] MATCH AUDIT")
    entries.append("")
    for i, a in enumerate(audit, 1):
        entries.append(f"  Line {i}: '{a['name']}' x {fmt_number(a['quantity'])}")
        entries.append(f"    Resolved as: {a['kind']} ({a['match_type']})")
        if a["score"] is not None:
            entries.append(f"    Score: {a['score']}")
        if a["vendor"]:
            entries.append(f"    Vendor: {a['vendor']}")
        if a["product"]:
            entries.append(f"    Product: {a['product']}")
        if a["match_type"] == "fuzzy":
            entries.append("    UNCERTAINTY: Fuzzy match — check the product before sending.")
        elif a["match_type"] == "none":
            entries.append("    UNCERTAINTY: Not in vendor mapping — listed under unmatched items.")
    entries.append("")

    if skipped:
        entries.append("SKIPPED (not counted):")
        for s in skipped:
            entries.append(f"  - '{s['name']}': {s['reason']} (cell: '{s['quantity_cell']}')")
        entries.append("")

    by_type: dict = {}
    for a in audit:
        by_type[a["match_type"]] = by_type.get(a["match_type"], 0) + 1
    entries.append("SUMMARY:")
    for match_type in sorted(by_type):
        entries.append(f"  {match_type}: {by_type[match_type]}")

    return "\n".join(entries)


def save_outputs(run_name: str, json_payload: dict, report: str, audit: str,
                 messages: list[dict], output_dir: str = "output") -> list[str]:
    """Save all outputs to files. Returns the written paths."""
    os.makedirs(output_dir, exist_ok=True)

    base = os.path.join(output_dir, run_name)
    paths = [
        f"{base}_vendor_orders.json",
        f"{base}_report.txt",
        f"{base}_audit.txt",
        f"{base}_whatsapp.txt",
    ]

    blocks = [f"# {m['vendor']} ({m['phone'] or 'no phone'})\n{m['message']}" for m in messages]
    contents = [
        json.dumps(json_payload, indent=2, ensure_ascii=False),
        report,
        audit,
        "\n\n".join(blocks) + "\n",
    ]

    # All files land or none do: write to temp names, then rename
    tmp_paths = [f"{path}.tmp" for path in paths]
    try:
        for tmp, text in zip(tmp_paths, contents):
            with open(tmp, "w", encoding="utf-8") as f:
                f.write(text)
    except OSError:
        for tmp in tmp_paths:
            if os.path.isfile(tmp):
                os.remove(tmp)
        raise

    for tmp, path in zip(tmp_paths, paths):
        os.replace(tmp, path)

    for path in paths:
        print(f"  Saved: {path}")
    return paths
