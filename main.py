"""
Vendor Order Generator — Main Entry Point

6-step pipeline: read sheets -> index vendor mapping -> parse salad
breaker -> aggregate orders -> format vendor orders + WhatsApp messages
-> save outputs.

Usage:
    python main.py ops_orders.xlsx Vendor_Product_Mapping.xlsx "salad breaker.xlsx"
    python main.py orders.csv mapping.csv salads.csv --buffer 15
"""

import argparse
import os
import sys

from config import (
    ORDERS_SHEET, MAPPING_SHEET, SALAD_SHEET, OUTPUT_DIR,
    default_buffer_percent, parse_buffer_percent,
)
from extractor import read_table
from vendor_data import build_reference_index
from salads import build_salad_table
from aggregator import aggregate_orders
from quantities import fmt_number
from report import (
    build_vendor_order_lines, build_whatsapp_messages, build_unmatched_items,
    build_json_payload, build_order_report, build_match_audit, save_outputs,
)


def _sheet_for(path: str, sheet_name: str) -> str | None:
    # CSV exports have no sheets
    return None if path.lower().endswith(".csv") else sheet_name


def generate_vendor_orders(orders_path: str, mapping_path: str, salads_path: str,
                           buffer_percent: float, output_dir: str = OUTPUT_DIR,
                           run_name: str | None = None) -> dict:
    """Run the full pipeline on one set of sheets. Raises on structural errors."""
    run_name = run_name or os.path.splitext(os.path.basename(orders_path))[0]
    print(f"\n{'='*60}")
    print(f"Processing: {orders_path}")
    print(f"{'='*60}")
    print(f"  Using buffer % = {fmt_number(buffer_percent)}")

    # Step 1: Read every sheet up front
    print("  [1/6] Reading sheets...")
    order_rows = read_table(orders_path, _sheet_for(orders_path, ORDERS_SHEET))
    mapping_rows = read_table(mapping_path, _sheet_for(mapping_path, MAPPING_SHEET))
    salad_rows = read_table(salads_path, _sheet_for(salads_path, SALAD_SHEET))
    print(f"        Orders: {max(len(order_rows) - 1, 0)} row(s), "
          f"mapping: {max(len(mapping_rows) - 1, 0)}, salad breaker: {max(len(salad_rows) - 1, 0)}")

    # Step 2: Vendor mapping
    print("  [2/6] Indexing vendor mapping...")
    index = build_reference_index(mapping_rows)
    print(f"        Products: {len(index.by_norm)} names, {len(index.by_base)} base names")
    print(f"        Vendor contacts: {len(index.vendor_meta)}")

    # Step 3: Salad breaker
    print("  [3/6] Parsing salad breaker...")
    salads = build_salad_table(salad_rows)
    print(f"        Salads: {len(salads.recipes)}")

    # Step 4: Aggregate
    print("  [4/6] Aggregating orders...")
    result = aggregate_orders(order_rows, index, salads)
    by_type: dict = {}
    for a in result["audit"]:
        by_type[a["match_type"]] = by_type.get(a["match_type"], 0) + 1
    print(f"        Lines: {len(result['audit'])} "
          f"({', '.join(f'{k}: {v}' for k, v in sorted(by_type.items())) or 'none'})")
    for u in result["unmatched"]:
        print(f"        No vendor match: {u['name']}")
    for s in result["skipped"]:
        print(f"        Skipped (no quantity): {s['name']}")

    # Step 5: Format
    print("  [5/6] Formatting vendor orders and WhatsApp messages...")
    totals = result["totals"]
    order_lines = build_vendor_order_lines(totals, buffer_percent)
    messages = build_whatsapp_messages(totals, index, buffer_percent)
    unmatched_items = build_unmatched_items(result["unmatched"])
    print(f"        Vendors: {len(messages)}, order lines: {len(order_lines)}")

    # Step 6: Save
    print("  [6/6] Saving outputs...")
    payload = build_json_payload(buffer_percent, order_lines, messages, unmatched_items, result["skipped"])
    report = build_order_report(order_lines, messages, unmatched_items, result["skipped"], buffer_percent)
    audit = build_match_audit(result["audit"], result["skipped"])
    save_outputs(run_name, payload, report, audit, messages, output_dir)

    return payload


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Generate vendor orders and WhatsApp messages.")
    parser.add_argument("orders", help="Orders sheet (.xlsx or .csv)")
    parser.add_argument("mapping", help="Vendor_Product_Mapping sheet")
    parser.add_argument("salads", help="Salad breaker sheet")
    parser.add_argument("--buffer", default=None, help="Buffer %% on weights (default 12)")
    parser.add_argument("--output-dir", default=OUTPUT_DIR)
    parser.add_argument("--name", default=None, help="Output file prefix (default: orders file name)")
    args = parser.parse_args(argv)

    buffer_percent = (
        parse_buffer_percent(args.buffer) if args.buffer is not None else default_buffer_percent()
    )

    try:
        payload = generate_vendor_orders(
            args.orders, args.mapping, args.salads,
            buffer_percent, args.output_dir, args.name,
        )
    except (FileNotFoundError, ValueError) as e:
        print(f"  ERROR: {e}")
        return 1

    summary = payload["summary"]
    print(f"\n{'='*60}")
    print("SUMMARY")
    print(f"{'='*60}")
    print(f"  Vendors:     {summary['vendors']}")
    print(f"  Order lines: {summary['order_lines']} "
          f"({summary['weighed_lines']} weighed, {summary['counted_lines']} counted)")
    print(f"  Unmatched:   {summary['unmatched_items']}")
    print(f"  Skipped:     {summary['skipped_lines']}")
    print(f"\nAll outputs saved to ./{args.output_dir}/")
    return 0


if __name__ == "__main__":
    sys.exit(main())
