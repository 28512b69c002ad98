"""
Sheet extraction: Excel workbooks or CSV exports into plain row lists.

The rest of the pipeline only ever sees list[list] with the header as
row 0, so the same code runs on an .xlsx download of the ops sheet or a
CSV export of it.

Missing files and missing sheets raise; the run aborts before anything
is computed or written.
"""

import csv
import os

from openpyxl import load_workbook

EXCEL_EXTENSIONS = (".xlsx", ".xlsm")


def read_table(path: str, sheet_name: str | None = None) -> list[list]:
    """
    Read every row of a sheet as a list of cell values.

    Args:
        path: .xlsx/.xlsm or .csv file
        sheet_name: worksheet to read (Excel only; first sheet if None)

    Raises:
        FileNotFoundError: if the file doesn't exist
        ValueError: unreadable workbook, unknown sheet or unsupported type
    """
    if not os.path.isfile(path):
        raise FileNotFoundError(f"Sheet file not found: {path}")

    ext = os.path.splitext(path)[1].lower()
    if ext == ".csv":
        return _read_csv(path)
    if ext in EXCEL_EXTENSIONS:
        return _read_excel(path, sheet_name)

    raise ValueError(f"Unsupported sheet file type '{ext}' for {path} (use .xlsx or .csv)")


def _read_csv(path: str) -> list[list]:
    with open(path, newline="", encoding="utf-8-sig") as f:
        return [[cell if cell != "" else None for cell in row] for row in csv.reader(f)]


def _read_excel(path: str, sheet_name: str | None) -> list[list]:
    try:
        wb = load_workbook(path, read_only=True, data_only=True)
    except Exception as e:
        raise ValueError(f"Cannot read Excel file {path} (is it corrupted or wrong format?): {e}")

    try:
        if sheet_name is None:
            ws = wb.worksheets[0]
        elif sheet_name in wb.sheetnames:
            ws = wb[sheet_name]
        else:
            raise ValueError(
                f'Sheet "{sheet_name}" not found in {os.path.basename(path)} '
                f"(available: {', '.join(wb.sheetnames)})"
            )
        return [list(row) for row in ws.iter_rows(values_only=True)]
    finally:
        wb.close()
