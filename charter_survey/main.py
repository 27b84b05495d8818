"""Command-line entry point for the survey encoder.

Operates on the JSON record store named by ``CHARTER_STORE_PATH`` (or
``--store``): import a CSV export, export CSV/XLSX, print the Markdown report
or reset the collection.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from charter_survey.app import build_store, logger
from charter_survey.csv_codec import EXPECTED_CSV_COLUMNS, decode_csv, encode_csv
from charter_survey.exceptions import CSVImportError
from charter_survey.excel_export import export_to_excel
from charter_survey.reporting.render import render_report


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="charter-survey",
        description="Encode and analyse Citizen's Charter satisfaction surveys.",
    )
    parser.add_argument("--store", help="Path of the JSON record store")
    sub = parser.add_subparsers(dest="command", required=True)

    imp = sub.add_parser("import", help="Replace all records with a CSV file")
    imp.add_argument("csv_path")

    exp = sub.add_parser("export-csv", help="Write all records to a CSV file")
    exp.add_argument("csv_path")

    xls = sub.add_parser("export-xlsx", help="Write all records to a spreadsheet")
    xls.add_argument("xlsx_path", nargs="?")

    rep = sub.add_parser("report", help="Print the Markdown report")
    rep.add_argument("--campus", help="Only include this campus")
    rep.add_argument("--office", help="Only include this office")

    sub.add_parser("clear", help="Delete every stored record")
    sub.add_parser("columns", help="Show the expected CSV column order")
    return parser


def _import(store, csv_path: str) -> int:
    text = Path(csv_path).read_text(encoding="utf-8-sig")
    result = decode_csv(text)
    if not result.records:
        raise CSVImportError(
            "No rows imported. Make sure the CSV follows this column order: "
            f"{EXPECTED_CSV_COLUMNS}"
        )
    store.replace_all(result.records)
    print(f"Imported {result.imported} record(s), skipped {len(result.skipped)} line(s).")
    for message in result.skipped:
        print(f"  - {message}")
    return 0


def _report(store, campus: Optional[str], office: Optional[str]) -> int:
    records = store.load()
    labels = []
    if campus:
        records = [r for r in records if r.campus == campus]
        labels.append(f"Campus: {campus}")
    if office:
        records = [r for r in records if r.office == office]
        labels.append(f"Office: {office}")
    print(render_report(records, filter_label=", ".join(labels) or None))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Run one CLI command and return its exit status."""

    args = _build_parser().parse_args(argv)
    if args.command == "columns":
        print(EXPECTED_CSV_COLUMNS)
        return 0

    try:
        store = build_store(args.store)
        if args.command == "import":
            return _import(store, args.csv_path)
        if args.command == "export-csv":
            Path(args.csv_path).write_text(encode_csv(store.load()), encoding="utf-8")
            print(f"Wrote {store.count()} record(s) to {args.csv_path}")
            return 0
        if args.command == "export-xlsx":
            path = export_to_excel(store.load(), args.xlsx_path)
            print(f"Wrote {store.count()} record(s) to {path}")
            return 0
        if args.command == "report":
            return _report(store, args.campus, args.office)
        if args.command == "clear":
            store.clear()
            print("All records cleared.")
            return 0
    except (CSVImportError, ValueError, OSError) as exc:
        logger.error("%s failed: %s", args.command, exc)
        return 1
    return 2


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
