#!/usr/bin/env python3
"""
Senior Filter CLI — run the age filter on a file, or start the web server.

USAGE:
  python -m senior_filter.cli filter people.xlsx --min-age 60
  python -m senior_filter.cli filter people.csv --min-age 65 --show-all
  python -m senior_filter.cli filter people.csv --min-age 65 --output filtered_data.xlsx

  python -m senior_filter.cli serve                        # Start API server
  python -m senior_filter.cli serve --port 8000 --reload
"""
from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from senior_filter.config import EXPORTS_FOLDER, EXPORT_FILENAME, PREVIEW_ROWS
from senior_filter.data.loader import load_file
from senior_filter.data.schemas import SeniorFilterError
from senior_filter.data.session import Session
from senior_filter.reports import filtered_export


def _print_table(columns: list[str], rows: list[dict]) -> None:
    widths = {c: max([len(c)] + [len(_fmt(r.get(c))) for r in rows]) for c in columns}
    widths = {c: min(w, 30) for c, w in widths.items()}
    print("  " + "  ".join(f"{c[:widths[c]]:<{widths[c]}}" for c in columns))
    print("  " + "  ".join("-" * widths[c] for c in columns))
    for r in rows:
        print("  " + "  ".join(f"{_fmt(r.get(c))[:widths[c]]:<{widths[c]}}" for c in columns))


def _fmt(value) -> str:
    return "" if value is None else str(value)


def cmd_filter(args) -> int:
    """Load one file, filter by minimum age, print and optionally export."""
    print("\n" + "=" * 70)
    print("  SENIOR FILTER")
    print("=" * 70)

    path = Path(args.file)
    if not path.is_file():
        print(f"  File not found: {path}")
        return 1

    session = Session(session_id="cli")
    token = session.begin_upload()
    try:
        records = load_file(path)
    except SeniorFilterError as exc:
        print(f"  {exc}")
        return 1
    session.complete_upload(token, path.name, records)

    try:
        session.apply_filter(args.min_age)
    except SeniorFilterError as exc:
        print(f"  {exc}")
        return 1

    if not session.filtered:
        print(f"\n  {session.message}\n")
        return 0

    table = filtered_export.generate_json(session.filtered, show_all=args.show_all)
    print(f"\n  {table['total']:,} of {len(records):,} records aged {session.threshold}+\n")
    _print_table(table["columns"], table["rows"])
    if table["has_more"] and not args.show_all:
        print(f"\n  ... showing first {PREVIEW_ROWS}; use --show-all for the rest")

    if args.output:
        out = Path(args.output)
        if out.is_dir():
            out = out / EXPORT_FILENAME
        filtered_export.generate_excel(session.filtered, out)
        print(f"\n  Exported to: {out}")

    print("=" * 70 + "\n")
    return 0


def cmd_serve(args) -> int:
    """Start the API server."""
    import uvicorn
    print(f"\nStarting Senior Filter on port {args.port}...")
    uvicorn.run("senior_filter.main:app", host="0.0.0.0", port=args.port, reload=args.reload,
                timeout_keep_alive=65)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Senior Filter: filter people records by minimum age",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", help="Command")

    filter_parser = subparsers.add_parser("filter", help="Filter a spreadsheet or CSV by minimum age")
    filter_parser.add_argument("file", help="Excel (.xlsx, .xls) or CSV (.csv) file")
    filter_parser.add_argument("--min-age", required=True, help="Minimum age (inclusive)")
    filter_parser.add_argument("--output", nargs="?", const=str(EXPORTS_FOLDER / EXPORT_FILENAME),
                               help=f"Write results to an Excel file (default {EXPORT_FILENAME} in the exports folder)")
    filter_parser.add_argument("--show-all", action="store_true", help="Print every matching row")
    filter_parser.set_defaults(func=cmd_filter)

    serve_parser = subparsers.add_parser("serve", help="Start API server")
    serve_parser.add_argument("--port", type=int, default=int(os.environ.get("PORT", "8000")), help="Port (default 8000)")
    serve_parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    serve_parser.set_defaults(func=cmd_serve)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return 0
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
