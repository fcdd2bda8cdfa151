#!/usr/bin/env python3
"""
Skylander Inventory CLI — import, browse, trade lists, share links, export, API server.

USAGE:
  python -m skytracker.cli import skylanders.csv                 # Import a CSV catalog
  python -m skytracker.cli import --sheet "https://docs.google.com/spreadsheets/d/<id>/edit"

  python -m skytracker.cli list                                  # Whole catalog, by name
  python -m skytracker.cli list --status trade --element Fire
  python -m skytracker.cli list --sort value --desc

  python -m skytracker.cli stats                                 # Dashboard numbers
  python -m skytracker.cli set <id> count 3                      # Update one field
  python -m skytracker.cli add <id>                              # Own one more
  python -m skytracker.cli trade                                 # Copy-paste trade list
  python -m skytracker.cli share <id> <id> --values              # Share link
  python -m skytracker.cli share --owned
  python -m skytracker.cli export                                # Collection workbook
  python -m skytracker.cli reset --yes                           # Clear ownership data
  python -m skytracker.cli serve --port 8000                     # Start API server
"""
from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from skytracker.config import EXPORTS_FOLDER, DEFAULT_SHARE_TITLE, DEFAULT_SHARE_DESCRIPTION
from skytracker.data.store import InventoryStore, open_store
from skytracker.data.loader import load_catalog_from_file, load_catalog_from_sheet
from skytracker.data.schemas import ViewFilter, StatusFilter, SortKey, SortDirection, ALL_ELEMENTS
from skytracker.errors import CatalogImportError, SheetFetchError


def _open() -> InventoryStore:
    return open_store().load()


def _report_save(store: InventoryStore) -> None:
    if store.save_error is not None:
        print(f"  WARNING: change not saved: {store.save_error}")


def cmd_import(args):
    """Import a catalog from a CSV file or public Google Sheet."""
    store = _open()
    try:
        if args.sheet:
            items = load_catalog_from_sheet(args.sheet)
        elif args.csv:
            items = load_catalog_from_file(args.csv)
        else:
            print("  Specify a CSV file or --sheet URL")
            return 2
    except (CatalogImportError, SheetFetchError) as e:
        print(f"  Import failed: {e}")
        return 1

    imported = store.import_catalog(items)
    print(f"\nImported {len(imported):,} Skylanders ({len(store.elements())} elements)")
    _report_save(store)
    return 0


def cmd_list(args):
    from skytracker.analytics.dashboard import filter_frame

    store = _open()
    view = ViewFilter(
        status=StatusFilter(args.status),
        element=args.element,
        search=args.search or "",
        sort_key=SortKey(args.sort),
        direction=SortDirection.DESC if args.desc else SortDirection.ASC,
    )
    df = filter_frame(store, view)
    print(f"\nSKYLANDERS ({len(df)}) — {view.label}\n")
    for _, r in df.iterrows():
        flags = "".join([
            "H" if r["have"] else "-",
            "N" if r["need"] else "-",
            "T" if r["forTrade"] else "-",
        ])
        print(f"  {flags}  {r['name'][:32]:<34}{r['element'][:10]:<12}"
              f"x{int(r['count']):<4}${float(r['value']):>8,.2f}   {r['id']}")
    return 0


def cmd_stats(args):
    from skytracker.analytics.dashboard import dashboard_stats, element_breakdown

    store = _open()
    s = dashboard_stats(store)
    print("\n" + "=" * 50)
    print("  SKYLANDERS COLLECTION")
    print("=" * 50)
    print(f"  Owned:            {s['have']:,} / {s['total']:,}")
    print(f"  Needed:           {s['need']:,}")
    print(f"  For trade:        {s['forTrade']:,}")
    print(f"  Collection value: ${s['totalValue']:,.2f}")
    if s["total"]:
        print("\n  By element:")
        for e in element_breakdown(store):
            print(f"    {e['element']:<12}{e['have']:>4} / {e['total']:<4} ({e['completion_pct']:.1f}%)")
    return 0


def cmd_set(args):
    store = _open()
    if store.item(args.id) is None:
        print(f"  Skylander not found: '{args.id}'")
        return 1
    try:
        rec = store.update_field(args.id, args.field, args.value)
    except ValueError as e:
        print(f"  {e}")
        return 2
    print(f"  {args.id}: {rec.to_dict()}")
    _report_save(store)
    return 0


def cmd_add(args):
    store = _open()
    if store.item(args.id) is None:
        print(f"  Skylander not found: '{args.id}'")
        return 1
    rec = store.add_to_inventory(args.id)
    print(f"  {args.id}: now own {rec.count}")
    _report_save(store)
    return 0


def cmd_trade(args):
    from skytracker.analytics.trade import trade_list_text

    store = _open()
    print(trade_list_text(store, args.search or "", args.element))
    return 0


def cmd_share(args):
    from skytracker.analytics.share import build_share_payload, encode_share_link, owned_ids

    store = _open()
    ids = owned_ids(store) if args.owned else args.ids
    payload = build_share_payload(store, args.title, args.description, args.values, ids)
    print(f"\n{payload['title']} — {len(payload['skylanders'])} Skylanders\n")
    print(encode_share_link(payload))
    if args.save:
        view = store.save_view(args.title, args.description, args.values, ids)
        print(f"\n  Saved view {view.id}")
        _report_save(store)
    return 0


def cmd_export(args):
    from skytracker.excel.collection import export_collection_workbook

    store = _open()
    out = Path(args.output) if args.output else EXPORTS_FOLDER / "Skylanders_Collection.xlsx"
    path = export_collection_workbook(store, out)
    print(f"  Exported {store.item_count():,} Skylanders to {path}")
    return 0


def cmd_reset(args):
    if not args.yes:
        print("  This clears have/need/trade/count/value/notes for every Skylander. Re-run with --yes.")
        return 2
    store = _open()
    store.reset_all()
    print(f"  Reset {store.item_count():,} Skylanders")
    _report_save(store)
    return 0


def cmd_serve(args):
    """Start the API server."""
    import uvicorn
    print(f"\nStarting Skylander Inventory API on port {args.port}...")
    uvicorn.run("skytracker.main:app", host="0.0.0.0", port=args.port, reload=args.reload)
    return 0


def _add_filter_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--element", default=ALL_ELEMENTS, help="Element filter (default: all)")
    p.add_argument("--search", help="Substring of name, element or category")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Skylander Inventory — collection tracker",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", help="Command")

    p = subparsers.add_parser("import", help="Import a catalog")
    p.add_argument("csv", nargs="?", help="CSV file")
    p.add_argument("--sheet", help="Public Google Sheets URL")
    p.set_defaults(func=cmd_import)

    p = subparsers.add_parser("list", help="List the catalog")
    p.add_argument("--status", choices=[s.value for s in StatusFilter], default="all")
    p.add_argument("--sort", choices=[k.value for k in SortKey], default="name")
    p.add_argument("--desc", action="store_true", help="Sort descending")
    _add_filter_args(p)
    p.set_defaults(func=cmd_list)

    p = subparsers.add_parser("stats", help="Collection stats")
    p.set_defaults(func=cmd_stats)

    p = subparsers.add_parser("set", help="Set one inventory field")
    p.add_argument("id")
    p.add_argument("field", help="have|need|forTrade|count|value|notes")
    p.add_argument("value")
    p.set_defaults(func=cmd_set)

    p = subparsers.add_parser("add", help="Own one more of a Skylander")
    p.add_argument("id")
    p.set_defaults(func=cmd_add)

    p = subparsers.add_parser("trade", help="Print the trade list")
    _add_filter_args(p)
    p.set_defaults(func=cmd_trade)

    p = subparsers.add_parser("share", help="Build a share link")
    p.add_argument("ids", nargs="*", help="Skylander ids")
    p.add_argument("--owned", action="store_true", help="Share every owned Skylander")
    p.add_argument("--values", action="store_true", help="Include values")
    p.add_argument("--title", default=DEFAULT_SHARE_TITLE)
    p.add_argument("--description", default=DEFAULT_SHARE_DESCRIPTION)
    p.add_argument("--save", action="store_true", help="Also save as a share view")
    p.set_defaults(func=cmd_share)

    p = subparsers.add_parser("export", help="Export the collection workbook")
    p.add_argument("--output", help="Output .xlsx path")
    p.set_defaults(func=cmd_export)

    p = subparsers.add_parser("reset", help="Clear all ownership data")
    p.add_argument("--yes", action="store_true", help="Confirm")
    p.set_defaults(func=cmd_reset)

    p = subparsers.add_parser("serve", help="Start API server")
    p.add_argument("--port", type=int, default=int(os.environ.get("PORT", "8000")), help="Port (default 8000)")
    p.add_argument("--reload", action="store_true", help="Enable auto-reload")
    p.set_defaults(func=cmd_serve)

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
