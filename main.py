#!/usr/bin/env python3
"""
Warrantel - Product Warranty Tracker, Main Entry Point.

Usage:
    python main.py product add <name> --purchase-date YYYY-MM-DD [--expiry YYYY-MM-DD] [--category <c>]
    python main.py product list
    python main.py product show <product_id>
    python main.py event add <product_id> <title> [--date YYYY-MM-DD] [--type <t>] [--description <text>]
    python main.py event purchase <product_id>
    python main.py timeline show <product_id>
    python main.py timeline export <product_id> [--output file.json]
    python main.py serve [--host 0.0.0.0] [--port 5000]
"""

import argparse
import logging
import sys

from dotenv import load_dotenv
load_dotenv()  # before settings are read

from config import settings
from tracker.dates import fmt_date, utcnow
from tracker.errors import PartialCreationError, WarrantelError
from tracker.event import DEFAULT_EVENT_TYPE, EventType
from tracker.export import export_filename, export_timeline, write_export
from tracker.product import DEFAULT_CATEGORY, ProductCategory
from tracker.status import days_until_expiry, warranty_status
from tracker.timeline import group_files_by_type
from web.services import get_assembler

logger = logging.getLogger("warrantel")


def _require_product(assembler, product_id):
    product = assembler.get_product(product_id)
    if product is None:
        print(f"Product not found: {product_id}", file=sys.stderr)
    return product


# ============================================================
# Product Commands
# ============================================================

def cmd_product_add(args):
    """Add a product and its purchase event."""
    assembler = get_assembler()
    product = assembler.create_product_with_purchase_event({
        "name": args.name,
        "category": args.category,
        "purchase_date": args.purchase_date,
        "warranty_expiry": args.expiry,
    })
    print(f"Product added: {product.name} ({product.category.value})")
    print(f"  ID: {product.product_id}")
    print(f"  Purchased: {product.purchase_date.isoformat()}")
    print(f"  Warranty Expiry: {product.warranty_expiry.isoformat()}")
    return 0


def cmd_product_list(args):
    """List tracked products, newest first."""
    products = get_assembler().list_products()
    if not products:
        print("No products added yet.")
        return 0

    now = utcnow()
    print(f"\n{'ID':14s} {'Name':30s} {'Category':14s} {'Purchased':11s} {'Expires':11s} {'Status':8s}")
    print("-" * 95)
    for p in products:
        print(
            f"{p.product_id:14s} {p.name:30s} {p.category.value:14s} "
            f"{p.purchase_date.isoformat():11s} {p.warranty_expiry.isoformat():11s} "
            f"{warranty_status(p, now).value:8s}"
        )
    print(f"\nTotal: {len(products)} product(s)")
    return 0


def cmd_product_show(args):
    """Show one product with its documents and photos."""
    assembler = get_assembler()
    product = _require_product(assembler, args.product_id)
    if product is None:
        return 1

    now = utcnow()
    print(f"{product.name} ({product.category.value})")
    print(f"  Purchased:        {product.purchase_date.isoformat()}")
    print(f"  Warranty expires: {product.warranty_expiry.isoformat()}")
    print(f"  Status:           {warranty_status(product, now).value} "
          f"({days_until_expiry(product, now.date())} days)")

    grouped = group_files_by_type(assembler.load_files(product.product_id))
    for label, key in (("Receipts", "receipts"), ("Photos", "photos")):
        print(f"  {label}:")
        if not grouped[key]:
            print("    (none)")
        for f in grouped[key]:
            print(f"    - {f.file_name}")
    return 0


# ============================================================
# Event Commands
# ============================================================

def cmd_event_add(args):
    """Add an event to a product's timeline."""
    assembler = get_assembler()
    if _require_product(assembler, args.product_id) is None:
        return 1
    event = assembler.add_event(args.product_id, {
        "title": args.title,
        "event_date": args.date,
        "event_type": args.type,
        "description": args.description or "",
    }, today=utcnow().date())
    print(f"Event added: [{event.event_type}] {event.title} on {event.event_date.isoformat()}")
    return 0


def cmd_event_purchase(args):
    """Record a missing purchase event for a product."""
    assembler = get_assembler()
    product = _require_product(assembler, args.product_id)
    if product is None:
        return 1
    existing = assembler.find_purchase_event(product.product_id)
    if existing:
        print(f"{product.name} already has a purchase event ({fmt_date(existing.event_date)})")
        return 0
    event = assembler.add_purchase_event(product)
    print(f"Purchase event recorded for {product.name} on {event.event_date.isoformat()}")
    return 0


# ============================================================
# Timeline Commands
# ============================================================

def cmd_timeline_show(args):
    """Print a product's timeline in date order."""
    assembler = get_assembler()
    product = _require_product(assembler, args.product_id)
    if product is None:
        return 1

    events = assembler.load_timeline(product.product_id)
    print(f"\nTimeline: {product.name}\n")
    for e in events:
        print(f"  {fmt_date(e.event_date) or 'undated':10s}  {e.event_type.upper():12s} {e.title}")
        if e.description:
            print(f"              {e.description}")
    print(f"\n{len(events)} event(s)")
    return 0


def cmd_timeline_export(args):
    """Export a product's timeline as JSON."""
    assembler = get_assembler()
    product = _require_product(assembler, args.product_id)
    if product is None:
        return 1

    document = export_timeline(product, assembler.load_timeline(product.product_id))
    output = args.output or str(settings.EXPORT_DIR / export_filename(product.name))
    path = write_export(document, output)
    print(f"Timeline exported to: {path}")
    return 0


def cmd_serve(args):
    """Run the JSON API server."""
    from web import create_app
    create_app().run(host=args.host, port=args.port, debug=args.debug)
    return 0


# ============================================================
# Parser
# ============================================================

def build_parser():
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        description="Warrantel - track products, warranties and their timelines"
    )
    subparsers = parser.add_subparsers(dest="module", help="Module")

    # --- Product commands ---
    prod_parser = subparsers.add_parser("product", help="Tracked products")
    prod_sub = prod_parser.add_subparsers(dest="action")

    add = prod_sub.add_parser("add", help="Add a product")
    add.add_argument("name", help="Product name")
    add.add_argument("--purchase-date", required=True, help="Purchase date (YYYY-MM-DD)")
    add.add_argument("--expiry", help="Warranty expiry (YYYY-MM-DD), defaults to purchase date")
    add.add_argument(
        "--category",
        choices=[c.value for c in ProductCategory],
        default=DEFAULT_CATEGORY.value,
    )
    add.set_defaults(func=cmd_product_add)

    pl = prod_sub.add_parser("list", help="List products")
    pl.set_defaults(func=cmd_product_list)

    ps = prod_sub.add_parser("show", help="Show a product")
    ps.add_argument("product_id", help="Product ID")
    ps.set_defaults(func=cmd_product_show)

    # --- Event commands ---
    evt_parser = subparsers.add_parser("event", help="Timeline events")
    evt_sub = evt_parser.add_subparsers(dest="action")

    ea = evt_sub.add_parser("add", help="Add an event")
    ea.add_argument("product_id", help="Product ID")
    ea.add_argument("title", help="Short title")
    ea.add_argument("--date", help="Event date (YYYY-MM-DD), defaults to today")
    ea.add_argument(
        "--type",
        choices=[t.value for t in EventType],
        default=DEFAULT_EVENT_TYPE.value,
    )
    ea.add_argument("--description", help="Details")
    ea.set_defaults(func=cmd_event_add)

    ep = evt_sub.add_parser("purchase", help="Record a missing purchase event")
    ep.add_argument("product_id", help="Product ID")
    ep.set_defaults(func=cmd_event_purchase)

    # --- Timeline commands ---
    tl_parser = subparsers.add_parser("timeline", help="Product timelines")
    tl_sub = tl_parser.add_subparsers(dest="action")

    tshow = tl_sub.add_parser("show", help="Print a timeline")
    tshow.add_argument("product_id", help="Product ID")
    tshow.set_defaults(func=cmd_timeline_show)

    texp = tl_sub.add_parser("export", help="Export a timeline to JSON")
    texp.add_argument("product_id", help="Product ID")
    texp.add_argument("--output", help="Output file path")
    texp.set_defaults(func=cmd_timeline_export)

    # --- Server ---
    srv = subparsers.add_parser("serve", help="Run the JSON API")
    srv.add_argument("--host", default="127.0.0.1")
    srv.add_argument("--port", type=int, default=5000)
    srv.add_argument("--debug", action="store_true")
    srv.set_defaults(func=cmd_serve)

    return parser


def main(argv=None):
    logging.basicConfig(level=settings.LOG_LEVEL, format=settings.LOG_FORMAT)

    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.module:
        parser.print_help()
        return 1

    if not hasattr(args, "func"):
        parser.parse_args([args.module, "--help"])
        return 1

    try:
        return args.func(args)
    except PartialCreationError as e:
        print(f"Error: {e}", file=sys.stderr)
        print(
            f"  Retry with: python main.py event purchase {e.product.product_id}",
            file=sys.stderr,
        )
        return 2
    except WarrantelError as e:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
