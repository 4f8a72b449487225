"""Timeline export to a portable JSON document.

The document shape is fixed:

    {
      "product": "...",
      "purchaseDate": "YYYY-MM-DD",
      "warrantyExpiry": "YYYY-MM-DD",
      "events": [{"date": ..., "type": ..., "title": ..., "description": ...}]
    }

Nothing time- or run-dependent goes into it, so the same product and
events always render to the same bytes.
"""

import json
import re
from pathlib import Path
from typing import Iterable

from tracker.dates import fmt_date
from tracker.event import Event
from tracker.product import Product


def export_timeline(product: Product, events: Iterable[Event]) -> dict:
    """Build the export document, keeping events in the order given."""
    return {
        "product": product.name,
        "purchaseDate": fmt_date(product.purchase_date),
        "warrantyExpiry": fmt_date(product.warranty_expiry),
        "events": [
            {
                "date": fmt_date(e.event_date),
                "type": e.event_type,
                "title": e.title,
                "description": e.description,
            }
            for e in events
        ],
    }


def render_export(document: dict) -> str:
    return json.dumps(document, indent=2, ensure_ascii=False)


def export_filename(product_name: str) -> str:
    """Suggested file name, e.g. ``Cordless_Drill_timeline.json``."""
    stem = re.sub(r"\s+", "_", product_name)
    return f"{stem}_timeline.json"


def write_export(document: dict, path: str) -> Path:
    """Write a rendered export document to ``path``."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(render_export(document), encoding="utf-8")
    return target
