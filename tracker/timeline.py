"""Timeline assembly — product creation, events and ordered timelines."""

import logging
from datetime import date
from typing import Iterable, Optional

from tracker.errors import PartialCreationError, StoreError
from tracker.event import Event, EventType, purchase_event
from tracker.files import FileType, ProductFile
from tracker.product import Product
from tracker.store import RecordStore
from tracker.validation import validate_event_input, validate_product_input

logger = logging.getLogger(__name__)


def _decode(resource: str, record_cls, row: dict):
    """Build a model from a store row, reporting bad rows as StoreError."""
    try:
        return record_cls.from_record(row)
    except (KeyError, TypeError, ValueError) as e:
        logger.error("Unreadable %s row %s: %r", resource, row.get("id"), e)
        raise StoreError(resource, "decode", e) from e


class TimelineAssembler:
    """Reads and writes products and their events through a record store.

    Creating a product is a two-step write with no transaction behind it:
    the product row first, then its purchase event. If the second step
    fails the product stays stored and PartialCreationError is raised so
    the caller can retry with ``add_purchase_event``.
    """

    def __init__(self, store: RecordStore):
        self._store = store

    # ---- Writes ----

    def create_product_with_purchase_event(self, data: dict) -> Product:
        """Validate and store a product, then record its purchase event.

        Raises:
            ValidationError: bad input; nothing is written.
            StoreError: the product insert failed; nothing is written.
            PartialCreationError: the product exists but has no events.
        """
        fields = validate_product_input(data)
        draft = Product(**fields)

        row = self._store.insert("products", draft.to_record())
        product = _decode("products", Product, row)
        logger.info("Created product %s (%s)", product.product_id, product.name)

        try:
            self._insert_purchase_event(product)
        except StoreError as e:
            logger.error(
                "Product %s stored without its purchase event: %s",
                product.product_id, e,
            )
            raise PartialCreationError(product, e) from e
        return product

    def add_purchase_event(self, product: Product) -> Event:
        """Record the "Product Purchased" event for an existing product.

        Safe to repeat: when the product already has a purchase event that
        event is returned and nothing is written.
        """
        existing = self.find_purchase_event(product.product_id)
        if existing is not None:
            logger.info("Product %s already has a purchase event", product.product_id)
            return existing
        return self._insert_purchase_event(product)

    def _insert_purchase_event(self, product: Product) -> Event:
        row = self._store.insert("events", purchase_event(product).to_record())
        return _decode("events", Event, row)

    def add_event(self, product_id: str, data: dict, today=None) -> Event:
        """Validate and store one event for ``product_id``.

        Raises:
            ValidationError: bad input; nothing is written.
            StoreError: the insert failed.
        """
        fields = validate_event_input(product_id, data, today=today)
        draft = Event(
            product_id=fields["product_id"],
            event_date=fields["event_date"],
            event_type=fields["event_type"].value,
            title=fields["title"],
            description=fields["description"],
        )
        row = self._store.insert("events", draft.to_record())
        event = _decode("events", Event, row)
        logger.info(
            "Added %s event %s to product %s",
            event.event_type, event.event_id, event.product_id,
        )
        return event

    # ---- Reads ----

    def list_products(self) -> list[Product]:
        """All products, most recently created first."""
        rows = self._store.select("products", order=[("created_at", False)])
        return [_decode("products", Product, r) for r in rows]

    def get_product(self, product_id: str) -> Optional[Product]:
        rows = self._store.select("products", {"id": product_id})
        return _decode("products", Product, rows[0]) if rows else None

    def find_purchase_event(self, product_id: str) -> Optional[Event]:
        """The product's earliest stored purchase event, if any."""
        rows = self._store.select(
            "events",
            {"product_id": product_id, "event_type": EventType.PURCHASE.value},
            order=[("created_at", True)],
        )
        return _decode("events", Event, rows[0]) if rows else None

    def load_timeline(self, product_id: str) -> list[Event]:
        """Events for a product by date; same-day events in insertion order.

        Events without a readable date go last. Computed afresh on every
        call from the store's current rows.
        """
        rows = self._store.select(
            "events", {"product_id": product_id}, order=[("created_at", True)]
        )
        events = [_decode("events", Event, r) for r in rows]
        # sorted() is stable, so equal dates keep the created_at order.
        return sorted(
            events, key=lambda e: (e.event_date is None, e.event_date or date.min)
        )

    def load_files(self, product_id: str) -> list[ProductFile]:
        rows = self._store.select("files", {"product_id": product_id})
        return [_decode("files", ProductFile, r) for r in rows]


def group_files_by_type(files: Iterable[ProductFile]) -> dict[str, list[ProductFile]]:
    """Split files into receipts and photos. Other types are left out."""
    grouped = {"receipts": [], "photos": []}
    for f in files:
        if f.file_type == FileType.RECEIPT.value:
            grouped["receipts"].append(f)
        elif f.file_type == FileType.PHOTO.value:
            grouped["photos"].append(f)
    return grouped
