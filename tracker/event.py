"""Timeline events recorded against a product."""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Optional

from tracker.dates import fmt_date, fmt_timestamp, parse_date, parse_timestamp


class EventType(str, Enum):
    """Kinds of things that happen during a product's warranty."""

    PURCHASE = "purchase"
    ISSUE = "issue"
    CONTACT = "contact"
    MAINTENANCE = "maintenance"
    ESCALATION = "escalation"
    RESOLUTION = "resolution"

    @classmethod
    def lookup(cls, value) -> Optional["EventType"]:
        """Return the matching type, or None for an unknown value."""
        try:
            return cls(value)
        except ValueError:
            return None


DEFAULT_EVENT_TYPE = EventType.ISSUE

PURCHASE_EVENT_TITLE = "Product Purchased"
PURCHASE_EVENT_DESCRIPTION = "Warranty begins"


@dataclass(frozen=True)
class Event:
    """A dated entry on a product's timeline.

    ``event_type`` keeps the raw string from the store so rows with a type
    this version does not know about still load and export unchanged; use
    ``kind`` for the parsed value. ``event_date`` is None for rows whose
    date is missing or unreadable.
    """

    product_id: str
    event_date: Optional[date]
    event_type: str
    title: str
    description: str = ""
    event_id: str = ""
    created_at: Optional[datetime] = None

    @property
    def kind(self) -> Optional[EventType]:
        return EventType.lookup(self.event_type)

    def to_record(self) -> dict:
        """Row payload for inserting into the ``events`` resource."""
        return {
            "product_id": self.product_id,
            "event_date": fmt_date(self.event_date),
            "event_type": str(getattr(self.event_type, "value", self.event_type)),
            "title": self.title,
            "description": self.description,
        }

    def to_dict(self) -> dict:
        data = {"id": self.event_id}
        data.update(self.to_record())
        data["created_at"] = fmt_timestamp(self.created_at)
        return data

    @classmethod
    def from_record(cls, data: dict) -> "Event":
        return cls(
            event_id=str(data.get("id", "")),
            product_id=str(data["product_id"]),
            event_date=_lenient_date(data.get("event_date")),
            event_type=data.get("event_type") or "",
            title=data.get("title") or "",
            description=data.get("description") or "",
            created_at=parse_timestamp(data.get("created_at")),
        )


def _lenient_date(value) -> Optional[date]:
    try:
        return parse_date(value)
    except (TypeError, ValueError):
        return None


def purchase_event(product) -> Event:
    """The event synthesized alongside every new product."""
    return Event(
        product_id=product.product_id,
        event_date=product.purchase_date,
        event_type=EventType.PURCHASE.value,
        title=PURCHASE_EVENT_TITLE,
        description=PURCHASE_EVENT_DESCRIPTION,
    )
