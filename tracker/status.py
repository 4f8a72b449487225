"""Warranty status and event display categories."""

from datetime import date, datetime, timezone
from enum import Enum

from tracker.dates import start_of_day_utc
from tracker.event import EventType


class WarrantyStatus(str, Enum):
    ACTIVE = "Active"
    EXPIRED = "Expired"


EVENT_COLOR_CLASSES = {
    EventType.PURCHASE.value: "bg-green-500",
    EventType.ISSUE.value: "bg-red-500",
    EventType.CONTACT.value: "bg-blue-500",
    EventType.MAINTENANCE.value: "bg-purple-500",
    EventType.ESCALATION.value: "bg-orange-500",
    EventType.RESOLUTION.value: "bg-teal-500",
}
DEFAULT_COLOR_CLASS = "bg-gray-500"


def _as_instant(now) -> datetime:
    if isinstance(now, datetime):
        return now if now.tzinfo else now.replace(tzinfo=timezone.utc)
    return start_of_day_utc(now)


def warranty_status(product, now) -> WarrantyStatus:
    """Active while the expiry date's start (UTC) is strictly after ``now``.

    ``now`` may be a datetime (naive values are UTC) or a date, which is
    taken as the start of that day.
    """
    if start_of_day_utc(product.warranty_expiry) > _as_instant(now):
        return WarrantyStatus.ACTIVE
    return WarrantyStatus.EXPIRED


def days_until_expiry(product, today: date) -> int:
    """Days left on the warranty; negative once it has lapsed."""
    return (product.warranty_expiry - today).days


def event_color_class(event_type) -> str:
    """Display class for an event type. Unknown types get the neutral class."""
    key = getattr(event_type, "value", event_type)
    if not isinstance(key, str):
        return DEFAULT_COLOR_CLASS
    return EVENT_COLOR_CLASSES.get(key, DEFAULT_COLOR_CLASS)
