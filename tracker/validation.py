"""Input validation at the boundary of every write.

Inputs are plain mappings as they arrive from a form, a JSON body or the
CLI. Each validator returns a cleaned copy or raises ValidationError
before anything touches the record store.

No cross-field date checks are made: a warranty may expire before the
purchase date and events may be dated anywhere.
"""

from datetime import date
from typing import Optional

from tracker.dates import parse_date
from tracker.errors import ValidationError
from tracker.event import DEFAULT_EVENT_TYPE, EventType
from tracker.product import DEFAULT_CATEGORY, ProductCategory


def _text(data: dict, key: str) -> str:
    value = data.get(key)
    return value.strip() if isinstance(value, str) else ""


def _date_field(entity: str, field: str, value) -> Optional[date]:
    try:
        return parse_date(value)
    except (TypeError, ValueError):
        raise ValidationError(
            entity, field, f"Invalid {field}: {value!r} (expected YYYY-MM-DD)"
        ) from None


def default_warranty_expiry(data: dict):
    """Warranty expiry from the input, falling back to the purchase date."""
    return data.get("warranty_expiry") or data.get("purchase_date")


def validate_product_input(data: dict) -> dict:
    """Check a new product's fields and return them normalized.

    Raises:
        ValidationError: name or purchase_date missing, a date is
            malformed, or the category is not one of ProductCategory.
    """
    name = _text(data, "name")
    if not name:
        raise ValidationError("product", "name", "Product name is required")

    purchase_date = _date_field("product", "purchase_date", data.get("purchase_date"))
    if purchase_date is None:
        raise ValidationError("product", "purchase_date", "Purchase date is required")

    warranty_expiry = _date_field("product", "warranty_expiry", default_warranty_expiry(data))

    raw_category = data.get("category") or DEFAULT_CATEGORY.value
    category = ProductCategory.lookup(raw_category)
    if category is None:
        raise ValidationError("product", "category", f"Invalid category: {raw_category}")

    return {
        "name": name,
        "category": category,
        "purchase_date": purchase_date,
        "warranty_expiry": warranty_expiry,
    }


def validate_event_input(product_id, data: dict, today: Optional[date] = None) -> dict:
    """Check a new event's fields and return them normalized.

    ``event_date`` defaults to ``today`` (or the current date) and
    ``event_type`` to ``issue`` when omitted.

    Raises:
        ValidationError: no product designated, title missing, a malformed
            date, or an event type outside EventType.
    """
    if not product_id:
        raise ValidationError("event", "product_id", "A product must be selected")

    title = _text(data, "title")
    if not title:
        raise ValidationError("event", "title", "Event title is required")

    event_date = _date_field("event", "event_date", data.get("event_date"))
    if event_date is None:
        event_date = today or date.today()

    raw_type = data.get("event_type") or DEFAULT_EVENT_TYPE.value
    event_type = EventType.lookup(raw_type)
    if event_type is None:
        raise ValidationError("event", "event_type", f"Invalid event type: {raw_type}")

    description = data.get("description") or ""

    return {
        "product_id": str(product_id),
        "event_date": event_date,
        "event_type": event_type,
        "title": title,
        "description": str(description),
    }
