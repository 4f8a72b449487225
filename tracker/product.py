"""Core product data model for warranty tracking."""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Optional

from tracker.dates import fmt_date, fmt_timestamp, parse_date, parse_timestamp


class ProductCategory(str, Enum):
    """Categories a product can be filed under."""

    ELECTRONICS = "Electronics"
    APPLIANCE = "Appliance"
    VEHICLE = "Vehicle"
    HOME_AND_GARDEN = "Home & Garden"
    OTHER = "Other"

    @classmethod
    def lookup(cls, value) -> Optional["ProductCategory"]:
        """Return the matching category, or None for an unknown value."""
        try:
            return cls(value)
        except ValueError:
            return None


DEFAULT_CATEGORY = ProductCategory.ELECTRONICS


@dataclass(frozen=True)
class Product:
    """A tracked product and its warranty window.

    ``product_id`` and ``created_at`` are assigned by the record store;
    a Product built from user input carries neither until it is inserted.
    """

    name: str
    purchase_date: date
    warranty_expiry: date
    category: ProductCategory = DEFAULT_CATEGORY
    product_id: str = ""
    created_at: Optional[datetime] = None

    def to_record(self) -> dict:
        """Row payload for inserting into the ``products`` resource."""
        return {
            "name": self.name,
            "category": self.category.value,
            "purchase_date": fmt_date(self.purchase_date),
            "warranty_expiry": fmt_date(self.warranty_expiry),
        }

    def to_dict(self) -> dict:
        """Serialize product to dictionary."""
        data = {"id": self.product_id}
        data.update(self.to_record())
        data["created_at"] = fmt_timestamp(self.created_at)
        return data

    @classmethod
    def from_record(cls, data: dict) -> "Product":
        """Build a product from a store row.

        Unknown categories fall back to ``Other`` and a missing expiry
        falls back to the purchase date, so rows written by other clients
        still load. A row without a name or purchase date raises
        KeyError or ValueError.
        """
        purchase = parse_date(data["purchase_date"])
        if purchase is None:
            raise ValueError("purchase_date is empty")
        return cls(
            product_id=str(data.get("id", "")),
            name=data["name"],
            category=ProductCategory.lookup(data.get("category")) or ProductCategory.OTHER,
            purchase_date=purchase,
            warranty_expiry=parse_date(data.get("warranty_expiry")) or purchase,
            created_at=parse_timestamp(data.get("created_at")),
        )
