"""Tests for the Product and Event data models."""

import unittest
from datetime import date, datetime, timezone

from tracker.event import Event, EventType, purchase_event
from tracker.files import FileType, ProductFile
from tracker.product import Product, ProductCategory


class TestProduct(unittest.TestCase):
    """Test Product dataclass and its record mapping."""

    def _make_product(self, **overrides):
        defaults = dict(
            name="Cordless Drill",
            purchase_date=date(2024, 1, 1),
            warranty_expiry=date(2026, 1, 1),
        )
        defaults.update(overrides)
        return Product(**defaults)

    def test_basic_creation(self):
        p = self._make_product()
        self.assertEqual(p.name, "Cordless Drill")
        self.assertEqual(p.category, ProductCategory.ELECTRONICS)
        self.assertEqual(p.product_id, "")
        self.assertIsNone(p.created_at)

    def test_products_are_immutable(self):
        p = self._make_product()
        with self.assertRaises(AttributeError):
            p.name = "Other"

    def test_to_record_omits_store_fields(self):
        p = self._make_product(category=ProductCategory.HOME_AND_GARDEN)
        self.assertEqual(p.to_record(), {
            "name": "Cordless Drill",
            "category": "Home & Garden",
            "purchase_date": "2024-01-01",
            "warranty_expiry": "2026-01-01",
        })

    def test_from_record(self):
        p = Product.from_record({
            "id": 42,
            "name": "Fridge",
            "category": "Appliance",
            "purchase_date": "2023-05-02",
            "warranty_expiry": "2025-05-02",
            "created_at": "2023-05-02T10:00:00+00:00",
        })
        self.assertEqual(p.product_id, "42")
        self.assertEqual(p.category, ProductCategory.APPLIANCE)
        self.assertEqual(p.purchase_date, date(2023, 5, 2))
        self.assertEqual(p.warranty_expiry, date(2025, 5, 2))
        self.assertEqual(p.created_at, datetime(2023, 5, 2, 10, tzinfo=timezone.utc))

    def test_from_record_unknown_category_falls_back_to_other(self):
        p = Product.from_record({
            "id": "a1",
            "name": "Kayak",
            "category": "Sports",
            "purchase_date": "2023-05-02",
            "warranty_expiry": "2024-05-02",
        })
        self.assertEqual(p.category, ProductCategory.OTHER)

    def test_from_record_missing_expiry_uses_purchase_date(self):
        p = Product.from_record({
            "id": "a1",
            "name": "Kettle",
            "purchase_date": "2023-05-02",
            "warranty_expiry": None,
        })
        self.assertEqual(p.warranty_expiry, date(2023, 5, 2))

    def test_from_record_rejects_rows_without_name_or_purchase_date(self):
        with self.assertRaises(KeyError):
            Product.from_record({"id": "p1", "purchase_date": "2024-01-01"})
        with self.assertRaises(ValueError):
            Product.from_record({"id": "p1", "name": "Drill", "purchase_date": None})
        with self.assertRaises(ValueError):
            Product.from_record({"id": "p1", "name": "Drill", "purchase_date": "last spring"})

    def test_to_dict_includes_id_and_created_at(self):
        p = self._make_product(
            product_id="p1",
            created_at=datetime(2024, 1, 1, 9, 30, tzinfo=timezone.utc),
        )
        data = p.to_dict()
        self.assertEqual(data["id"], "p1")
        self.assertEqual(data["created_at"], "2024-01-01T09:30:00+00:00")


class TestProductCategory(unittest.TestCase):
    def test_closed_set(self):
        self.assertEqual(
            [c.value for c in ProductCategory],
            ["Electronics", "Appliance", "Vehicle", "Home & Garden", "Other"],
        )

    def test_lookup_unknown_returns_none(self):
        self.assertIsNone(ProductCategory.lookup("Toys"))
        self.assertEqual(ProductCategory.lookup("Vehicle"), ProductCategory.VEHICLE)


class TestEvent(unittest.TestCase):

    def test_purchase_event_for_product(self):
        p = Product(
            name="Drill",
            purchase_date=date(2024, 1, 1),
            warranty_expiry=date(2024, 1, 1),
            product_id="p1",
        )
        e = purchase_event(p)
        self.assertEqual(e.product_id, "p1")
        self.assertEqual(e.event_type, "purchase")
        self.assertEqual(e.title, "Product Purchased")
        self.assertEqual(e.description, "Warranty begins")
        self.assertEqual(e.event_date, date(2024, 1, 1))

    def test_unknown_type_is_kept_verbatim(self):
        e = Event.from_record({
            "id": "e1",
            "product_id": "p1",
            "event_date": "2024-02-01",
            "event_type": "recall",
            "title": "Recall notice",
            "description": None,
        })
        self.assertEqual(e.event_type, "recall")
        self.assertIsNone(e.kind)
        self.assertEqual(e.description, "")

    def test_kind_parses_known_type(self):
        e = Event(
            product_id="p1",
            event_date=date(2024, 2, 1),
            event_type="escalation",
            title="Escalated",
        )
        self.assertEqual(e.kind, EventType.ESCALATION)

    def test_to_record_accepts_enum_type(self):
        e = Event(
            product_id="p1",
            event_date=date(2024, 2, 1),
            event_type=EventType.CONTACT,
            title="Called support",
        )
        self.assertEqual(e.to_record()["event_type"], "contact")

    def test_from_record_missing_or_bad_date_is_none(self):
        for raw in (None, "", "soon"):
            e = Event.from_record({
                "id": "e1", "product_id": "p1", "event_date": raw,
                "event_type": "issue", "title": "Undated",
            })
            self.assertIsNone(e.event_date)
            self.assertIsNone(e.to_dict()["event_date"])


class TestProductFile(unittest.TestCase):
    def test_from_record(self):
        f = ProductFile.from_record({
            "id": 7, "product_id": 3, "file_type": "receipt", "file_name": "r.pdf",
        })
        self.assertEqual(f.file_id, "7")
        self.assertEqual(f.product_id, "3")
        self.assertEqual(f.file_type, FileType.RECEIPT.value)


if __name__ == "__main__":
    unittest.main()
