"""Tests for warranty status and event colour classes."""

import unittest
from datetime import date, datetime, timedelta, timezone

from tracker.event import EventType
from tracker.product import Product
from tracker.status import (
    DEFAULT_COLOR_CLASS,
    WarrantyStatus,
    days_until_expiry,
    event_color_class,
    warranty_status,
)


def _product(expiry):
    return Product(name="TV", purchase_date=date(2022, 1, 1), warranty_expiry=expiry)


class TestWarrantyStatus(unittest.TestCase):

    def test_active_before_expiry(self):
        now = datetime(2024, 5, 31, 23, 59, tzinfo=timezone.utc)
        self.assertEqual(warranty_status(_product(date(2024, 6, 1)), now), WarrantyStatus.ACTIVE)

    def test_expired_exactly_at_expiry_instant(self):
        now = datetime(2024, 6, 1, tzinfo=timezone.utc)
        self.assertEqual(warranty_status(_product(date(2024, 6, 1)), now), WarrantyStatus.EXPIRED)

    def test_expired_after_expiry(self):
        now = datetime(2024, 6, 1, 0, 0, 1, tzinfo=timezone.utc)
        self.assertEqual(warranty_status(_product(date(2024, 6, 1)), now), WarrantyStatus.EXPIRED)

    def test_one_microsecond_before_is_active(self):
        now = datetime(2024, 6, 1, tzinfo=timezone.utc) - timedelta(microseconds=1)
        self.assertEqual(warranty_status(_product(date(2024, 6, 1)), now), WarrantyStatus.ACTIVE)

    def test_naive_now_is_utc(self):
        self.assertEqual(
            warranty_status(_product(date(2024, 6, 1)), datetime(2024, 6, 1)),
            WarrantyStatus.EXPIRED,
        )

    def test_date_now_is_start_of_day(self):
        p = _product(date(2024, 6, 1))
        self.assertEqual(warranty_status(p, date(2024, 5, 31)), WarrantyStatus.ACTIVE)
        self.assertEqual(warranty_status(p, date(2024, 6, 1)), WarrantyStatus.EXPIRED)

    def test_other_timezones_compare_by_instant(self):
        tz = timezone(timedelta(hours=-5))
        # 2024-05-31 20:00 at UTC-5 is 2024-06-01 01:00 UTC.
        now = datetime(2024, 5, 31, 20, tzinfo=tz)
        self.assertEqual(warranty_status(_product(date(2024, 6, 1)), now), WarrantyStatus.EXPIRED)

    def test_status_values(self):
        self.assertEqual(WarrantyStatus.ACTIVE.value, "Active")
        self.assertEqual(WarrantyStatus.EXPIRED.value, "Expired")


class TestDaysUntilExpiry(unittest.TestCase):

    def test_positive_and_negative(self):
        p = _product(date(2024, 6, 11))
        self.assertEqual(days_until_expiry(p, date(2024, 6, 1)), 10)
        self.assertEqual(days_until_expiry(p, date(2024, 6, 21)), -10)


class TestEventColorClass(unittest.TestCase):

    def test_known_types(self):
        self.assertEqual(event_color_class("purchase"), "bg-green-500")
        self.assertEqual(event_color_class("issue"), "bg-red-500")
        self.assertEqual(event_color_class("contact"), "bg-blue-500")
        self.assertEqual(event_color_class("maintenance"), "bg-purple-500")
        self.assertEqual(event_color_class("escalation"), "bg-orange-500")
        self.assertEqual(event_color_class("resolution"), "bg-teal-500")

    def test_enum_members(self):
        self.assertEqual(event_color_class(EventType.RESOLUTION), "bg-teal-500")

    def test_unknown_type_gets_default(self):
        self.assertEqual(event_color_class("unknown_type"), DEFAULT_COLOR_CLASS)
        self.assertEqual(event_color_class(""), DEFAULT_COLOR_CLASS)

    def test_never_fails(self):
        for value in (None, 3, ["issue"], {"a": 1}):
            self.assertEqual(event_color_class(value), DEFAULT_COLOR_CLASS)


if __name__ == "__main__":
    unittest.main()
