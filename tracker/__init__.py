"""
Product Warranty Tracker Module.

Tracks consumer products, their warranty windows and a dated timeline of
what happened to each one (purchase, issues, support contacts,
maintenance, escalations, resolutions).

Features:
- Product and event models with boundary validation
- Active / Expired warranty status
- Timeline assembly with stable same-day ordering
- Deterministic JSON timeline export
- Pluggable record stores (memory, JSON file, PostgREST)
"""

from tracker.errors import PartialCreationError, StoreError, ValidationError
from tracker.event import Event, EventType
from tracker.export import export_filename, export_timeline, render_export
from tracker.files import FileType, ProductFile
from tracker.product import Product, ProductCategory
from tracker.status import WarrantyStatus, event_color_class, warranty_status
from tracker.store import JsonRecordStore, MemoryRecordStore, RecordStore, RestRecordStore
from tracker.timeline import TimelineAssembler, group_files_by_type

__all__ = [
    "Product",
    "ProductCategory",
    "Event",
    "EventType",
    "ProductFile",
    "FileType",
    "WarrantyStatus",
    "warranty_status",
    "event_color_class",
    "TimelineAssembler",
    "group_files_by_type",
    "export_timeline",
    "render_export",
    "export_filename",
    "RecordStore",
    "MemoryRecordStore",
    "JsonRecordStore",
    "RestRecordStore",
    "ValidationError",
    "StoreError",
    "PartialCreationError",
]
