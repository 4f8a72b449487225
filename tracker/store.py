"""Record store adapters.

The tracker only needs three things from persistence: insert one row and
get it back with its assigned ``id`` and ``created_at``, select every row
matching equality filters, and order the result. Adapters:

- MemoryRecordStore: process-local lists, used by tests and ``memory`` mode.
- JsonRecordStore: a single JSON file on disk (the local default).
- RestRecordStore: a PostgREST endpoint such as a Supabase project.
"""

import json
import logging
import threading
import urllib.error
import urllib.parse
import urllib.request
import uuid
from abc import ABC, abstractmethod
from datetime import timedelta
from pathlib import Path
from typing import Optional, Sequence

from tracker.dates import parse_timestamp, utcnow
from tracker.errors import StoreError

logger = logging.getLogger(__name__)

RESOURCES = ("products", "events", "files")

# (field, ascending) pairs, applied left to right.
Ordering = Sequence[tuple[str, bool]]


class RecordStore(ABC):
    """Interface for record persistence."""

    @abstractmethod
    def insert(self, resource: str, row: dict) -> dict:
        """Insert one row and return it with ``id`` and ``created_at`` set."""
        ...

    @abstractmethod
    def select(
        self,
        resource: str,
        filters: Optional[dict] = None,
        order: Ordering = (),
    ) -> list[dict]:
        """Return all rows whose fields equal ``filters``, sorted by ``order``.

        Rows that tie on every ordering field keep insertion order.
        """
        ...


def _check_resource(resource: str) -> None:
    if resource not in RESOURCES:
        raise ValueError(f"Unknown resource: {resource}")


def _sort_rows(rows: list[dict], order: Ordering) -> list[dict]:
    # Stable sorts applied from the least significant key keep ties in
    # insertion order.
    for field, ascending in reversed(list(order)):
        rows = sorted(
            rows,
            key=lambda r: (r.get(field) is not None, r.get(field) or ""),
            reverse=not ascending,
        )
    return rows


class MemoryRecordStore(RecordStore):
    """Rows held in memory, in insertion order."""

    def __init__(self):
        self._rows: dict[str, list[dict]] = {name: [] for name in RESOURCES}
        self._lock = threading.Lock()
        self._last_created = None

    def _next_created_at(self) -> str:
        # Strictly increasing, so created_at alone reproduces insertion order.
        now = utcnow()
        if self._last_created is not None and now <= self._last_created:
            now = self._last_created + timedelta(microseconds=1)
        self._last_created = now
        return now.isoformat(timespec="microseconds")

    def insert(self, resource: str, row: dict) -> dict:
        _check_resource(resource)
        record = dict(row)
        record["id"] = uuid.uuid4().hex[:12]
        with self._lock:
            record["created_at"] = self._next_created_at()
            self._rows[resource].append(record)
            try:
                self._persist()
            except StoreError:
                self._rows[resource].pop()
                raise
        return dict(record)

    def select(self, resource, filters=None, order=()):
        _check_resource(resource)
        filters = filters or {}
        with self._lock:
            rows = [
                dict(r) for r in self._rows[resource]
                if all(str(r.get(k)) == str(v) for k, v in filters.items())
            ]
        return _sort_rows(rows, order)

    def _persist(self) -> None:
        """Hook for subclasses that keep a durable copy."""


class JsonRecordStore(MemoryRecordStore):
    """Rows persisted to a single JSON document on every insert."""

    def __init__(self, path: str):
        super().__init__()
        self._path = Path(path)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._load()

    def _persist(self) -> None:
        try:
            self._path.write_text(json.dumps(self._rows, indent=2, default=str))
        except OSError as e:
            logger.error("Could not write record store %s: %s", self._path, e)
            raise StoreError("records", "save", e) from e
        logger.debug("Record store saved to %s", self._path)

    def _load(self) -> None:
        if not self._path.exists():
            return
        try:
            data = json.loads(self._path.read_text() or "{}")
        except (json.JSONDecodeError, OSError) as e:
            logger.error("Could not read record store %s: %s", self._path, e)
            raise StoreError("records", "load", e) from e
        for name in RESOURCES:
            self._rows[name] = list(data.get(name, []))
            for row in self._rows[name]:
                created = parse_timestamp(row.get("created_at"))
                if created and (self._last_created is None or created > self._last_created):
                    self._last_created = created


class RestRecordStore(RecordStore):
    """PostgREST client (the API a Supabase project exposes under /rest/v1)."""

    def __init__(self, base_url: str, api_key: str, timeout: float = 10.0):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout

    def _headers(self) -> dict:
        return {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    def _url(self, resource: str, params: Optional[list] = None) -> str:
        url = f"{self.base_url}/rest/v1/{resource}"
        if params:
            url += "?" + urllib.parse.urlencode(params)
        return url

    def _request(self, req: urllib.request.Request, resource: str, step: str):
        try:
            with urllib.request.urlopen(req, timeout=self.timeout) as resp:
                body = resp.read()
        except urllib.error.HTTPError as e:
            logger.error("Store %s %s failed with HTTP %s", step, resource, e.code)
            raise StoreError(resource, step, e) from e
        except (urllib.error.URLError, OSError) as e:
            logger.error("Store %s %s failed: %s", step, resource, e)
            raise StoreError(resource, step, e) from e
        try:
            return json.loads(body or b"null")
        except json.JSONDecodeError as e:
            raise StoreError(resource, step, e) from e

    def insert(self, resource: str, row: dict) -> dict:
        _check_resource(resource)
        headers = self._headers()
        headers["Prefer"] = "return=representation"
        req = urllib.request.Request(
            self._url(resource),
            data=json.dumps([row]).encode(),
            headers=headers,
            method="POST",
        )
        data = self._request(req, resource, "insert")
        if not isinstance(data, list) or not data:
            raise StoreError(resource, "insert", ValueError("empty response"))
        return data[0]

    def select(self, resource, filters=None, order=()):
        _check_resource(resource)
        params = [("select", "*")]
        for key, value in (filters or {}).items():
            params.append((key, f"eq.{value}"))
        if order:
            params.append((
                "order",
                ",".join(f"{field}.{'asc' if asc else 'desc'}" for field, asc in order),
            ))
        req = urllib.request.Request(
            self._url(resource, params), headers=self._headers(), method="GET"
        )
        data = self._request(req, resource, "query")
        if not isinstance(data, list):
            raise StoreError(resource, "query", ValueError("expected a list of rows"))
        return data
