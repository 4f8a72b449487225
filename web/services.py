"""Backend service initialization for the web API and CLI."""

import logging

from config import settings

logger = logging.getLogger(__name__)

_memory_store = None


def get_store():
    """Return the record store selected by ``WARRANTEL_STORE``."""
    backend = settings.STORE_BACKEND
    if backend == "rest":
        from tracker.store import RestRecordStore
        if not settings.SUPABASE_URL or not settings.SUPABASE_KEY:
            raise RuntimeError("SUPABASE_URL and SUPABASE_KEY must be set for the rest store")
        return RestRecordStore(
            settings.SUPABASE_URL,
            settings.SUPABASE_KEY,
            timeout=settings.STORE_TIMEOUT_SECONDS,
        )
    if backend == "memory":
        global _memory_store
        if _memory_store is None:
            from tracker.store import MemoryRecordStore
            _memory_store = MemoryRecordStore()
        return _memory_store
    if backend != "json":
        logger.warning("Unknown WARRANTEL_STORE %r, using the JSON file store", backend)
    from tracker.store import JsonRecordStore
    return JsonRecordStore(str(settings.RECORDS_PATH))


def get_assembler(store=None):
    from tracker.timeline import TimelineAssembler
    if store is None:
        store = get_store()
    return TimelineAssembler(store)
