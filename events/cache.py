"""Cache keys for catalog data.

Only event metadata is cached. Ticket inventory and order summaries are
always computed from a fresh read.
"""

from django.conf import settings
from django.core.cache import cache

LIST_VERSION_KEY = "events:list:version"


def list_key(category: str | None = None) -> str:
    version = cache.get_or_set(LIST_VERSION_KEY, 1, timeout=None)
    return f"events:list:v{version}:{category or 'all'}"


def detail_key(event_id: str) -> str:
    return f"events:{event_id}"


def timeout() -> int:
    return getattr(settings, "TICKETING_CACHE_TIMEOUT", 300)


def invalidate_event(event_id: str) -> None:
    """Drop the detail entry and every cached listing."""
    cache.delete(detail_key(event_id))
    try:
        cache.incr(LIST_VERSION_KEY)
    except ValueError:
        cache.set(LIST_VERSION_KEY, 2, timeout=None)
