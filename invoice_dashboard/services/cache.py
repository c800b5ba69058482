"""
Path-level page cache.

Rendered views are cached by their logical path (e.g. "/dashboard/invoices").
Mutations call revalidate_path() so the next request for that path recomputes
it instead of serving a stale copy.
"""

import logging
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


class PageCache:
    """Process-local map from logical path to rendered payload."""

    def __init__(self) -> None:
        self._entries: Dict[str, Any] = {}

    def get(self, path: str) -> Optional[Any]:
        return self._entries.get(path)

    def set(self, path: str, value: Any) -> None:
        self._entries[path] = value

    def revalidate_path(self, path: str) -> None:
        """Mark the cached rendering of `path` stale. No-op if nothing is cached."""
        if self._entries.pop(path, None) is not None:
            logger.info(f"Revalidated cached view for {path}")
        else:
            logger.debug(f"Revalidate requested for uncached path {path}")

    def clear(self) -> None:
        self._entries.clear()


# Shared by every request in this process
page_cache = PageCache()


def get_page_cache() -> PageCache:
    """Return the process-wide page cache."""
    return page_cache
