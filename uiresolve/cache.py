"""Per-engine cache of the last selector that resolved each element."""

from __future__ import annotations

from uiresolve.logger import get_logger
from uiresolve.models import CacheEntry, CacheStats, CompiledSelector

log = get_logger(__name__)


class ResolutionCache:
    """Maps logical element names to the selector that last found them.

    Each entry keeps the visibility requirement of the strategy that
    produced it, so a hidden element found by a strategy that allows
    hidden elements stays servable from the cache. Entries are optimistic:
    the engine revalidates them on every use and evicts them on the first
    miss. Insertion and eviction are idempotent.
    """

    def __init__(self) -> None:
        self._entries: dict[str, CacheEntry] = {}

    def get(self, element_name: str) -> CacheEntry | None:
        return self._entries.get(element_name)

    def put(
        self,
        element_name: str,
        selector: CompiledSelector,
        requires_visibility: bool = True,
    ) -> None:
        self._entries[element_name] = CacheEntry(
            selector=selector, requires_visibility=requires_visibility
        )
        log.debug(
            "cache_put",
            element=element_name,
            selector=str(selector),
            requires_visibility=requires_visibility,
        )

    def evict(self, element_name: str) -> None:
        if self._entries.pop(element_name, None) is not None:
            log.debug("cache_evict", element=element_name)

    def clear(self) -> None:
        self._entries.clear()
        log.debug("cache_cleared")

    def stats(self) -> CacheStats:
        return CacheStats(size=len(self._entries), names=list(self._entries))

    def __contains__(self, element_name: object) -> bool:
        return element_name in self._entries

    def __len__(self) -> int:
        return len(self._entries)
