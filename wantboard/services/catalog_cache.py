"""Process-wide catalog caches with read-time freshness."""

import time
from collections import OrderedDict
from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, Protocol, TypeVar


class _Timestamped(Protocol):
    @property
    def fetched_at(self) -> float: ...


E = TypeVar("E", bound=_Timestamped)

DEFAULT_TTL_SECONDS = 24 * 60 * 60


@dataclass(frozen=True, slots=True)
class CatalogEntry:
    """A resolved card, keyed by the lower-cased (name, edition) query."""

    canonical_name: str
    edition_code: str
    edition_name: str
    fetched_at: float


@dataclass(frozen=True, slots=True)
class EditionEntry:
    """A resolved edition, keyed by lower-cased code or free-text name."""

    edition_name: str
    edition_code: str
    fetched_at: float


class FreshnessCache(Generic[E]):
    """
    Keyed cache where entries older than the TTL read as absent.

    Stale entries are not evicted; they are overwritten by the next
    successful lookup. With `max_entries` set, the least recently used
    entry is dropped once the bound is exceeded.
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        max_entries: int | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._ttl_seconds = max(ttl_seconds, 0.0)
        self._max_entries = max_entries
        self._clock = clock
        self._items: OrderedDict[str, E] = OrderedDict()

    def now(self) -> float:
        """Current time on this cache's clock, for stamping new entries."""
        return self._clock()

    def get(self, key: str) -> E | None:
        entry = self._items.get(key)
        if entry is None:
            return None
        if self._clock() - entry.fetched_at >= self._ttl_seconds:
            return None
        self._items.move_to_end(key)
        return entry

    def set(self, key: str, entry: E) -> None:
        self._items[key] = entry
        self._items.move_to_end(key)
        if self._max_entries is not None:
            while len(self._items) > self._max_entries:
                self._items.popitem(last=False)

    def clear(self) -> None:
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, key: object) -> bool:
        return key in self._items
