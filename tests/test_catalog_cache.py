"""Tests for the freshness cache."""

import pytest

from wantboard.services.catalog_cache import CatalogEntry, EditionEntry, FreshnessCache

TTL = 24 * 60 * 60


class FakeClock:
    def __init__(self, now: float = 0.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(now=1_700_000_000.0)


def make_entry(fetched_at: float, name: str = "Lightning Bolt") -> CatalogEntry:
    return CatalogEntry(
        canonical_name=name,
        edition_code="m25",
        edition_name="Masters 25",
        fetched_at=fetched_at,
    )


class TestFreshness:
    def test_fresh_entry_is_returned(self, clock: FakeClock) -> None:
        """An entry inside the window is a hit."""
        cache: FreshnessCache[CatalogEntry] = FreshnessCache(TTL, clock=clock)
        entry = make_entry(clock.now)
        cache.set("lightning bolt", entry)

        clock.now += TTL - 1

        assert cache.get("lightning bolt") == entry

    def test_stale_entry_reads_as_absent(self, clock: FakeClock) -> None:
        """An entry at or past the window is a miss."""
        cache: FreshnessCache[CatalogEntry] = FreshnessCache(TTL, clock=clock)
        cache.set("lightning bolt", make_entry(clock.now))

        clock.now += TTL

        assert cache.get("lightning bolt") is None

    def test_stale_entry_is_not_evicted(self, clock: FakeClock) -> None:
        """Reading a stale entry leaves it in place."""
        cache: FreshnessCache[CatalogEntry] = FreshnessCache(TTL, clock=clock)
        cache.set("lightning bolt", make_entry(clock.now))
        clock.now += TTL + 1

        cache.get("lightning bolt")

        assert "lightning bolt" in cache
        assert len(cache) == 1

    def test_stale_entry_is_replaced_on_set(self, clock: FakeClock) -> None:
        """A new lookup overwrites the stale row."""
        cache: FreshnessCache[CatalogEntry] = FreshnessCache(TTL, clock=clock)
        cache.set("bolt", make_entry(clock.now, name="Old"))
        clock.now += TTL + 1

        cache.set("bolt", make_entry(cache.now(), name="Lightning Bolt"))

        cached = cache.get("bolt")
        assert cached is not None
        assert cached.canonical_name == "Lightning Bolt"

    def test_missing_key(self, clock: FakeClock) -> None:
        cache: FreshnessCache[EditionEntry] = FreshnessCache(TTL, clock=clock)

        assert cache.get("m25") is None

    def test_now_uses_injected_clock(self, clock: FakeClock) -> None:
        """Entries are stamped from the cache's clock."""
        cache: FreshnessCache[EditionEntry] = FreshnessCache(TTL, clock=clock)

        assert cache.now() == clock.now


class TestMaxEntries:
    def test_unbounded_by_default(self, clock: FakeClock) -> None:
        """Without a bound every distinct key is kept."""
        cache: FreshnessCache[CatalogEntry] = FreshnessCache(TTL, clock=clock)
        for i in range(500):
            cache.set(f"card {i}", make_entry(clock.now))

        assert len(cache) == 500

    def test_least_recently_used_is_dropped(self, clock: FakeClock) -> None:
        """Past the bound, the entry used longest ago goes first."""
        cache: FreshnessCache[CatalogEntry] = FreshnessCache(TTL, max_entries=2, clock=clock)
        cache.set("a", make_entry(clock.now))
        cache.set("b", make_entry(clock.now))
        cache.get("a")

        cache.set("c", make_entry(clock.now))

        assert "a" in cache
        assert "b" not in cache
        assert "c" in cache

    def test_clear(self, clock: FakeClock) -> None:
        cache: FreshnessCache[CatalogEntry] = FreshnessCache(TTL, clock=clock)
        cache.set("a", make_entry(clock.now))

        cache.clear()

        assert len(cache) == 0
