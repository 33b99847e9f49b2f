"""Unit tests for the CMS content cache."""

import pytest

from shikshanam.cms import ContentCache


class FakeClock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


class TestContentCache:
    """Test cache expiry and size bounds."""

    def test_set_and_get(self, clock: FakeClock) -> None:
        """Test a stored entry is returned before it expires."""
        cache = ContentCache(ttl=60, max_size=5, clock=clock)
        cache.set("a", {"mainTitle": "A"})

        assert cache.get("a") == {"mainTitle": "A"}
        assert "a" in cache
        assert len(cache) == 1

    def test_get_missing_returns_none(self, clock: FakeClock) -> None:
        cache = ContentCache(clock=clock)
        assert cache.get("missing") is None

    def test_entry_expires_after_ttl(self, clock: FakeClock) -> None:
        """Test expired entries are dropped on read."""
        cache = ContentCache(ttl=60, clock=clock)
        cache.set("a", {"mainTitle": "A"})

        clock.now += 60
        assert cache.get("a") == {"mainTitle": "A"}

        clock.now += 1
        assert cache.get("a") is None
        assert "a" not in cache

    def test_evicts_oldest_when_full(self, clock: FakeClock) -> None:
        """Test the first inserted entry is evicted to make room."""
        cache = ContentCache(ttl=60, max_size=2, clock=clock)
        cache.set("a", {"k": "1"})
        cache.set("b", {"k": "2"})
        cache.get("a")  # reads do not refresh position
        cache.set("c", {"k": "3"})

        assert "a" not in cache
        assert cache.get("b") == {"k": "2"}
        assert cache.get("c") == {"k": "3"}
        assert len(cache) == 2

    def test_overwrite_does_not_evict(self, clock: FakeClock) -> None:
        """Test replacing an existing key keeps the cache size."""
        cache = ContentCache(ttl=60, max_size=2, clock=clock)
        cache.set("a", {"k": "1"})
        cache.set("b", {"k": "2"})
        cache.set("a", {"k": "updated"})

        assert len(cache) == 2
        assert cache.get("a") == {"k": "updated"}
        assert cache.get("b") == {"k": "2"}

    def test_overwrite_refreshes_expiry(self, clock: FakeClock) -> None:
        cache = ContentCache(ttl=60, clock=clock)
        cache.set("a", {"k": "1"})
        clock.now += 50
        cache.set("a", {"k": "2"})
        clock.now += 50

        assert cache.get("a") == {"k": "2"}

    def test_delete_and_clear(self, clock: FakeClock) -> None:
        cache = ContentCache(clock=clock)
        cache.set("a", {"k": "1"})
        cache.set("b", {"k": "2"})

        cache.delete("a")
        cache.delete("never-set")
        assert "a" not in cache
        assert len(cache) == 1

        cache.clear()
        assert len(cache) == 0

    def test_cleanup_removes_only_expired(self, clock: FakeClock) -> None:
        """Test cleanup reports how many entries it dropped."""
        cache = ContentCache(ttl=60, clock=clock)
        cache.set("old", {"k": "1"})
        clock.now += 30
        cache.set("new", {"k": "2"})
        clock.now += 31

        assert cache.cleanup() == 1
        assert "old" not in cache
        assert "new" in cache
        assert cache.cleanup() == 0

    def test_max_size_must_be_positive(self) -> None:
        with pytest.raises(ValueError, match="max_size"):
            ContentCache(max_size=0)

    def test_entries_are_copies(self, clock: FakeClock) -> None:
        """Test callers cannot change a cached entry through their own dicts."""
        cache = ContentCache(ttl=60, max_size=5, clock=clock)
        original = {"mainTitle": "A"}
        cache.set("a", original)
        original["mainTitle"] = "changed before read"

        first = cache.get("a")
        assert first is not None
        first["mainTitle"] = "changed after read"

        assert cache.get("a") == {"mainTitle": "A"}
