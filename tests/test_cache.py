from app.utils.cache import TimedCache


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


def test_fresh_entry_is_returned_until_it_expires():
    clock = FakeClock()
    cache = TimedCache(ttl=5.0, clock=clock)
    cache.set("themes", ["a"])

    clock.advance(4.5)
    assert cache.get("themes") == ["a"]

    clock.advance(0.5)
    assert cache.get("themes") is None


def test_peek_returns_expired_value():
    clock = FakeClock()
    cache = TimedCache(ttl=1.0, clock=clock)
    cache.set("themes", ["a"])
    clock.advance(10)

    assert cache.get("themes", "miss") == "miss"
    assert cache.peek("themes") == ["a"]


def test_invalidate_drops_only_that_key():
    cache = TimedCache(ttl=60)
    cache.set("a", 1)
    cache.set("b", 2)

    cache.invalidate("a")
    cache.invalidate("never-set")
    assert cache.get("a") is None
    assert cache.peek("a") is None
    assert cache.get("b") == 2


def test_per_entry_ttl_override():
    clock = FakeClock()
    cache = TimedCache(ttl=5.0, clock=clock)
    cache.set("short", 1, ttl=1.0)
    clock.advance(2)

    assert cache.get("short") is None
