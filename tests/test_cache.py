from restaurant_menu.services.cache import DataCache


def test_get_before_ttl_returns_value(clock):
    cache = DataCache(clock=clock)
    cache.set("settings", {"name": "مطعمنا"}, ttl=60)

    clock.advance(59)
    assert cache.get("settings") == {"name": "مطعمنا"}


def test_get_after_ttl_returns_none_and_evicts(clock):
    cache = DataCache(clock=clock)
    cache.set("settings", "value", ttl=60)

    clock.advance(60.5)
    assert cache.get("settings") is None
    assert len(cache) == 0


def test_expired_entries_linger_until_read(clock):
    cache = DataCache(clock=clock)
    cache.set("a", 1, ttl=1)
    cache.set("b", 2, ttl=1)

    clock.advance(5)
    assert len(cache) == 2

    cache.get("a")
    assert len(cache) == 1


def test_missing_key_returns_none():
    assert DataCache().get("nope") is None


def test_set_overwrites_and_resets_expiry(clock):
    cache = DataCache(clock=clock)
    cache.set("k", "old", ttl=10)
    clock.advance(8)
    cache.set("k", "new", ttl=10)
    clock.advance(8)

    assert cache.get("k") == "new"


def test_delete_and_clear(clock):
    cache = DataCache(clock=clock)
    cache.set("a", 1)
    cache.set("b", 2)
    cache.set("c", 3)

    cache.delete("a")
    cache.delete("missing")
    assert "a" not in cache
    assert "b" in cache

    cache.clear()
    assert len(cache) == 0
    assert cache.get("b") is None


def test_default_ttl_is_five_minutes(clock):
    cache = DataCache(clock=clock)
    cache.set("k", "v")

    clock.advance(299)
    assert cache.get("k") == "v"
    clock.advance(2)
    assert cache.get("k") is None
