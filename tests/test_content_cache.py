from __future__ import annotations

from classes.content_cache import ContentCache


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


def test_get_or_compute_reuses_value_within_ttl():
    clock = FakeClock()
    cache = ContentCache(ttl=60, clock=clock)
    calls = []

    def compute():
        calls.append(1)
        return ["semester"]

    assert cache.get_or_compute("k", compute) == ["semester"]
    clock.now += 59
    assert cache.get_or_compute("k", compute) == ["semester"]
    assert len(calls) == 1


def test_entries_expire_after_ttl():
    clock = FakeClock()
    cache = ContentCache(ttl=60, clock=clock)
    cache.set("k", "v")

    clock.now += 60

    assert cache.get("k") is None
    assert len(cache) == 0


def test_zero_ttl_disables_caching():
    cache = ContentCache(ttl=0)
    calls = []

    cache.get_or_compute("k", lambda: calls.append(1) or "v")
    cache.get_or_compute("k", lambda: calls.append(1) or "v")

    assert len(calls) == 2


def test_empty_results_are_cached():
    cache = ContentCache(ttl=60)
    calls = []

    cache.get_or_compute("k", lambda: calls.append(1) or [])
    cache.get_or_compute("k", lambda: calls.append(1) or [])

    assert len(calls) == 1


def test_clear_drops_every_entry():
    cache = ContentCache(ttl=60)
    cache.set("course:1:topics", [])
    cache.set("batches", [])

    assert cache.clear() == 2
    assert cache.get("batches") is None
    assert len(cache) == 0


def test_each_app_gets_its_own_cache(app):
    from app import create_app

    other = create_app("testing")

    assert app.extensions["content_cache"] is not other.extensions["content_cache"]
    assert app.extensions["content_cache"].ttl == app.config["CONTENT_CACHE_TTL"]
