import threading

import pytest

import tinct.cache
import tinct.color
import tinct.style


class TestLruCache:
    def test_get_computes_once(self):
        calls = []
        cache = tinct.cache.LruCache(4)

        def factory(key):
            calls.append(key)
            return key.upper()

        assert cache.get("a", factory) == "A"
        assert cache.get("a", factory) == "A"
        assert calls == ["a"]
        assert cache.hits == 1
        assert cache.misses == 1

    def test_eviction(self):
        cache = tinct.cache.LruCache(2)
        cache.get("a", str.upper)
        cache.get("b", str.upper)
        cache.get("a", str.upper)
        cache.get("c", str.upper)
        assert "a" in cache
        assert "b" not in cache
        assert "c" in cache
        assert len(cache) == 2

    def test_clear(self):
        cache = tinct.cache.LruCache(2)
        cache.get("a", str.upper)
        cache.get("a", str.upper)
        cache.clear()
        assert len(cache) == 0
        assert cache.hits == 0
        assert cache.misses == 0

    def test_capacity(self):
        assert tinct.cache.LruCache().capacity == tinct.cache.DEFAULT_CAPACITY
        assert tinct.cache.LruCache(10).capacity == 10

    def test_factory_errors_are_not_cached(self):
        cache = tinct.cache.LruCache(2)

        def factory(key):
            raise ValueError(key)

        with pytest.raises(ValueError):
            cache.get("a", factory)
        assert "a" not in cache

    def test_threads(self):
        cache = tinct.cache.LruCache(16)
        errors = []

        def worker():
            try:
                for i in range(200):
                    assert cache.get(str(i % 32), int) == i % 32
            except Exception as e:  # pragma: no cover
                errors.append(e)

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert not errors
        assert len(cache) <= 16


class TestRegistry:
    def test_fixture_registry_is_current(self, registry):
        assert tinct.cache.get_registry() is registry

    def test_set_registry_returns_previous(self, registry):
        new = tinct.cache.CacheRegistry()
        prev = tinct.cache.set_registry(new)
        try:
            assert prev is registry
            assert tinct.cache.get_registry() is new
        finally:
            tinct.cache.set_registry(prev)

    def test_use_registry(self, registry):
        custom = tinct.cache.CacheRegistry(8)
        with tinct.cache.use_registry(custom) as current:
            assert current is custom
            tinct.style.Style.parse("bold")
            assert "bold" in custom.style_cache
        assert tinct.cache.get_registry() is registry
        assert "bold" not in registry.style_cache

    def test_use_registry_restores_on_error(self, registry):
        with pytest.raises(RuntimeError):
            with tinct.cache.use_registry():
                raise RuntimeError()
        assert tinct.cache.get_registry() is registry

    def test_clear(self, registry):
        tinct.color.Color.parse("red")
        tinct.style.Style.parse("bold")
        registry.clear()
        assert len(registry.color_cache) == 0
        assert len(registry.style_cache) == 0

    def test_clearing_does_not_change_results(self, registry):
        before = tinct.style.Style.parse("bold red on blue")
        registry.clear()
        after = tinct.style.Style.parse("bold red on blue")
        assert before == after
        assert before is not after
