# Tinct project, MIT license.
#
# You're free to copy this file to your project and edit it for your needs,
# just keep this copyright line please :3

"""
Parsing colors and styles from strings is by far the most repeated work
in Tinct: the same ``"bold red"`` is parsed for every markup tag that mentions it.
This module provides bounded caches for these results.

Caches are owned by a :class:`CacheRegistry`. There is one process-wide registry,
but you can replace it, or pass a cache explicitly to
:meth:`Color.parse <tinct.color.Color.parse>` and :meth:`Style.parse <tinct.style.Style.parse>`.

Caches never affect output: a parse result is a pure function of its input,
so clearing a cache or evicting an entry only costs time.

.. autoclass:: LruCache
   :members:

.. autoclass:: CacheRegistry
   :members:

.. autofunction:: get_registry

.. autofunction:: set_registry

.. autofunction:: use_registry

.. autodata:: DEFAULT_CAPACITY

"""

from __future__ import annotations

import contextlib
import threading
from collections import OrderedDict

import tinct
from tinct import _typing as _t

if _t.TYPE_CHECKING:
    import tinct.color
    import tinct.style

__all__ = [
    "DEFAULT_CAPACITY",
    "CacheRegistry",
    "LruCache",
    "get_registry",
    "set_registry",
    "use_registry",
]

K = _t.TypeVar("K", bound=_t.Hashable)
V = _t.TypeVar("V")

DEFAULT_CAPACITY: int = 256
"""
Default number of entries kept by each parse cache.

"""


class LruCache(_t.Generic[K, V]):
    """
    A thread-safe mapping that keeps at most `capacity` most recently used entries.

    Values are computed by a factory on a cache miss. If factory raises,
    nothing is stored, and the exception propagates to the caller.

    :param capacity:
        maximum number of entries, must be positive.
    :example:
        ::

            >>> cache = LruCache(capacity=2)
            >>> cache.get("a", str.upper)
            'A'
            >>> cache.get("a", str.upper)
            'A'
            >>> cache.hits, cache.misses
            (1, 1)

    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY, /):
        if capacity <= 0:
            raise ValueError(f"cache capacity must be positive, got {capacity}")

        self.__capacity = capacity
        self.__data: OrderedDict[K, V] = OrderedDict()
        self.__lock = threading.Lock()
        self.__hits = 0
        self.__misses = 0

    @property
    def capacity(self) -> int:
        """
        Maximum number of entries.

        """

        return self.__capacity

    @property
    def hits(self) -> int:
        """
        Number of lookups that were served from the cache.

        """

        return self.__hits

    @property
    def misses(self) -> int:
        """
        Number of lookups that invoked the factory.

        """

        return self.__misses

    def get(self, key: K, factory: _t.Callable[[K], V], /) -> V:
        """
        Return value for the given key, computing and storing it if needed.

        """

        with self.__lock:
            value = self.__data.get(key, tinct.MISSING)
            if value is not tinct.MISSING:
                self.__data.move_to_end(key)
                self.__hits += 1
                return _t.cast(V, value)
            self.__misses += 1

        # Factory runs outside of the lock: parsing may recurse into other caches.
        value = factory(key)

        with self.__lock:
            self.__data[key] = value
            self.__data.move_to_end(key)
            while len(self.__data) > self.__capacity:
                self.__data.popitem(last=False)

        return value

    def clear(self):
        """
        Remove all entries and reset statistics.

        """

        with self.__lock:
            self.__data.clear()
            self.__hits = 0
            self.__misses = 0

    def __len__(self) -> int:
        with self.__lock:
            return len(self.__data)

    def __contains__(self, key: object) -> bool:
        with self.__lock:
            return key in self.__data

    def __repr__(self):
        return f"LruCache(capacity={self.__capacity}, size={len(self)})"


class CacheRegistry:
    """
    Owner of all parse caches.

    :param capacity:
        capacity for every cache in this registry.

    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY, /):
        self.color_cache: LruCache[str, tinct.color.Color] = LruCache(capacity)
        """
        Results of :meth:`Color.parse <tinct.color.Color.parse>`.

        """

        self.style_cache: LruCache[str, tinct.style.Style] = LruCache(capacity)
        """
        Results of :meth:`Style.parse <tinct.style.Style.parse>`.

        """

    def clear(self):
        """
        Clear all caches in this registry.

        """

        tinct._logger.debug(
            "clearing parse caches: %s colors, %s styles",
            len(self.color_cache),
            len(self.style_cache),
        )
        self.color_cache.clear()
        self.style_cache.clear()


_REGISTRY_LOCK = threading.Lock()
_REGISTRY = CacheRegistry()


def get_registry() -> CacheRegistry:
    """
    Get the process-wide cache registry.

    """

    return _REGISTRY


def set_registry(registry: CacheRegistry, /) -> CacheRegistry:
    """
    Replace the process-wide cache registry, return the previous one.

    """

    global _REGISTRY

    with _REGISTRY_LOCK:
        prev, _REGISTRY = _REGISTRY, registry
    return prev


@contextlib.contextmanager
def use_registry(
    registry: CacheRegistry | None = None, /
) -> _t.Generator[CacheRegistry, None, None]:
    """
    Temporarily replace the process-wide cache registry.

    If `registry` is not given, a fresh empty registry is used.

    :example:
        ::

            >>> import tinct.color
            >>> with use_registry() as registry:
            ...     _ = tinct.color.Color.parse("red")
            ...     len(registry.color_cache)
            1

    """

    if registry is None:
        registry = CacheRegistry()
    prev = set_registry(registry)
    try:
        yield registry
    finally:
        set_registry(prev)
