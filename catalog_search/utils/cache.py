"""Thread-safe caching utilities."""

import threading
from collections import OrderedDict
from typing import Callable, Generic, TypeVar

K = TypeVar("K")
V = TypeVar("V")


class ThreadSafeCache(Generic[K, V]):
    """A generic thread-safe cache with least-recently-used eviction."""

    def __init__(self, max_entries: int = 512) -> None:
        self._cache: OrderedDict[K, V] = OrderedDict()
        self._max_entries = max_entries
        self._lock = threading.Lock()

    def get_or_compute(self, key: K, compute_fn: Callable[[], V]) -> V:
        """Get from cache or compute and cache the result.

        compute_fn runs outside the lock, so concurrent misses on the same
        key may compute twice; the first stored value wins. If compute_fn
        raises, nothing is stored.
        """
        with self._lock:
            if key in self._cache:
                self._cache.move_to_end(key)
                return self._cache[key]

        value = compute_fn()

        with self._lock:
            if key not in self._cache:
                self._cache[key] = value
                while len(self._cache) > self._max_entries:
                    self._cache.popitem(last=False)
            return self._cache[key]

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)
