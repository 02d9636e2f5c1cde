"""
Thread-safe, exactly-once lazy values.

Used to hold the process-wide dictionary so that concurrent first callers
never observe a half-built store and never pay the load cost twice.
"""

import logging
import threading
import time
from typing import Callable, Generic, TypeVar

T = TypeVar('T')

logger = logging.getLogger(__name__)

_UNSET = object()


class Cache(Generic[T]):
    """
    Lazily computed value.

    ``ensure()`` runs the factory at most once; later callers read the
    stored value without taking the lock. If the factory raises, nothing
    is stored and the next ``ensure()`` tries again.
    """

    def __init__(self, name: str, factory: Callable[[], T]):
        self.name = name
        self.factory = factory
        self._value = _UNSET
        self._lock = threading.Lock()

    def __repr__(self) -> str:
        state = "ready" if self.is_ready() else "empty"
        return f"<Cache {self.name!r} {state}>"

    def ensure(self) -> T:
        value = self._value
        if value is not _UNSET:
            return value

        with self._lock:
            if self._value is _UNSET:
                t0 = time.perf_counter()
                self._value = self.factory()
                elapsed = (time.perf_counter() - t0) * 1000
                logger.debug(f"Cache {self.name!r} filled in {elapsed:.1f}ms")
            return self._value

    def is_ready(self) -> bool:
        return self._value is not _UNSET

    def invalidate(self):
        """Drop the value; the next ensure() recomputes it."""
        with self._lock:
            self._value = _UNSET


def defcache(name: str):
    """
    Decorator turning a zero-argument factory into a Cache.

    Usage:
        @defcache("dictionary")
        def load():
            return expensive_load()

        value = load.ensure()
    """
    def decorator(func: Callable[[], T]) -> Cache[T]:
        return Cache(name, func)
    return decorator
