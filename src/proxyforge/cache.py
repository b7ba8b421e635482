"""Process-wide cache of generated proxy types."""

import logging
import threading
from collections.abc import Callable

logger: logging.Logger = logging.getLogger(__name__)

_GENERATION_CACHE_LOCK: threading.Lock = threading.Lock()
_GENERATION_CACHE: "GenerationCache | None" = None


class GenerationCache:
    """Map interface classes to their generated proxy types.

    Entries are created at most once per interface and never evicted. Present
    entries are read without locking; a miss takes a lock private to that
    interface, so first use of different interfaces does not serialize.
    """

    _types: dict[type, type]
    _key_locks: dict[type, threading.Lock]
    _registry_lock: threading.Lock
    _synthesis_count: int

    def __init__(self) -> None:
        """Initialize an empty cache."""
        self._types = {}
        self._key_locks = {}
        self._registry_lock = threading.Lock()
        self._synthesis_count = 0

    @property
    def synthesis_count(self) -> int:
        """Return how many proxy types this cache has synthesized.

        :returns: Number of successful synthesize calls.
        """
        with self._registry_lock:
            return self._synthesis_count

    def get(self, interface: type) -> type | None:
        """Return the cached proxy type without synthesizing.

        :param interface: Interface class.
        :returns: Proxy type, or ``None`` when not generated yet.
        """
        return self._types.get(interface)

    def __contains__(self, interface: object) -> bool:
        """Report whether a proxy type for ``interface`` is cached."""
        return interface in self._types

    def __len__(self) -> int:
        """Return the number of cached proxy types."""
        return len(self._types)

    def _lock_for(self, interface: type) -> "threading.Lock | None":
        """Return the lock serializing synthesis for one interface.

        :param interface: Interface class.
        :returns: Lock shared by every caller missing on ``interface``, or
            ``None`` once the entry exists.
        """
        with self._registry_lock:
            if interface in self._types:
                return None
            key_lock: threading.Lock | None = self._key_locks.get(interface)
            if key_lock is None:
                key_lock = threading.Lock()
                self._key_locks[interface] = key_lock
            return key_lock

    def _is_current_lock(self, interface: type, key_lock: threading.Lock) -> bool:
        """Report whether ``key_lock`` is still the registered lock of ``interface``."""
        with self._registry_lock:
            return self._key_locks.get(interface) is key_lock

    def _forget_lock(self, interface: type) -> None:
        """Drop the synthesis lock of one interface after a failed synthesis.

        Callers already waiting on the dropped lock move to the lock registered
        in its place, so a retry still runs one at a time.

        :param interface: Interface class.
        """
        with self._registry_lock:
            self._key_locks.pop(interface, None)

    def get_or_create(self, interface: type, synthesize: Callable[[], type]) -> type:
        """Return the proxy type for ``interface``, synthesizing it on first use.

        :param interface: Interface class used as the cache key.
        :param synthesize: Builds the proxy type; called at most once per key.
        :returns: Cached or freshly synthesized proxy type.
        :raises Exception: Whatever ``synthesize`` raises; nothing is stored then.
        """
        existing: type | None = self._types.get(interface)
        if existing is not None:
            return existing

        while True:
            key_lock: threading.Lock | None = self._lock_for(interface)
            if key_lock is None:
                return self._types[interface]
            with key_lock:
                existing = self._types.get(interface)
                if existing is not None:
                    return existing
                if self._is_current_lock(interface, key_lock) is False:
                    # Dropped after a failed synthesis; queue on the current lock.
                    continue

                logger.debug("Generation cache miss for %r", interface)
                try:
                    created: type = synthesize()
                except BaseException:
                    self._forget_lock(interface)
                    raise
                with self._registry_lock:
                    self._types[interface] = created
                    self._synthesis_count += 1
                    # Late arrivals find the entry before they need this lock.
                    self._key_locks.pop(interface, None)
                return created


def get_generation_cache() -> GenerationCache:
    """Return the process-wide generation cache, creating it on first use.

    :returns: Shared cache instance.
    """
    global _GENERATION_CACHE
    cache: GenerationCache | None = _GENERATION_CACHE
    if cache is not None:
        return cache
    with _GENERATION_CACHE_LOCK:
        if _GENERATION_CACHE is None:
            _GENERATION_CACHE = GenerationCache()
            logger.debug("Created process-wide generation cache")
        return _GENERATION_CACHE
