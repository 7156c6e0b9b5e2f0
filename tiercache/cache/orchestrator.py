"""
Multi-level cache orchestrator.

Composes a small fast tier and a larger slow tier in front of an
authoritative source of truth.  Lookups fall through fast -> slow ->
source; a key is copied from slow into fast once its access count
reaches ``promote_threshold``.  Updates write the source and then purge
the key from both tiers and from the frequency tracker.

Every public method holds one per-instance ``threading.Lock`` for its
whole body, including the source read on a cold miss.  Contention
therefore grows with source latency; a slow source serialises all
callers of the same orchestrator.
"""

import logging
import threading
from typing import Any, Dict, Hashable, Optional

from tiercache.cache.frequency import AccessFrequencyTracker
from tiercache.cache.source import SourceStore
from tiercache.cache.stats import CacheReport, StatsRecorder
from tiercache.cache.tier import BoundedOrderedTier
from tiercache.config import get_settings
from tiercache.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class CacheOrchestrator:
    """Two-tier promotion cache over a source-of-truth store.

    ``None`` is the absent marker at every level, so ``None`` cannot be
    cached as a value.

    Thread safety:
        Every public method acquires ``_lock`` before reading or
        mutating any tier, the tracker or the statistics.

    Args:
        source: Authoritative store exposing ``get`` and ``put``.
        fast_capacity: Fast-tier size.  Defaults to settings.
        slow_capacity: Slow-tier size.  Defaults to settings.
        promote_threshold: Slow-path accesses, counting the cold fill,
            needed before a key is copied into the fast tier.
            Defaults to settings.

    Raises:
        ConfigurationError: If a capacity is not positive, the
            threshold is below one, or *source* lacks ``get``/``put``.
    """

    def __init__(
        self,
        source: SourceStore,
        fast_capacity: Optional[int] = None,
        slow_capacity: Optional[int] = None,
        promote_threshold: Optional[int] = None,
    ) -> None:
        if fast_capacity is None or slow_capacity is None or promote_threshold is None:
            _s = get_settings().cache
            fast_capacity = _s.fast_capacity if fast_capacity is None else fast_capacity
            slow_capacity = _s.slow_capacity if slow_capacity is None else slow_capacity
            promote_threshold = (
                _s.promote_threshold if promote_threshold is None else promote_threshold
            )

        if (
            isinstance(promote_threshold, bool)
            or not isinstance(promote_threshold, int)
            or promote_threshold < 1
        ):
            raise ConfigurationError(
                f"promote_threshold must be an integer >= 1, got {promote_threshold!r}"
            )
        if not isinstance(source, SourceStore):
            raise ConfigurationError(
                f"source must provide get() and put(), got {type(source).__name__}"
            )

        self._fast = BoundedOrderedTier(fast_capacity, name="fast")
        self._slow = BoundedOrderedTier(slow_capacity, name="slow")
        self._source = source
        self._promote_threshold = promote_threshold
        self._frequency = AccessFrequencyTracker()
        self._stats = StatsRecorder()
        self._lock = threading.Lock()

        logger.info(
            "CacheOrchestrator initialised",
            extra={
                "fast_capacity": fast_capacity,
                "slow_capacity": slow_capacity,
                "promote_threshold": promote_threshold,
            },
        )

    @classmethod
    def from_settings(cls, source: SourceStore) -> "CacheOrchestrator":
        """Build an orchestrator sized entirely from :func:`get_settings`."""
        _s = get_settings().cache
        return cls(
            source,
            fast_capacity=_s.fast_capacity,
            slow_capacity=_s.slow_capacity,
            promote_threshold=_s.promote_threshold,
        )

    # ------------------------------------------------------------------
    # Public operations
    # ------------------------------------------------------------------

    def lookup(self, key: Hashable) -> Optional[Any]:
        """Return the value for *key*, filling and promoting as needed.

        Order of probes:

        1. Fast tier -- terminal; frequency is not consulted.
        2. Slow tier -- bumps the key's counter and copies the value
           into the fast tier once the counter reaches the threshold.
           The slow copy is kept.
        3. Source -- inserts the value into the slow tier and seeds the
           counter with this first access.

        Args:
            key: Cache key.

        Returns:
            The value, or ``None`` if no tier and not the source has it.

        Raises:
            Exception: Whatever the source raises on a cold read.  No
                tier is modified and the lookup is not counted as a
                request.
        """
        with self._lock:
            value = self._fast.get(key)
            if value is not None:
                self._stats.record_request()
                self._stats.record_fast_hit()
                logger.debug("Fast tier hit", extra={"cache_key": key})
                return value

            value = self._slow.get(key)
            if value is not None:
                self._stats.record_request()
                self._stats.record_slow_hit()
                count = self._frequency.increment(key)
                logger.debug(
                    "Slow tier hit",
                    extra={"cache_key": key, "access_count": count},
                )
                if count >= self._promote_threshold:
                    self._insert(self._fast, key, value)
                    self._stats.record_promotion()
                    logger.info(
                        "Key promoted to fast tier",
                        extra={"cache_key": key, "access_count": count},
                    )
                return value

            try:
                value = self._source.get(key)
            except Exception as exc:
                self._stats.record_source_error()
                logger.warning(
                    "Source read failed",
                    extra={"cache_key": key, "error": str(exc)},
                )
                raise

            self._stats.record_request()
            if value is None:
                self._stats.record_miss()
                logger.debug("Cache miss", extra={"cache_key": key})
                return None

            self._stats.record_source_hit()
            self._insert(self._slow, key, value)
            count = self._frequency.increment(key)
            logger.debug(
                "Source hit; cached in slow tier",
                extra={"cache_key": key, "access_count": count},
            )
            return value

    def invalidate(self, key: Hashable) -> None:
        """Drop *key* from both tiers and forget its access count.

        Idempotent: invalidating an uncached key is a no-op.
        """
        with self._lock:
            self._purge(key)

    def update_content(self, key: Hashable, new_value: Any) -> None:
        """Write *new_value* to the source, then invalidate *key*.

        The next :meth:`lookup` for *key* is served from the source and
        returns *new_value*.

        Args:
            key: Cache key.
            new_value: Replacement value.  Must not be ``None``.

        Raises:
            ValueError: If *new_value* is ``None``.
            Exception: Whatever the source raises on write; the tiers
                are left untouched in that case.
        """
        if new_value is None:
            raise ValueError("Value must not be None")

        with self._lock:
            try:
                self._source.put(key, new_value)
            except Exception as exc:
                self._stats.record_source_error()
                logger.warning(
                    "Source write failed",
                    extra={"cache_key": key, "error": str(exc)},
                )
                raise
            self._purge(key)
            logger.info("Content updated", extra={"cache_key": key})

    def report(self) -> CacheReport:
        """Return a consistent statistics snapshot."""
        with self._lock:
            return self._stats.report()

    def prometheus_metrics(self) -> str:
        """Return the statistics in Prometheus text exposition format."""
        with self._lock:
            return self._stats.to_prometheus()

    # ------------------------------------------------------------------
    # Introspection (never touches recency or statistics)
    # ------------------------------------------------------------------

    def tier_of(self, key: Hashable) -> Optional[str]:
        """Return ``"fast"``, ``"slow"`` or ``None`` for *key*.

        A key present in both tiers reports ``"fast"``.
        """
        with self._lock:
            if key in self._fast:
                return "fast"
            if key in self._slow:
                return "slow"
            return None

    def access_count(self, key: Hashable) -> int:
        with self._lock:
            return self._frequency.count(key)

    def sizes(self) -> Dict[str, int]:
        with self._lock:
            return {
                "fast": len(self._fast),
                "slow": len(self._slow),
                "tracked": len(self._frequency),
            }

    @property
    def promote_threshold(self) -> int:
        return self._promote_threshold

    # ------------------------------------------------------------------
    # Internal helpers (caller holds _lock)
    # ------------------------------------------------------------------

    def _insert(self, tier: BoundedOrderedTier, key: Hashable, value: Any) -> None:
        evicted = tier.put(key, value)
        if evicted is not None:
            self._stats.record_eviction()

    def _purge(self, key: Hashable) -> None:
        in_fast = self._fast.remove(key)
        in_slow = self._slow.remove(key)
        self._frequency.reset(key)
        self._stats.record_invalidation()
        logger.info(
            "Key invalidated",
            extra={"cache_key": key, "was_fast": in_fast, "was_slow": in_slow},
        )
