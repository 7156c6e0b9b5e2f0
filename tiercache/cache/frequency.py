"""Per-key access counters that gate slow-to-fast promotion."""

from typing import Dict, Hashable


class AccessFrequencyTracker:
    """Monotonic hit counters keyed by cache key.

    Counters never decay; the only way to lower one is :meth:`reset`,
    which the orchestrator calls on invalidation.
    """

    def __init__(self) -> None:
        self._counts: Dict[Hashable, int] = {}

    def increment(self, key: Hashable) -> int:
        """Bump the counter for *key* and return the new value."""
        count = self._counts.get(key, 0) + 1
        self._counts[key] = count
        return count

    def reset(self, key: Hashable) -> None:
        """Forget *key* entirely.  No-op for unseen keys."""
        self._counts.pop(key, None)

    def count(self, key: Hashable) -> int:
        return self._counts.get(key, 0)

    def __len__(self) -> int:
        return len(self._counts)
