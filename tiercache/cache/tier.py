"""
Bounded, recency-ordered cache tier.

A fixed-capacity key/value container with least-recently-used eviction.
Both reads and writes of a key move it to the most-recently-used end.
The tier performs no locking of its own; the orchestrator that owns it
serialises every access.
"""

import logging
from collections import OrderedDict
from typing import Any, Hashable, List, Optional

from tiercache.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

_MISSING = object()


class BoundedOrderedTier:
    """Fixed-capacity LRU tier.

    Entries are kept in an ``OrderedDict`` from least- to most-recently
    used, so eviction always pops from the front.

    Args:
        capacity: Maximum number of entries.  Must be greater than zero.
        name: Label used in log records (``"fast"``, ``"slow"``, ...).

    Raises:
        ConfigurationError: If ``capacity`` is not a positive integer.
    """

    def __init__(self, capacity: int, name: str = "tier") -> None:
        if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity <= 0:
            raise ConfigurationError(
                f"Tier '{name}' capacity must be a positive integer, got {capacity!r}"
            )
        self._capacity = capacity
        self._name = name
        self._entries: "OrderedDict[Hashable, Any]" = OrderedDict()

    def get(self, key: Hashable) -> Optional[Any]:
        """Return the value for *key* and mark it most-recently used.

        Returns:
            The stored value, or ``None`` if the key is absent.
        """
        if key not in self._entries:
            return None
        self._entries.move_to_end(key)
        return self._entries[key]

    def put(self, key: Hashable, value: Any) -> Optional[Hashable]:
        """Insert or replace *key* and mark it most-recently used.

        If the insert pushes the tier over capacity, the single
        least-recently-used key is evicted.

        Returns:
            The evicted key, or ``None`` if nothing was evicted.
        """
        self._entries[key] = value
        self._entries.move_to_end(key)
        if len(self._entries) <= self._capacity:
            return None
        evicted, _ = self._entries.popitem(last=False)
        logger.debug(
            "Tier eviction",
            extra={"tier": self._name, "evicted_key": evicted},
        )
        return evicted

    def remove(self, key: Hashable) -> bool:
        """Delete *key* if present.

        Returns:
            ``True`` if an entry was removed, ``False`` otherwise.
        """
        return self._entries.pop(key, _MISSING) is not _MISSING

    def keys(self) -> List[Hashable]:
        """Keys ordered from least- to most-recently used."""
        return list(self._entries)

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def name(self) -> str:
        return self._name

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"BoundedOrderedTier(name={self._name!r}, size={len(self)}, capacity={self._capacity})"
