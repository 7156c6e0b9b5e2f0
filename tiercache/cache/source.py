"""
Source-of-truth collaborators for the tiered cache.

The orchestrator only needs a synchronous ``get``/``put`` pair.  Any
object satisfying :class:`SourceStore` can be injected; failures raised
by the store propagate unchanged to the cache caller.
"""

import logging
import threading
from typing import Any, Dict, Hashable, Mapping, Optional, Protocol, runtime_checkable

from pydantic import BaseModel

logger = logging.getLogger(__name__)


class VideoData(BaseModel):
    """An immutable cached video record.

    Attributes:
        video_id: Identifier the record is cached under.
        payload: Opaque content served to clients.
    """

    video_id: str
    payload: str

    model_config = {"frozen": True}


@runtime_checkable
class SourceStore(Protocol):
    """Authoritative key/value store consulted on full cache misses."""

    def get(self, key: Hashable) -> Optional[Any]:
        ...

    def put(self, key: Hashable, value: Any) -> None:
        ...


class InMemorySource:
    """Dict-backed source of truth.

    Thread safety:
        Reads and writes take an internal lock so the store can also be
        mutated directly, outside any orchestrator.

    Args:
        initial: Optional records to seed the store with.
    """

    def __init__(self, initial: Optional[Mapping[Hashable, Any]] = None) -> None:
        self._lock = threading.Lock()
        self._data: Dict[Hashable, Any] = dict(initial or {})

    def get(self, key: Hashable) -> Optional[Any]:
        with self._lock:
            return self._data.get(key)

    def put(self, key: Hashable, value: Any) -> None:
        with self._lock:
            self._data[key] = value
        logger.debug("Source record written", extra={"cache_key": key})

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)
