"""Multi-level promotion cache (fast tier / slow tier / source of truth)."""

from tiercache.cache.frequency import AccessFrequencyTracker
from tiercache.cache.orchestrator import CacheOrchestrator
from tiercache.cache.source import InMemorySource, SourceStore, VideoData
from tiercache.cache.stats import CacheReport, StatsRecorder
from tiercache.cache.tier import BoundedOrderedTier

__all__ = [
    "AccessFrequencyTracker",
    "BoundedOrderedTier",
    "CacheOrchestrator",
    "CacheReport",
    "InMemorySource",
    "SourceStore",
    "StatsRecorder",
    "VideoData",
]
