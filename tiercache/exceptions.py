"""
tiercache exception hierarchy.

All custom exceptions inherit from TierCacheException so callers can
catch a single base type when they want a broad safety net.  A key that
is absent from every tier is not an error and never raises.
"""


class TierCacheException(Exception):
    """Base exception for all tiercache errors."""


class ConfigurationError(TierCacheException, ValueError):
    """Raised when a capacity, threshold or settings value is invalid."""


class SourceError(TierCacheException):
    """Raised by source-of-truth stores when the backing store fails."""
