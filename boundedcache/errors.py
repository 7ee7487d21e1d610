"""Exception hierarchy for cache construction and configuration."""


class CacheError(Exception):
    """Base class for all cache errors."""


class CacheConfigError(CacheError, ValueError):
    """A cache was constructed with an unusable configuration."""


class InvalidCapacityError(CacheConfigError):
    """Capacity is not a positive integer."""


class InvalidTTLError(CacheConfigError):
    """Default TTL is negative or not a number."""
