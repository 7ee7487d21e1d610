from boundedcache.cache import BoundedCache, Cache, CacheMetrics, CacheStats
from boundedcache.config import CacheSettings, get_settings, reset_settings
from boundedcache.errors import (
    CacheConfigError,
    CacheError,
    InvalidCapacityError,
    InvalidTTLError,
)
from boundedcache.log import setup_logging
from boundedcache.ordered_index import Entry, OrderedIndex

__all__ = [
    "BoundedCache",
    "Cache",
    "CacheConfigError",
    "CacheError",
    "CacheMetrics",
    "CacheSettings",
    "CacheStats",
    "Entry",
    "InvalidCapacityError",
    "InvalidTTLError",
    "OrderedIndex",
    "get_settings",
    "reset_settings",
    "setup_logging",
]
