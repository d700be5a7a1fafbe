"""Domain entities for internal representation.

These are pure frozen dataclasses used by the cache service and the entry
stores. Chat-completion shapes live in the dto package.
"""

from .cache_entry import CacheEntryEntity
from .cache_result import CacheQueryResult
from .cache_stats import CacheStatsEntity

__all__ = ["CacheEntryEntity", "CacheQueryResult", "CacheStatsEntity"]
