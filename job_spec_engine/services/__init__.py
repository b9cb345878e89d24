"""Service exports."""

from .profile_source import InMemoryProfileSource, JsonFileProfileSource, ProfileSource, load_raw_profile
from .spec_cache import (
    CacheLookup,
    InMemorySearchSpecStorage,
    RedisSearchSpecStorage,
    SearchSpecCache,
    SearchSpecCacheStorage,
    get_cache_storage,
)

__all__ = [
    "SearchSpecCache",
    "SearchSpecCacheStorage",
    "InMemorySearchSpecStorage",
    "RedisSearchSpecStorage",
    "CacheLookup",
    "get_cache_storage",
    "ProfileSource",
    "InMemoryProfileSource",
    "JsonFileProfileSource",
    "load_raw_profile",
]
