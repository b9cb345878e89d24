"""SearchSpec cache keyed by (user_id, profile_version) over a pluggable async backend."""

import time
from abc import ABC, abstractmethod
from typing import Callable, Dict, NamedTuple, Optional, Tuple

from job_spec_engine.config import REDIS_URL
from job_spec_engine.schemas.search_spec import SearchSpec
from job_spec_engine.utils.logger import get_logger

logger = get_logger(__name__)

CACHE_KEY_PREFIX = "search_spec"


class SearchSpecCacheStorage(ABC):
    """Key-value backend with optional per-entry expiry. Each write replaces the whole value."""

    @abstractmethod
    async def get(self, key: str) -> Optional[SearchSpec]:
        ...

    @abstractmethod
    async def set(self, key: str, value: SearchSpec, ttl_seconds: Optional[int] = None) -> None:
        ...

    @abstractmethod
    async def delete(self, key: str) -> None:
        ...


class InMemorySearchSpecStorage(SearchSpecCacheStorage):
    """
    Process-local storage for development and tests. Not persistent, not shared.
    Expired entries are dropped lazily on read.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        # key -> (spec, expires_at or None); each entry is swapped as one tuple
        self._entries: Dict[str, Tuple[SearchSpec, Optional[float]]] = {}

    async def get(self, key: str) -> Optional[SearchSpec]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        spec, expires_at = entry
        if expires_at is not None and self._clock() >= expires_at:
            # Only drop the entry we looked at; a concurrent set may have replaced it
            if self._entries.get(key) is entry:
                del self._entries[key]
            return None
        return spec

    async def set(self, key: str, value: SearchSpec, ttl_seconds: Optional[int] = None) -> None:
        expires_at = self._clock() + ttl_seconds if ttl_seconds is not None else None
        self._entries[key] = (value, expires_at)

    async def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    def size(self) -> int:
        return len(self._entries)

    def clear(self) -> None:
        self._entries.clear()


class RedisSearchSpecStorage(SearchSpecCacheStorage):
    """Redis-backed storage. Values are stored as JSON; expiry uses Redis' native EX."""

    def __init__(self, redis_url: str = REDIS_URL, client=None) -> None:
        self._redis_url = redis_url
        self._client = client

    def _get_client(self):
        if self._client is None:
            import redis.asyncio as aioredis

            self._client = aioredis.from_url(self._redis_url, decode_responses=True)
            logger.info("Connected search spec cache to Redis")
        return self._client

    async def get(self, key: str) -> Optional[SearchSpec]:
        raw = await self._get_client().get(key)
        if raw is None:
            return None
        return SearchSpec.model_validate_json(raw)

    async def set(self, key: str, value: SearchSpec, ttl_seconds: Optional[int] = None) -> None:
        # SET replaces the value atomically; readers never see a partial spec
        await self._get_client().set(key, value.model_dump_json(), ex=ttl_seconds)

    async def delete(self, key: str) -> None:
        await self._get_client().delete(key)

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None


class CacheLookup(NamedTuple):
    hit: bool
    spec: Optional[SearchSpec]
    key: str


class SearchSpecCache:
    """
    Cache manager. Keys are derived from identity only, so a new
    profile_version is a miss by construction; nothing is deleted on update.
    """

    def __init__(self, storage: SearchSpecCacheStorage) -> None:
        self._storage = storage

    @property
    def storage(self) -> SearchSpecCacheStorage:
        return self._storage

    @staticmethod
    def cache_key(user_id: str, profile_version: int) -> str:
        """`search_spec:{user_id}:v{profile_version}`"""
        return f"{CACHE_KEY_PREFIX}:{user_id}:v{profile_version}"

    async def get(self, user_id: str, profile_version: int) -> Optional[SearchSpec]:
        return await self._storage.get(self.cache_key(user_id, profile_version))

    async def set(self, spec: SearchSpec, ttl_seconds: Optional[int] = None) -> None:
        """Write under the key derived from the spec's own identity fields."""
        key = self.cache_key(spec.user_id, spec.profile_version)
        await self._storage.set(key, spec, ttl_seconds)

    async def has(self, user_id: str, profile_version: int) -> bool:
        return await self.get(user_id, profile_version) is not None

    async def invalidate(self, user_id: str, profile_version: int) -> None:
        await self._storage.delete(self.cache_key(user_id, profile_version))

    async def check(self, user_id: str, profile_version: int) -> CacheLookup:
        key = self.cache_key(user_id, profile_version)
        spec = await self._storage.get(key)
        return CacheLookup(hit=spec is not None, spec=spec, key=key)


def get_cache_storage(redis_url: Optional[str] = None) -> SearchSpecCacheStorage:
    """
    Return the configured cache backend (dependency injection).
    redis_url: override config; empty uses in-memory storage.
    """
    url = (redis_url if redis_url is not None else REDIS_URL).strip()
    if url:
        return RedisSearchSpecStorage(url)
    logger.info("REDIS_URL not set; using in-memory search spec cache")
    return InMemorySearchSpecStorage()
