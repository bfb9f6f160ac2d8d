"""
Redis cache for paginated applicant listings (cache-aside).

Keys are derived from (page, limit) only. Writes invalidate a fixed set of
well-known keys: page 1 at the two most common page sizes. Other cached pages
are not touched and can be served stale until their TTL runs out.
"""

import json
import logging
from functools import lru_cache
from typing import Any, Dict, List, Optional

import redis

from job_tracker.core.config import settings
from job_tracker.core.exceptions import CacheError

logger = logging.getLogger(__name__)


def page_key(page: int, limit: int) -> str:
    """Cache key for one page of the applicant listing."""
    return f"applicants_page_{page}_limit_{limit}"


INVALIDATION_KEYS = (
    page_key(1, 10),
    page_key(1, 20),
)


class ApplicantCache:
    """
    Thin wrapper over a Redis client for serialized applicant pages.

    Every backend failure is raised as CacheError; callers decide how to degrade.
    """

    def __init__(self, client: redis.Redis, ttl_seconds: int = 180):
        self.client = client
        self.ttl_seconds = ttl_seconds

    @classmethod
    def from_settings(cls) -> "ApplicantCache":
        """Build a cache backed by a bounded Redis connection pool."""
        pool = redis.ConnectionPool(
            host=settings.REDIS_HOST,
            port=settings.REDIS_PORT,
            password=settings.REDIS_PASSWORD or None,
            db=settings.REDIS_DB,
            max_connections=settings.REDIS_POOL_SIZE,
            socket_timeout=settings.REDIS_SOCKET_TIMEOUT,
            socket_connect_timeout=settings.REDIS_SOCKET_TIMEOUT,
            decode_responses=True,
        )
        return cls(redis.Redis(connection_pool=pool), ttl_seconds=settings.CACHE_TTL_SECONDS)

    def get_page(self, key: str) -> Optional[List[Dict[str, Any]]]:
        """
        Look up a cached page.

        Returns:
            The deserialized records, or None on a miss

        Raises:
            CacheError: If Redis is unreachable or the entry is not a JSON list of records
        """
        try:
            raw = self.client.get(key)
        except redis.RedisError as e:
            raise CacheError(f"Redis GET {key} failed: {e}") from e

        if raw is None:
            return None

        try:
            records = json.loads(raw)
        except ValueError as e:
            raise CacheError(f"Corrupt cache entry {key}: {e}") from e

        if not isinstance(records, list) or not all(isinstance(item, dict) for item in records):
            raise CacheError(f"Unexpected cache entry shape for {key}: {type(records).__name__}")
        return records

    def set_page(self, key: str, records: List[Dict[str, Any]]) -> None:
        """Store a page of serialized records with the configured TTL."""
        try:
            self.client.set(key, json.dumps(records), ex=self.ttl_seconds)
        except redis.RedisError as e:
            raise CacheError(f"Redis SET {key} failed: {e}") from e

    def invalidate(self) -> int:
        """
        Remove the fixed set of well-known listing keys.

        Returns:
            Number of keys that existed and were removed
        """
        try:
            return self.client.delete(*INVALIDATION_KEYS)
        except redis.RedisError as e:
            raise CacheError(f"Redis DEL {', '.join(INVALIDATION_KEYS)} failed: {e}") from e

    def ping(self) -> bool:
        """Check connectivity. Never raises."""
        try:
            return bool(self.client.ping())
        except redis.RedisError as e:
            logger.warning(f"Redis connection failed: {e}")
            return False


@lru_cache
def get_cache() -> ApplicantCache:
    """
    Dependency returning the process-wide cache.
    Used in FastAPI endpoints with Depends(get_cache)
    """
    return ApplicantCache.from_settings()
