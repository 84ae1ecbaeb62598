"""
Redis cache for pagination counts.

A cached count is keyed on the compiled COUNT statement together with its
bound parameters. Two adapters over the same table therefore share an entry
only when they would send the same query: a different filter function, a
different set of count filters or different values all produce different
keys. Keys are grouped per table so a write to that table can drop every
cached count for it at once.

Redis failures degrade to a cache miss and are only logged.

Example:
    ```python
    cache = CountCache(ttl=60)
    adapter = SQLModelAdapter(session, Post, count_cache=cache)
    posts = await paginate(adapter, {"page": 3})

    session.add(Post(title="new"))
    await session.commit()
    await adapter.invalidate_count_cache()
    ```
"""

import hashlib
import json

from redis.asyncio import Redis
from redis.exceptions import RedisError
from sqlalchemy.sql import ClauseElement

from pagewise.constants import COUNT_CACHE_KEY_PREFIX
from pagewise.logging import logger
from pagewise.settings import app_settings
from pagewise.storage.redis import get_redis_connection


class CountCache:
    """
    Count cache bound to one Redis database.

    Attributes:
        ttl: Lifetime of a cached count in seconds.
        url: Redis URL; None means the REDIS_URL setting.
        db: Redis database index; None means the REDIS_DB setting.
        prefix: Prefix shared by every key this cache writes.
    """

    def __init__(
        self,
        ttl: int | None = None,
        *,
        url: str | None = None,
        db: int | None = None,
        prefix: str = COUNT_CACHE_KEY_PREFIX,
    ):
        self.ttl = app_settings.COUNT_CACHE_TTL if ttl is None else ttl
        self.url = url
        self.db = db
        self.prefix = prefix

    def key_for(self, namespace: str, statement: ClauseElement) -> str:
        """
        Build the key for a count statement.

        Args:
            namespace: Group the key belongs to, usually the table name.
            statement: The COUNT statement that would run on a miss.
        """
        compiled = statement.compile()
        payload = json.dumps(
            {"sql": str(compiled), "params": compiled.params},
            sort_keys=True,
            default=str,
        )
        digest = hashlib.md5(
            payload.encode(), usedforsecurity=False
        ).hexdigest()[:16]
        return f"{self.prefix}:{namespace}:{digest}"

    def _redis(self) -> Redis | None:
        redis = get_redis_connection(self.url, self.db)
        if redis is None:
            logger.warning("Redis unavailable, count cache disabled")
        return redis

    async def get(self, key: str) -> int | None:
        redis = self._redis()
        if redis is None:
            return None

        try:
            cached = await redis.get(key)
        except (RedisError, ConnectionError) as ex:
            logger.error(f"Error reading count cache key {key}: {ex}")
            return None

        if cached is None:
            logger.debug(f"Count cache miss: {key}")
            return None

        try:
            count = int(cached)
        except ValueError:
            logger.warning(f"Discarding non-integer cached count at {key}")
            return None

        logger.debug(f"Count cache hit: {key} = {count}")
        return count

    async def set(self, key: str, count: int) -> None:
        redis = self._redis()
        if redis is None:
            return

        try:
            await redis.setex(key, self.ttl, str(count))
        except (RedisError, ConnectionError) as ex:
            logger.error(f"Error writing count cache key {key}: {ex}")

    async def invalidate(self, namespace: str) -> int:
        """
        Drop every cached count in a namespace.

        Call after INSERT, UPDATE or DELETE on the namespace's table.

        Returns:
            Number of keys deleted.
        """
        redis = self._redis()
        if redis is None:
            return 0

        pattern = f"{self.prefix}:{namespace}:*"
        deleted = 0
        cursor = 0
        try:
            while True:
                cursor, keys = await redis.scan(
                    cursor, match=pattern, count=100
                )
                if keys:
                    deleted += await redis.delete(*keys)
                if cursor == 0:
                    break
        except (RedisError, ConnectionError) as ex:
            logger.error(f"Error invalidating count cache {pattern}: {ex}")
            return deleted

        logger.info(f"Invalidated {deleted} cached counts for {namespace}")
        return deleted
