"""
Redis clients for the pagination count cache.

One client is kept per ``(url, db)`` pair, each on its own connection pool.
Pools do not connect until the first command, so a missing Redis server
surfaces as a ``RedisError`` in the cache operations, not here.
"""

from redis.asyncio import ConnectionPool, Redis

from pagewise.logging import logger
from pagewise.settings import app_settings


class RedisClients:
    """Lazily created Redis clients keyed by URL and database index."""

    _clients: dict[tuple[str, int], Redis] = {}
    _pools: dict[tuple[str, int], ConnectionPool] = {}

    @classmethod
    def get(cls, url: str | None = None, db: int | None = None) -> Redis:
        """
        Get or create the client for a Redis database.

        Args:
            url: Redis URL (default: REDIS_URL setting)
            db: Database index (default: REDIS_DB setting)

        Raises:
            ValueError: If the URL cannot be parsed.
        """
        key = (
            url or app_settings.REDIS_URL,
            app_settings.REDIS_DB if db is None else db,
        )
        if key not in cls._clients:
            pool = ConnectionPool.from_url(
                key[0],
                db=key[1],
                encoding="utf-8",
                decode_responses=True,
                socket_timeout=app_settings.REDIS_SOCKET_TIMEOUT,
                socket_connect_timeout=app_settings.REDIS_CONNECT_TIMEOUT,
            )
            cls._pools[key] = pool
            cls._clients[key] = Redis.from_pool(pool)
            logger.debug(f"Created Redis client for {key[0]} db={key[1]}")
        return cls._clients[key]

    @classmethod
    async def close_all(cls) -> None:
        """Disconnect every pool and forget the clients."""
        for (url, db), pool in cls._pools.items():
            try:
                await pool.disconnect()
            except (ConnectionError, OSError) as ex:
                logger.error(f"Error closing Redis pool {url} db={db}: {ex}")

        cls._pools.clear()
        cls._clients.clear()


def get_redis_connection(
    url: str | None = None, db: int | None = None
) -> Redis | None:
    try:
        return RedisClients.get(url, db)
    except ValueError as ex:
        logger.error(f"Invalid Redis configuration: {ex}")
        return None


async def close_redis_connections() -> None:
    """Close the count cache's Redis pools. Call on application shutdown."""
    await RedisClients.close_all()
