"""
Redis connection helpers for the key/value storage backend.

The backend stores JSON text and compares ids as strings, so the client
always decodes responses. Every socket operation is bounded by a timeout;
a slow or absent server surfaces as a RedisError instead of a hang.
"""

import logging

import redis.asyncio as redis
from redis.asyncio import Redis
from redis.exceptions import RedisError

from station_directory.config.settings import Config

logger = logging.getLogger(__name__)

REDIS_SOCKET_TIMEOUT = 5.0


async def create_redis_client(
    url: str | None = None, timeout: float = REDIS_SOCKET_TIMEOUT
) -> Redis:
    """
    Open a pooled client and make sure the server answers.

    Args:
        url: Redis URL (default: Config.REDIS_URL)
        timeout: Seconds allowed for connecting and for each command

    Raises:
        RedisError: If the server does not answer PING
    """
    url = url or Config.REDIS_URL
    client = redis.from_url(
        url,
        encoding="utf-8",
        decode_responses=True,
        socket_timeout=timeout,
        socket_connect_timeout=timeout,
    )
    try:
        await client.ping()
    except RedisError:
        await client.aclose()
        raise

    logger.info(f"[Redis] Connected to {url}")
    return client


async def close_redis_client(client: Redis) -> None:
    """Release the client's connection pool; called when the backend closes."""
    await client.aclose()
    logger.info("[Redis] Connection closed")
