"""Shared rate limiter.

Routes that fan out to the upstream APIs are decorated with
``limiter.limit(settings.UPSTREAM_RATE_LIMIT)``.  Counters live in Redis
when ``REDIS_URL`` answers a ping, in process memory otherwise.
"""

import logging

import redis as sync_redis
from slowapi import Limiter
from slowapi.util import get_remote_address

from app.config import settings

logger = logging.getLogger(__name__)


def _redis_reachable(url: str) -> bool:
    try:
        client = sync_redis.from_url(url, socket_connect_timeout=1)
        try:
            client.ping()
        finally:
            client.close()
    except sync_redis.RedisError:
        return False
    return True


def create_limiter(redis_url: str | None = None) -> Limiter:
    """Build a limiter keyed on the client address.

    There are no default limits: only routes decorated with
    ``limiter.limit`` are counted.
    """
    redis_url = redis_url or settings.REDIS_URL

    if _redis_reachable(redis_url):
        logger.info("Rate limiter: Redis storage (%s)", redis_url)
        return Limiter(key_func=get_remote_address, storage_uri=redis_url)

    logger.warning("Rate limiter: Redis unavailable, using in-memory storage")
    return Limiter(key_func=get_remote_address)


def reset_limits() -> None:
    """Clear all counters of the shared limiter, where the storage supports it."""
    storage = getattr(limiter, "_storage", None)
    if storage is not None and hasattr(storage, "reset"):
        storage.reset()


limiter = create_limiter()
