import logging

import redis.asyncio as redis
from app.core.config import settings

logger = logging.getLogger(__name__)

redis_client = None


async def get_redis() -> redis.Redis:
    """Get Redis client"""
    return redis_client


async def init_redis():
    """Initialize Redis connection"""
    global redis_client
    redis_client = redis.from_url(settings.REDIS_URL, decode_responses=True)

    # Test connection
    try:
        await redis_client.ping()
        logger.info("Redis connection established")
    except Exception as e:
        logger.error("Redis connection failed: %s", e)
        raise


async def close_redis():
    """Close the Redis connection opened by init_redis"""
    global redis_client
    if redis_client is not None:
        await redis_client.aclose()
        redis_client = None
