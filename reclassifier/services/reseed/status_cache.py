"""Last auto-reseed result cached in Redis.

The worker stores the result of every invocation so admin panels can poll
it without querying the database. Failures here are logged and never
change the outcome of a run.
"""
import json
from typing import Optional

import structlog
from redis.asyncio import Redis
from redis.exceptions import RedisError
from pydantic import ValidationError as PydanticValidationError

from reclassifier.models.reseed import AutoReseedResult

logger = structlog.get_logger(__name__)

# Redis key constants
LAST_RESULT_KEY = "taxonomy_remap:auto_reseed:last_result"

# Keep the last result for a day
LAST_RESULT_TTL_SECONDS = 86400


async def store_last_result(
    redis: Redis,
    result: AutoReseedResult,
    ttl_seconds: int = LAST_RESULT_TTL_SECONDS,
) -> bool:
    """Store the latest auto-reseed result.

    Args:
        redis: Redis connection
        result: Result to store
        ttl_seconds: Key TTL in seconds

    Returns:
        True if the result was stored
    """
    try:
        await redis.set(LAST_RESULT_KEY, json.dumps(result.to_dict()), ex=ttl_seconds)
        logger.debug("auto_reseed_last_result_stored", reason=result.reason.value)
        return True
    except RedisError as e:
        logger.error("auto_reseed_last_result_store_failed", error=str(e))
        return False


async def get_last_result(redis: Redis) -> Optional[AutoReseedResult]:
    """Latest stored result, or None when missing or unreadable."""
    try:
        raw = await redis.get(LAST_RESULT_KEY)
        if not raw:
            return None
        if isinstance(raw, bytes):
            raw = raw.decode()
        return AutoReseedResult(**json.loads(raw))
    except (json.JSONDecodeError, PydanticValidationError, RedisError) as e:
        logger.error("auto_reseed_last_result_read_failed", error=str(e))
        return None
