"""Unit tests for the cached last auto-reseed result."""
import json
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest
from redis.exceptions import RedisError

from reclassifier.models.reseed import AutoReseedResult, ReseedReason
from reclassifier.services.reseed.status_cache import (
    LAST_RESULT_KEY,
    LAST_RESULT_TTL_SECONDS,
    get_last_result,
    store_last_result,
)


@pytest.fixture
def result():
    return AutoReseedResult(
        triggered=True,
        reason=ReseedReason.TRIGGERED,
        pending_count=3,
        pending_threshold=100,
        scanned=40,
        proposed=7,
        enqueued=7,
        execution_id=uuid4(),
        source="auto_reseed_cron_20240101_000000",
        run_key="20240101_000000",
    )


class TestStoreLastResult:
    """Test store_last_result."""

    @pytest.mark.asyncio
    async def test_stores_json_with_ttl(self, result):
        redis = AsyncMock()

        stored = await store_last_result(redis, result)

        assert stored is True
        redis.set.assert_awaited_once()
        args, kwargs = redis.set.call_args
        assert args[0] == LAST_RESULT_KEY
        assert json.loads(args[1])["proposed"] == 7
        assert kwargs["ex"] == LAST_RESULT_TTL_SECONDS

    @pytest.mark.asyncio
    async def test_redis_failure_is_not_raised(self, result):
        redis = AsyncMock()
        redis.set.side_effect = RedisError("down")

        assert await store_last_result(redis, result) is False


class TestGetLastResult:
    """Test get_last_result."""

    @pytest.mark.asyncio
    async def test_round_trip_bytes(self, result):
        redis = AsyncMock()
        redis.get.return_value = json.dumps(result.to_dict()).encode()

        loaded = await get_last_result(redis)

        assert loaded == result
        redis.get.assert_awaited_once_with(LAST_RESULT_KEY)

    @pytest.mark.asyncio
    async def test_missing(self):
        redis = AsyncMock()
        redis.get.return_value = None

        assert await get_last_result(redis) is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("raw", ["not json", json.dumps({"reason": "unknown_reason"})])
    async def test_unreadable(self, raw):
        redis = AsyncMock()
        redis.get.return_value = raw

        assert await get_last_result(redis) is None

    @pytest.mark.asyncio
    async def test_redis_failure(self):
        redis = AsyncMock()
        redis.get.side_effect = RedisError("down")

        assert await get_last_result(redis) is None
