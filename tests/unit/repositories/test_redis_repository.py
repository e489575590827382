"""
Unit tests for RedisRepository (singleton connection manager).
"""
import pytest
from unittest.mock import AsyncMock, Mock, patch
from redis import asyncio as aioredis
from redis.exceptions import ConnectionError as RedisConnectionError, RedisError

from cassius.repositories.redis_repository import RedisRepository


@pytest.fixture
def redis_repo():
    """Fresh singleton per test."""
    RedisRepository._instance = None
    RedisRepository._initialized = False
    repo = RedisRepository()
    yield repo
    RedisRepository._instance = None
    RedisRepository._initialized = False


@pytest.fixture
def mock_pool():
    pool = Mock()
    pool.disconnect = AsyncMock()
    return pool


@pytest.fixture
def mock_client():
    client = AsyncMock()
    client.ping = AsyncMock(return_value=True)
    client.aclose = AsyncMock()
    return client


class TestRedisRepository:

    def test_singleton(self, redis_repo):
        assert RedisRepository() is redis_repo

    def test_get_client_before_connect_is_none(self, redis_repo):
        assert redis_repo.get_client() is None

    @pytest.mark.asyncio
    async def test_connect_verifies_with_ping(self, redis_repo, mock_pool, mock_client):
        with patch.object(aioredis.ConnectionPool, "from_url", return_value=mock_pool), \
                patch.object(aioredis, "Redis", return_value=mock_client):
            await redis_repo.connect()

        assert redis_repo.get_client() is mock_client
        mock_client.ping.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_connect_twice_is_noop(self, redis_repo, mock_pool, mock_client):
        with patch.object(aioredis.ConnectionPool, "from_url", return_value=mock_pool) as from_url, \
                patch.object(aioredis, "Redis", return_value=mock_client):
            await redis_repo.connect()
            await redis_repo.connect()

        from_url.assert_called_once()

    @pytest.mark.asyncio
    async def test_connect_failure_retries_and_cleans_up(self, redis_repo, mock_pool, mock_client):
        mock_client.ping.side_effect = RedisConnectionError("refused")

        with patch.object(aioredis.ConnectionPool, "from_url", return_value=mock_pool), \
                patch.object(aioredis, "Redis", return_value=mock_client):
            with pytest.raises(RedisConnectionError):
                await redis_repo.connect()

        assert mock_client.ping.await_count == 3
        assert redis_repo.client is None
        mock_pool.disconnect.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_health_check_not_connected(self, redis_repo):
        result = await redis_repo.health_check()
        assert result["status"] == "unhealthy"

    @pytest.mark.asyncio
    async def test_health_check_ping_error(self, redis_repo, mock_client):
        redis_repo.client = mock_client
        mock_client.ping.side_effect = RedisError("timeout")

        result = await redis_repo.health_check()

        assert result == {"status": "unhealthy", "error": "timeout"}

    @pytest.mark.asyncio
    async def test_disconnect_is_idempotent(self, redis_repo, mock_pool, mock_client):
        redis_repo.client = mock_client
        redis_repo._pool = mock_pool

        await redis_repo.disconnect()
        await redis_repo.disconnect()

        mock_client.aclose.assert_awaited_once()
        mock_pool.disconnect.assert_awaited_once()
        assert redis_repo.client is None
