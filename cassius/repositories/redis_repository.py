"""
Redis repository for connection pool management.

Provides singleton Redis client with async support for FastAPI integration.
Handles connection lifecycle, health checks, and graceful error handling.

Usage:
    redis_repo = RedisRepository()
    await redis_repo.connect()
    # Use redis_repo.get_client() for saved filter operations
    await redis_repo.disconnect()
"""
import logging
from typing import Optional
from redis import asyncio as aioredis
from redis.exceptions import RedisError, ConnectionError as RedisConnectionError
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type
)

from cassius.config import config

logger = logging.getLogger(__name__)


class RedisRepository:
    """
    Singleton repository for Redis connection management.

    One connection pool shared by every request; saved filter operations are
    short-lived HGET/HSET/HDEL calls.

    Attributes:
        client: Async Redis client for operations
        _pool: Connection pool backing the client
    """

    _instance: Optional['RedisRepository'] = None
    _initialized: bool = False

    def __new__(cls):
        """Singleton pattern: only one instance per application."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        """Initialize repository (only once due to singleton)."""
        if not RedisRepository._initialized:
            self.client: Optional[aioredis.Redis] = None
            self._pool: Optional[aioredis.ConnectionPool] = None
            RedisRepository._initialized = True
            logger.info("RedisRepository initialized (singleton)")

    def get_client(self) -> Optional[aioredis.Redis]:
        """
        Get the Redis client instance.

        Returns None if client not yet connected. This is the expected interface
        for FastAPI dependency injection (used in cassius/core/dependency.py).

        Returns:
            Redis client instance if connected, None otherwise
        """
        if self.client is None:
            logger.warning(
                "Redis client requested but not yet connected. "
                "Ensure FastAPI startup event has completed."
            )
        return self.client

    async def connect(self) -> None:
        """
        Establish the Redis connection pool and verify it with PING.

        Raises:
            RedisConnectionError: If connection fails after retries
        """
        if self.client is not None:
            logger.warning("Redis client already connected, skipping reconnect")
            return

        try:
            logger.info(
                f"Connecting to Redis at {config.REDIS_URL} "
                f"(pool: {config.REDIS_POOL_MAX_CONNECTIONS} connections)"
            )

            self._pool = aioredis.ConnectionPool.from_url(
                config.REDIS_URL,
                max_connections=config.REDIS_POOL_MAX_CONNECTIONS,
                decode_responses=True,  # Auto-decode bytes to str
                encoding='utf-8',
                socket_connect_timeout=config.REDIS_SOCKET_CONNECT_TIMEOUT,
                socket_timeout=config.REDIS_SOCKET_TIMEOUT,
                socket_keepalive=True,
                retry_on_timeout=True,
                health_check_interval=config.REDIS_HEALTH_CHECK_INTERVAL
            )
            self.client = aioredis.Redis(connection_pool=self._pool)

            await self._verify_connection()

            logger.info("✅ Redis connection established successfully")

        except RedisConnectionError as e:
            logger.error(f"❌ Failed to connect to Redis: {e}")
            await self.disconnect()
            raise
        except Exception as e:
            logger.error(f"❌ Unexpected error connecting to Redis: {e}")
            await self.disconnect()
            raise RedisConnectionError(f"Redis connection failed: {e}") from e

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=5),
        retry=retry_if_exception_type(RedisConnectionError),
        reraise=True
    )
    async def _verify_connection(self) -> None:
        """
        Verify Redis connection with PING command (with retry).

        Raises:
            RedisConnectionError: If PING fails after 3 attempts
        """
        if self.client is None:
            raise RedisConnectionError("Client not initialized")

        try:
            response = await self.client.ping()
            if not response:
                raise RedisConnectionError("PING returned False")
        except RedisConnectionError:
            raise
        except RedisError as e:
            logger.warning(f"Redis PING failed: {e}")
            raise RedisConnectionError(f"PING verification failed: {e}") from e

    async def disconnect(self) -> None:
        """
        Close Redis client and dispose the connection pool.

        Safe to call multiple times (idempotent).
        """
        try:
            if self.client is None and self._pool is None:
                return

            logger.info("Disconnecting from Redis...")

            if self.client is not None:
                await self.client.aclose()
                self.client = None

            if self._pool is not None:
                await self._pool.disconnect()
                self._pool = None

            logger.info("✅ Redis disconnected successfully")
        except Exception as e:
            logger.error(f"❌ Error disconnecting from Redis: {e}")
            # Don't raise - allow graceful shutdown

    async def health_check(self) -> dict:
        """
        Check Redis connection health.

        Returns:
            dict with status and optional error message
            Example: {"status": "healthy"} or {"status": "unhealthy", "error": "..."}
        """
        if self.client is None:
            return {"status": "unhealthy", "error": "Redis client not connected"}

        try:
            await self.client.ping()
            return {"status": "healthy"}
        except RedisError as e:
            logger.warning(f"Redis health check failed: {e}")
            return {"status": "unhealthy", "error": str(e)}
