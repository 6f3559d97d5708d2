from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Any


class AsyncRedisManager:
    """Lazily created ``redis.asyncio`` client shared by the rate limiter.

    Unknown attributes are forwarded as awaitable commands, so the manager can
    stand in wherever a redis client is expected.
    """

    def __init__(
        self,
        url: str,
        *,
        client_factory: Callable[[str], Any] | None = None,
    ) -> None:
        self._url = url
        self._client_factory = client_factory
        self._client: Any | None = None
        self._lock = asyncio.Lock()

    async def get_client(self) -> Any:
        async with self._lock:
            if self._client is None:
                self._client = self._new_client()
            return self._client

    async def close(self) -> None:
        async with self._lock:
            if self._client is not None:
                try:
                    await self._client.close()
                finally:
                    self._client = None

    async def execute(self, operation: str, *args, **kwargs):
        client = await self.get_client()
        return await getattr(client, operation)(*args, **kwargs)

    def _new_client(self) -> Any:
        if self._client_factory is not None:
            return self._client_factory(self._url)
        import redis.asyncio as redis

        return redis.from_url(
            self._url,
            encoding="utf-8",
            decode_responses=True,
            socket_connect_timeout=5,
            socket_timeout=5,
            health_check_interval=30,
        )

    def __getattr__(self, name: str):
        if name.startswith("_"):
            raise AttributeError(name)

        async def _call(*args, **kwargs):
            return await self.execute(name, *args, **kwargs)

        return _call


def create_redis_client(url: str | None) -> AsyncRedisManager | None:
    if not url:
        return None
    return AsyncRedisManager(url)
