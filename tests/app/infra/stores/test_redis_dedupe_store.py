"""Testes do RedisDedupeStore com cliente simulado."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest
from redis.exceptions import ConnectionError as RedisConnError

from app.infra.stores.redis_dedupe_store import RedisDedupeStore
from utils.errors import RedisConnectionError


class TestRedisDedupeStore:
    @pytest.mark.asyncio
    async def test_new_key_uses_set_nx_ex(self) -> None:
        client = AsyncMock()
        client.set.return_value = True
        store = RedisDedupeStore(client)

        assert await store.seen("wamid.1", ttl=86400) is False
        client.set.assert_awaited_once_with("agendai:dedupe:wamid.1", "1", nx=True, ex=86400)

    @pytest.mark.asyncio
    async def test_existing_key_is_duplicate(self) -> None:
        client = AsyncMock()
        client.set.return_value = None
        store = RedisDedupeStore(client)

        assert await store.seen("wamid.1", ttl=60) is True

    @pytest.mark.asyncio
    async def test_custom_prefix(self) -> None:
        client = AsyncMock()
        client.set.return_value = True
        store = RedisDedupeStore(client, prefix="test:")

        await store.seen("k", ttl=1)

        assert client.set.await_args.args[0] == "test:k"

    @pytest.mark.asyncio
    async def test_redis_error_is_wrapped(self) -> None:
        client = AsyncMock()
        client.set.side_effect = RedisConnError("down")
        store = RedisDedupeStore(client)

        with pytest.raises(RedisConnectionError):
            await store.seen("wamid.1", ttl=60)

    @pytest.mark.asyncio
    async def test_ping(self) -> None:
        client = AsyncMock()
        client.ping.return_value = True
        assert await RedisDedupeStore(client).ping() is True
