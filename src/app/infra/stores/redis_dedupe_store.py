"""Redis Dedupe Store: deduplicação de mensagens inbound.

A Meta reentrega o mesmo webhook quando não recebe 200 a tempo; a chave
é o wamid da mensagem. Usa SET NX EX para que verificação e marcação
sejam uma operação atômica, mesmo com várias instâncias do serviço.

Contrato de Keys:
    As keys devem ser IDs opacos (wamid). NUNCA passar telefone como key.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from redis.exceptions import RedisError

from app.protocols.dedupe import AsyncDedupeProtocol
from utils.errors import RedisConnectionError

if TYPE_CHECKING:
    from redis.asyncio import Redis as AsyncRedis

logger = logging.getLogger(__name__)

DEDUPE_PREFIX = "agendai:dedupe:"


class RedisDedupeStore(AsyncDedupeProtocol):
    """Store de dedupe usando redis.asyncio.

    Args:
        async_redis_client: Cliente Redis assíncrono
        prefix: Namespace das chaves
    """

    def __init__(
        self,
        async_redis_client: AsyncRedis,
        prefix: str = DEDUPE_PREFIX,
    ) -> None:
        self._redis = async_redis_client
        self._prefix = prefix

    def _key(self, key: str) -> str:
        return f"{self._prefix}{key}"

    async def seen(self, key: str, ttl: int) -> bool:
        """SET NX EX: cria a chave e retorna False, ou retorna True se já existia.

        Raises:
            RedisConnectionError: Se o Redis estiver indisponível
        """
        try:
            was_set = await self._redis.set(self._key(key), "1", nx=True, ex=ttl)
        except RedisError as exc:
            raise RedisConnectionError("Falha ao consultar dedupe no Redis") from exc

        is_duplicate = not was_set
        if is_duplicate:
            key_masked = key[:8] + "..." if len(key) > 8 else key
            logger.debug("dedupe_duplicate_detected", extra={"key": key_masked})
        return is_duplicate

    async def ping(self) -> bool:
        """Verifica conectividade (usado no startup)."""
        try:
            return bool(await self._redis.ping())
        except RedisError as exc:
            raise RedisConnectionError("Redis indisponível") from exc
