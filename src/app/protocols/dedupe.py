"""Protocolo de deduplicação de eventos inbound.

Interface leve (ABC) dependida pela Application.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class AsyncDedupeProtocol(ABC):
    """Contrato assíncrono para stores de deduplicação.

    Método canônico:
    - seen(key: str, ttl: int) -> bool
      Retorna True se a chave já foi vista (duplicado). Se não vista, marca-a
      com TTL e retorna False. Verificação e marcação são uma operação só.
    """

    @abstractmethod
    async def seen(self, key: str, ttl: int) -> bool:
        """Verifica e marca a chave de forma atômica.

        Args:
            key: Chave opaca (ex.: message_id da Meta). Nunca telefone.
            ttl: TTL em segundos

        Returns:
            True se já foi vista (duplicado); False se foi marcada agora (novo).
        """
