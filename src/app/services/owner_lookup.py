"""Busca do dono de um telefone com cache TTL.

O WhatsApp entrega o número no formato da operadora (às vezes sem o 9),
então a busca compara apenas os últimos 9 dígitos. Só resultados
encontrados entram no cache: um usuário recém-cadastrado é visto na
mensagem seguinte.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.infra.cache import TTLCache
from app.services.phone import phone_digits_suffix

if TYPE_CHECKING:
    from app.domain.appointment import UserProfile
    from app.protocols.user_directory import UserDirectoryProtocol

logger = logging.getLogger(__name__)


class OwnerLookup:
    def __init__(
        self,
        user_directory: UserDirectoryProtocol,
        cache: TTLCache[UserProfile] | None = None,
    ) -> None:
        self._users = user_directory
        self._cache: TTLCache[UserProfile] = (
            cache if cache is not None else TTLCache(name="owner_lookup")
        )

    async def find(self, phone: str) -> UserProfile | None:
        suffix = phone_digits_suffix(phone)
        if not suffix:
            return None

        cached = self._cache.get(suffix)
        if cached is not None:
            return cached

        matches = await self._users.find_by_phone_suffix(suffix)
        if not matches:
            return None
        if len(matches) > 1:
            # Sufixo ambíguo: usa o primeiro
            logger.warning(
                "owner_lookup_ambiguous",
                extra={"match_count": len(matches), "user_id": matches[0].id},
            )
        owner = matches[0]
        self._cache.set(suffix, owner)
        return owner

    def invalidate(self, phone: str | None) -> None:
        """Descarta o dono em cache para o sufixo deste telefone."""
        suffix = phone_digits_suffix(phone)
        if suffix and self._cache.invalidate(suffix):
            logger.debug("owner_lookup_invalidated", extra={"suffix_len": len(suffix)})
