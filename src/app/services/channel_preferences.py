"""Preferências de canal: habilitar/desabilitar WhatsApp para um usuário.

O telefone gravado aqui é o que o webhook usa para achar o dono de uma
mensagem, então toda troca de telefone invalida o cache do OwnerLookup
para o número antigo e para o novo.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from app.services.phone import is_valid_whatsapp_phone, normalize_phone
from app.services.replies import INVALID_PHONE_MESSAGE

if TYPE_CHECKING:
    from app.protocols.user_directory import UserDirectoryProtocol
    from app.services.owner_lookup import OwnerLookup

logger = logging.getLogger(__name__)

USER_NOT_FOUND_MESSAGE = "Usuário não encontrado"


@dataclass(frozen=True, slots=True)
class ChannelUpdateResult:
    success: bool
    phone: str | None = None
    error: str | None = None
    not_found: bool = False


@dataclass(frozen=True, slots=True)
class WhatsappPreference:
    enabled: bool
    phone: str | None


class ChannelPreferenceService:
    """Valida o telefone antes de gravar a preferência de canal."""

    def __init__(
        self,
        user_directory: UserDirectoryProtocol,
        owner_lookup: OwnerLookup | None = None,
    ) -> None:
        self._users = user_directory
        self._owner_lookup = owner_lookup

    async def get_whatsapp(self, user_id: str) -> WhatsappPreference | None:
        user = await self._users.get(user_id)
        if user is None:
            return None
        return WhatsappPreference(enabled=user.whatsapp_enabled, phone=user.phone)

    async def update_whatsapp(
        self,
        user_id: str,
        phone: str | None,
        enabled: bool,
    ) -> ChannelUpdateResult:
        """Habilitar exige telefone válido; desabilitar aceita qualquer valor.

        Sem `phone`, vale o telefone já gravado. O telefone é gravado já
        normalizado (+55DDDNUMERO).
        """
        current = await self._users.get(user_id)
        if current is None:
            return ChannelUpdateResult(
                success=False, error=USER_NOT_FOUND_MESSAGE, not_found=True
            )

        candidate = phone or current.phone
        if enabled and not is_valid_whatsapp_phone(candidate):
            return ChannelUpdateResult(success=False, error=INVALID_PHONE_MESSAGE)

        normalized = normalize_phone(candidate) if candidate else None
        if not await self._users.update_whatsapp(user_id, phone=normalized, enabled=enabled):
            return ChannelUpdateResult(
                success=False, error=USER_NOT_FOUND_MESSAGE, not_found=True
            )

        if self._owner_lookup is not None:
            self._owner_lookup.invalidate(current.phone)
            self._owner_lookup.invalidate(normalized)

        logger.info(
            "whatsapp_channel_updated",
            extra={
                "user_id": user_id,
                "whatsapp_enabled": enabled,
                "phone_changed": current.phone != normalized,
            },
        )
        return ChannelUpdateResult(success=True, phone=normalized)
