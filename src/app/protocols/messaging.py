"""Protocolos de envio de mensagens.

Evitam que app/ dependa diretamente da camada api/.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from collections.abc import Sequence

    from app.domain.delivery import SendResult


class WhatsAppHttpClientProtocol(Protocol):
    """Contrato mínimo para cliente HTTP do WhatsApp."""

    async def send_message(
        self,
        endpoint: str,
        access_token: str,
        payload: dict[str, Any],
    ) -> dict[str, Any]: ...


class MessageSenderProtocol(Protocol):
    """Contrato do sender usado pelo despachante e pelo webhook."""

    @property
    def is_configured(self) -> bool: ...

    async def send_text(
        self,
        destination: str,
        body: str,
        user_id: str | None = None,
    ) -> SendResult: ...

    async def send_template(
        self,
        destination: str,
        template_name: str,
        params: Sequence[str],
        user_id: str | None = None,
    ) -> SendResult: ...
