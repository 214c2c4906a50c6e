"""Base comum dos builders de payload WhatsApp."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from app.protocols.models import OutboundMessageRequest


class PayloadBuilder(Protocol):
    """Builder da parte específica de um tipo de mensagem."""

    def build(self, request: OutboundMessageRequest) -> dict[str, Any]: ...


def build_base_payload(request: OutboundMessageRequest) -> dict[str, Any]:
    """Campos comuns a toda mensagem enviada pela Cloud API."""
    return {
        "messaging_product": "whatsapp",
        "recipient_type": "individual",
        "to": request.to,
        "type": request.message_type,
    }
