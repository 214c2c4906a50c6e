"""Builder para mensagens de texto."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from app.protocols.models import OutboundMessageRequest


class TextPayloadBuilder:
    """Builder para mensagens de texto livre.

    A Meta só entrega texto livre dentro da janela de 24h aberta pelo
    usuário; fora dela o erro vem na resposta da API.
    """

    def build(self, request: OutboundMessageRequest) -> dict[str, Any]:
        return {
            "text": {
                "preview_url": False,
                "body": request.text,
            }
        }
