"""Factory para obter o builder correto por tipo de mensagem."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from api.payload_builders.whatsapp.base import PayloadBuilder, build_base_payload
from api.payload_builders.whatsapp.template import TemplatePayloadBuilder
from api.payload_builders.whatsapp.text import TextPayloadBuilder
from app.constants.whatsapp import MessageType

if TYPE_CHECKING:
    from app.protocols.models import OutboundMessageRequest

_BUILDERS: dict[MessageType, PayloadBuilder] = {
    MessageType.TEXT: TextPayloadBuilder(),
    MessageType.TEMPLATE: TemplatePayloadBuilder(),
}


def get_payload_builder(message_type: MessageType) -> PayloadBuilder | None:
    """Retorna o builder para o tipo de mensagem, ou None se não suportado."""
    return _BUILDERS.get(message_type)


def build_full_payload(request: OutboundMessageRequest) -> dict[str, Any]:
    """Constrói payload completo para a API Meta.

    Raises:
        ValueError: Se tipo de mensagem não suportado
    """
    msg_type = MessageType(request.message_type)
    builder = get_payload_builder(msg_type)
    if builder is None:
        raise ValueError(f"Tipo de mensagem não suportado: {msg_type}")

    payload = build_base_payload(request)
    payload.update(builder.build(request))
    return payload
