"""Extrator do envelope de webhook da WhatsApp Cloud API.

Formato recebido (simplificado):

    {"entry": [{"changes": [{"value": {
        "contacts": [{"profile": {"name": "..."}, "wa_id": "..."}],
        "messages": [{"id": "wamid...", "from": "5511...", "type": "text",
                      "text": {"body": "..."}}],
        "statuses": [{"id": "wamid...", "status": "delivered"}]
    }}]}]}

Só o primeiro entry/change/value é considerado. Não faz validação de
negócio nem levanta exceção: envelopes desconhecidos viram UnknownEvent.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import TypeAdapter, ValidationError

from app.protocols.models import UnknownEvent, WebhookEvent

from ._extraction_helpers import (
    extract_contact_name,
    extract_first_value,
    extract_text_body,
    parse_timestamp,
)

logger = logging.getLogger(__name__)

_EVENT_ADAPTER: TypeAdapter[WebhookEvent] = TypeAdapter(WebhookEvent)


def parse_webhook_event(payload: dict[str, Any]) -> WebhookEvent:
    """Classifica o payload em mensagem, status ou desconhecido."""
    value = extract_first_value(payload)
    if value is None:
        return UnknownEvent(reason="missing_value")

    messages = value.get("messages")
    if isinstance(messages, list) and messages and isinstance(messages[0], dict):
        return _build_event(_message_fields(messages[0], value))

    statuses = value.get("statuses")
    if isinstance(statuses, list) and statuses and isinstance(statuses[0], dict):
        status = statuses[0]
        return _build_event(
            {
                "kind": "status",
                "message_id": status.get("id"),
                "status": status.get("status") or "unknown",
                "recipient_id": status.get("recipient_id"),
            }
        )

    return UnknownEvent(reason="no_messages_or_statuses")


def _message_fields(msg: dict[str, Any], value: dict[str, Any]) -> dict[str, Any]:
    message_type = msg.get("type") or "unsupported"
    return {
        "kind": "message",
        "message_id": msg.get("id"),
        "from_number": msg.get("from"),
        "message_type": message_type,
        "text": extract_text_body(msg) if message_type == "text" else None,
        "timestamp": parse_timestamp(msg.get("timestamp")),
        "contact_name": extract_contact_name(value),
    }


def _build_event(fields: dict[str, Any]) -> WebhookEvent:
    try:
        return _EVENT_ADAPTER.validate_python(fields)
    except ValidationError as exc:
        logger.info(
            "webhook_event_invalid",
            extra={"kind": fields.get("kind"), "error_count": exc.error_count()},
        )
        return UnknownEvent(reason=f"invalid_{fields.get('kind', 'event')}")
