"""Protocolo de interpretação do envelope de webhook."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from .models import WebhookEvent


class WebhookParserProtocol(Protocol):
    """Converte o payload bruto do provedor em um evento tipado.

    Nunca levanta exceção: payloads desconhecidos viram UnknownEvent.
    """

    def parse(self, payload: dict[str, Any]) -> WebhookEvent: ...
