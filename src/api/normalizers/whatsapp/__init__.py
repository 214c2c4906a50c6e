"""Normalizer WhatsApp: envelope do webhook para eventos tipados.

Eventos produzidos: InboundMessageEvent, StatusEvent e UnknownEvent
(definidos em app/protocols/models.py).
"""

from .extractor import parse_webhook_event

__all__ = ["parse_webhook_event"]
