"""Use cases específicos de WhatsApp."""

from .process_inbound_message import InboundMessageHandler

__all__ = [
    "InboundMessageHandler",
]
