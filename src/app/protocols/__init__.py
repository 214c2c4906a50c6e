"""Protocolos e contratos do core da aplicação."""

from .appointment_store import AppointmentStoreProtocol, ReminderStoreProtocol
from .dedupe import AsyncDedupeProtocol
from .delivery_log_store import DeliveryLogStoreProtocol, NotificationStoreProtocol
from .messaging import MessageSenderProtocol, WhatsAppHttpClientProtocol
from .models import (
    InboundMessageEvent,
    OutboundMessageRequest,
    StatusEvent,
    UnknownEvent,
    WebhookEvent,
)
from .normalizer import WebhookParserProtocol
from .user_directory import UserDirectoryProtocol

__all__ = [
    "AppointmentStoreProtocol",
    "AsyncDedupeProtocol",
    "DeliveryLogStoreProtocol",
    "InboundMessageEvent",
    "MessageSenderProtocol",
    "NotificationStoreProtocol",
    "OutboundMessageRequest",
    "ReminderStoreProtocol",
    "StatusEvent",
    "UnknownEvent",
    "UserDirectoryProtocol",
    "WebhookEvent",
    "WebhookParserProtocol",
    "WhatsAppHttpClientProtocol",
]
