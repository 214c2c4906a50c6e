"""Agregador de settings do AgendAI.

Re-exporta todas as settings e funções de cada módulo.
Organização por domínio para isolamento de mudanças.
"""

from __future__ import annotations

# Base settings
from config.settings.base import (
    BaseSettings,
    DedupeBackend,
    DedupeSettings,
    Environment,
    get_base_settings,
    get_dedupe_settings,
)

# Infrastructure settings
from config.settings.infra import (
    FirestoreSettings,
    StoreBackend,
    get_firestore_settings,
)

# Reminder pipeline settings
from config.settings.reminders import (
    DEFAULT_TIMEZONE,
    ReminderSettings,
    get_reminder_settings,
)

# Channel-specific settings
from config.settings.whatsapp import (
    GRAPH_API_BASE_URL,
    GRAPH_API_VERSION,
    REMINDER_TEMPLATE_NAME,
    TEMPLATE_LANGUAGE_CODE,
    WhatsAppSettings,
    get_whatsapp_settings,
)

__all__ = [
    # Constants
    "DEFAULT_TIMEZONE",
    "GRAPH_API_BASE_URL",
    "GRAPH_API_VERSION",
    "REMINDER_TEMPLATE_NAME",
    "TEMPLATE_LANGUAGE_CODE",
    # Base
    "BaseSettings",
    "DedupeBackend",
    "DedupeSettings",
    "Environment",
    # Infrastructure
    "FirestoreSettings",
    "ReminderSettings",
    "StoreBackend",
    # Channels
    "WhatsAppSettings",
    "get_base_settings",
    "get_dedupe_settings",
    "get_firestore_settings",
    "get_reminder_settings",
    "get_whatsapp_settings",
]
