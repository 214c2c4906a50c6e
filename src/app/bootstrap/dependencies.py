"""Wiring de serviços e use cases (singletons por processo).

As rotas obtêm dependências daqui via FastAPI Depends; os testes
substituem com `app.dependency_overrides`.
"""

from __future__ import annotations

from functools import lru_cache
from typing import TYPE_CHECKING

from app.bootstrap.dependencies_stores import (
    create_appointment_store,
    create_dedupe_store,
    create_delivery_log_store,
    create_notification_store,
    create_reminder_store,
    create_user_directory,
)
from app.bootstrap.whatsapp_adapters import GraphApiMessageSender, GraphApiWebhookParser
from app.infra.cache import TTLCache
from app.services.appointment_service import AppointmentService
from app.services.channel_preferences import ChannelPreferenceService
from app.services.owner_lookup import OwnerLookup
from app.use_cases.reminders import ReminderDispatcher
from app.use_cases.whatsapp import InboundMessageHandler
from config.settings import (
    get_dedupe_settings,
    get_reminder_settings,
    get_whatsapp_settings,
)

if TYPE_CHECKING:
    from app.protocols.appointment_store import (
        AppointmentStoreProtocol,
        ReminderStoreProtocol,
    )
    from app.protocols.delivery_log_store import (
        DeliveryLogStoreProtocol,
        NotificationStoreProtocol,
    )
    from app.protocols.user_directory import UserDirectoryProtocol


@lru_cache(maxsize=1)
def get_appointment_store() -> AppointmentStoreProtocol:
    return create_appointment_store()


@lru_cache(maxsize=1)
def get_reminder_store() -> ReminderStoreProtocol:
    return create_reminder_store()


@lru_cache(maxsize=1)
def get_user_directory() -> UserDirectoryProtocol:
    return create_user_directory()


@lru_cache(maxsize=1)
def get_delivery_log_store() -> DeliveryLogStoreProtocol:
    return create_delivery_log_store()


@lru_cache(maxsize=1)
def get_notification_store() -> NotificationStoreProtocol:
    return create_notification_store()


@lru_cache(maxsize=1)
def get_message_sender() -> GraphApiMessageSender:
    """Sender WhatsApp compartilhado por webhook e cron."""
    return GraphApiMessageSender(get_whatsapp_settings(), get_delivery_log_store())


@lru_cache(maxsize=1)
def get_appointment_service() -> AppointmentService:
    reminder_settings = get_reminder_settings()
    return AppointmentService(
        get_appointment_store(),
        get_reminder_store(),
        lead_minutes=reminder_settings.default_lead_minutes,
        upcoming_limit=reminder_settings.upcoming_limit,
    )


def get_reminder_dispatcher() -> ReminderDispatcher:
    """Despachante novo por invocação do cron (stores compartilhados)."""
    reminder_settings = get_reminder_settings()
    return ReminderDispatcher(
        reminder_store=get_reminder_store(),
        appointment_store=get_appointment_store(),
        user_directory=get_user_directory(),
        sender=get_message_sender(),
        notification_store=get_notification_store(),
        tz=reminder_settings.tzinfo,
        template_name=get_whatsapp_settings().reminder_template_name,
        time_budget_seconds=reminder_settings.scan_time_budget_seconds,
    )


@lru_cache(maxsize=1)
def get_owner_lookup() -> OwnerLookup:
    """Compartilhado entre webhook e preferências para invalidar o mesmo cache."""
    return OwnerLookup(
        get_user_directory(),
        TTLCache(
            get_reminder_settings().owner_lookup_cache_ttl_seconds,
            name="owner_lookup",
        ),
    )


@lru_cache(maxsize=1)
def get_channel_preference_service() -> ChannelPreferenceService:
    return ChannelPreferenceService(get_user_directory(), get_owner_lookup())


@lru_cache(maxsize=1)
def get_inbound_handler() -> InboundMessageHandler:
    reminder_settings = get_reminder_settings()
    return InboundMessageHandler(
        parser=GraphApiWebhookParser(),
        dedupe=create_dedupe_store(),
        sender=get_message_sender(),
        log_store=get_delivery_log_store(),
        owner_lookup=get_owner_lookup(),
        appointments=get_appointment_service(),
        tz=reminder_settings.tzinfo,
        dedupe_ttl_seconds=get_dedupe_settings().ttl_seconds,
    )
