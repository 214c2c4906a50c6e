"""Factories de stores baseadas em configuração de ambiente.

STORE_BACKEND escolhe memory|firestore para compromissos, lembretes,
usuários e auditoria. DEDUPE_BACKEND escolhe memory|redis para o dedupe.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.bootstrap.clients import create_async_redis_client, create_firestore_client
from app.infra.stores import (
    FirestoreAppointmentStore,
    FirestoreDeliveryLogStore,
    FirestoreNotificationStore,
    FirestoreReminderStore,
    FirestoreUserDirectory,
    MemoryAppointmentStore,
    MemoryDedupeStore,
    MemoryDeliveryLogStore,
    MemoryNotificationStore,
    MemoryReminderStore,
    MemoryUserDirectory,
    RedisDedupeStore,
)
from config.settings import get_base_settings, get_dedupe_settings, get_firestore_settings

if TYPE_CHECKING:
    from app.protocols.appointment_store import (
        AppointmentStoreProtocol,
        ReminderStoreProtocol,
    )
    from app.protocols.dedupe import AsyncDedupeProtocol
    from app.protocols.delivery_log_store import (
        DeliveryLogStoreProtocol,
        NotificationStoreProtocol,
    )
    from app.protocols.user_directory import UserDirectoryProtocol

logger = logging.getLogger(__name__)


def _use_firestore(store_name: str) -> bool:
    backend = get_firestore_settings().backend
    if backend == "memory" and not get_base_settings().is_development:
        logger.warning(
            "memory_store_in_non_dev",
            extra={"store": store_name, "environment": get_base_settings().environment},
        )
    logger.info(f"{store_name}_store_created", extra={"backend": backend})
    return backend == "firestore"


def create_appointment_store() -> AppointmentStoreProtocol:
    """Cria store de compromissos."""
    if _use_firestore("appointment"):
        return FirestoreAppointmentStore(
            create_firestore_client(),
            get_firestore_settings().collection_appointments,
        )
    return MemoryAppointmentStore()


def create_reminder_store() -> ReminderStoreProtocol:
    """Cria store de lembretes."""
    if _use_firestore("reminder"):
        return FirestoreReminderStore(
            create_firestore_client(),
            get_firestore_settings().collection_reminders,
        )
    return MemoryReminderStore()


def create_user_directory() -> UserDirectoryProtocol:
    """Cria diretório de usuários."""
    if _use_firestore("user_directory"):
        return FirestoreUserDirectory(
            create_firestore_client(),
            get_firestore_settings().collection_users,
        )
    return MemoryUserDirectory()


def create_delivery_log_store() -> DeliveryLogStoreProtocol:
    """Cria store do log de entrega WhatsApp."""
    if _use_firestore("delivery_log"):
        return FirestoreDeliveryLogStore(
            create_firestore_client(),
            get_firestore_settings().collection_delivery_log,
        )
    return MemoryDeliveryLogStore()


def create_notification_store() -> NotificationStoreProtocol:
    """Cria store do histórico de notificações."""
    if _use_firestore("notification"):
        return FirestoreNotificationStore(
            create_firestore_client(),
            get_firestore_settings().collection_notifications,
        )
    return MemoryNotificationStore()


def create_dedupe_store() -> AsyncDedupeProtocol:
    """Cria store de dedupe baseado na configuração."""
    backend = get_dedupe_settings().backend

    if backend == "redis":
        store: AsyncDedupeProtocol = RedisDedupeStore(create_async_redis_client())
        logger.info("dedupe_store_created", extra={"backend": "redis"})
        return store

    if not get_base_settings().is_development:
        logger.warning(
            "memory_dedupe_in_non_dev",
            extra={"backend": "memory", "environment": get_base_settings().environment},
        )
    logger.info("dedupe_store_created", extra={"backend": "memory"})
    return MemoryDedupeStore()
