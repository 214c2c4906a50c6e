"""Stores: implementações concretas de persistência.

Módulos disponíveis:
    - firestore_appointment_store: compromissos e lembretes (Firestore)
    - firestore_user_directory: perfis de usuário (Firestore)
    - firestore_delivery_log_store: log de entrega e notificações (Firestore)
    - redis_dedupe_store: dedupe de webhooks (Redis)
    - memory_stores: stores em memória para desenvolvimento/testes
"""

from __future__ import annotations

from app.infra.stores.firestore_appointment_store import (
    FirestoreAppointmentStore,
    FirestoreReminderStore,
)
from app.infra.stores.firestore_delivery_log_store import (
    FirestoreDeliveryLogStore,
    FirestoreNotificationStore,
)
from app.infra.stores.firestore_user_directory import FirestoreUserDirectory
from app.infra.stores.memory_stores import (
    MemoryAppointmentStore,
    MemoryDedupeStore,
    MemoryDeliveryLogStore,
    MemoryNotificationStore,
    MemoryReminderStore,
    MemoryUserDirectory,
)
from app.infra.stores.redis_dedupe_store import RedisDedupeStore

__all__ = [
    # Firestore
    "FirestoreAppointmentStore",
    "FirestoreDeliveryLogStore",
    "FirestoreNotificationStore",
    "FirestoreReminderStore",
    "FirestoreUserDirectory",
    # Memory (dev/test)
    "MemoryAppointmentStore",
    "MemoryDedupeStore",
    "MemoryDeliveryLogStore",
    "MemoryNotificationStore",
    "MemoryReminderStore",
    "MemoryUserDirectory",
    # Redis
    "RedisDedupeStore",
]
