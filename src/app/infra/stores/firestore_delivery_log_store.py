"""Firestore stores de auditoria de envio.

Append-only: cada tentativa de envio e cada notificação de lembrete vira
um documento novo, sem updates. TTL fica a cargo das policies do Firestore
sobre `created_at`/`sent_at`.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from app.infra.stores.firestore_documents import FIRESTORE_ERRORS, to_document, unavailable

if TYPE_CHECKING:
    from google.cloud.firestore import Client as FirestoreClient

    from app.domain.delivery import DeliveryLogEntry, NotificationRecord

logger = logging.getLogger(__name__)

DELIVERY_LOG_COLLECTION = "whatsapp_logs"
NOTIFICATIONS_COLLECTION = "notificacoes"


class FirestoreDeliveryLogStore:
    """Log de entrega WhatsApp usando Firestore.

    Args:
        firestore_client: Cliente Firestore
        collection_name: Nome da collection (default: whatsapp_logs)
    """

    def __init__(
        self,
        firestore_client: FirestoreClient,
        collection_name: str = DELIVERY_LOG_COLLECTION,
    ) -> None:
        self._db = firestore_client
        self._collection = collection_name

    async def append(self, entry: DeliveryLogEntry) -> None:
        await asyncio.to_thread(self._append_sync, entry)

    def _append_sync(self, entry: DeliveryLogEntry) -> None:
        try:
            self._db.collection(self._collection).document(entry.id).set(
                to_document(entry, exclude={"id"})
            )
        except FIRESTORE_ERRORS as exc:
            logger.error(
                "delivery_log_append_error",
                extra={"log_type": entry.log_type.value, "error_type": type(exc).__name__},
            )
            raise unavailable("delivery_log_append", exc) from exc
        logger.debug(
            "delivery_log_appended",
            extra={"doc_id": entry.id, "log_type": entry.log_type.value},
        )


class FirestoreNotificationStore:
    """Histórico de notificações de lembretes usando Firestore."""

    def __init__(
        self,
        firestore_client: FirestoreClient,
        collection_name: str = NOTIFICATIONS_COLLECTION,
    ) -> None:
        self._db = firestore_client
        self._collection = collection_name

    async def append(self, record: NotificationRecord) -> None:
        await asyncio.to_thread(self._append_sync, record)

    def _append_sync(self, record: NotificationRecord) -> None:
        try:
            self._db.collection(self._collection).document(record.id).set(
                to_document(record, exclude={"id"})
            )
        except FIRESTORE_ERRORS as exc:
            logger.error(
                "notification_append_error",
                extra={"reminder_id": record.reminder_id, "error_type": type(exc).__name__},
            )
            raise unavailable("notification_append", exc) from exc
