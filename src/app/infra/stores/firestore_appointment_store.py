"""Firestore stores de compromissos e lembretes.

O SDK Python do Firestore é síncrono; cada chamada roda em
asyncio.to_thread para não bloquear o event loop.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from google.cloud import firestore
from google.cloud.firestore_v1.base_query import FieldFilter

from app.domain.appointment import (
    Appointment,
    AppointmentStatus,
    NotificationChannel,
    Reminder,
)
from app.infra.stores.firestore_documents import (
    FIRESTORE_ERRORS,
    from_document,
    to_document,
    unavailable,
)

if TYPE_CHECKING:
    from datetime import datetime

    from google.cloud.firestore import Client as FirestoreClient
    from google.cloud.firestore import DocumentReference, Transaction

logger = logging.getLogger(__name__)

APPOINTMENTS_COLLECTION = "compromissos"
REMINDERS_COLLECTION = "lembretes"


class FirestoreAppointmentStore:
    """Store de compromissos usando Firestore."""

    def __init__(
        self,
        firestore_client: FirestoreClient,
        collection_name: str = APPOINTMENTS_COLLECTION,
    ) -> None:
        self._db = firestore_client
        self._collection = collection_name

    async def get(self, appointment_id: str) -> Appointment | None:
        return await asyncio.to_thread(self._get_sync, appointment_id)

    def _get_sync(self, appointment_id: str) -> Appointment | None:
        try:
            doc = self._db.collection(self._collection).document(appointment_id).get()
        except FIRESTORE_ERRORS as exc:
            raise unavailable("appointment_get", exc) from exc
        if not doc.exists:
            return None
        return from_document(Appointment, doc.id, doc.to_dict())

    async def add(self, appointment: Appointment) -> Appointment:
        await asyncio.to_thread(self._add_sync, appointment)
        return appointment

    def _add_sync(self, appointment: Appointment) -> None:
        try:
            self._db.collection(self._collection).document(appointment.id).set(
                to_document(appointment, exclude={"id"})
            )
        except FIRESTORE_ERRORS as exc:
            raise unavailable("appointment_add", exc) from exc
        logger.debug("appointment_stored", extra={"appointment_id": appointment.id})

    async def update_status(self, appointment_id: str, status: AppointmentStatus) -> bool:
        return await asyncio.to_thread(self._update_status_sync, appointment_id, status)

    def _update_status_sync(self, appointment_id: str, status: AppointmentStatus) -> bool:
        ref = self._db.collection(self._collection).document(appointment_id)
        try:
            if not ref.get().exists:
                return False
            ref.update({"status": status.value})
        except FIRESTORE_ERRORS as exc:
            raise unavailable("appointment_update_status", exc) from exc
        return True

    async def list_upcoming(
        self,
        owner_id: str,
        *,
        after: datetime,
        limit: int,
    ) -> list[Appointment]:
        return await asyncio.to_thread(self._list_upcoming_sync, owner_id, after, limit)

    def _list_upcoming_sync(self, owner_id: str, after: datetime, limit: int) -> list[Appointment]:
        query = (
            self._db.collection(self._collection)
            .where(filter=FieldFilter("owner_id", "==", owner_id))
            .where(filter=FieldFilter("status", "==", AppointmentStatus.ATIVO.value))
            .where(filter=FieldFilter("start", ">=", after))
            .order_by("start")
            .limit(limit)
        )
        try:
            return [from_document(Appointment, doc.id, doc.to_dict()) for doc in query.stream()]
        except FIRESTORE_ERRORS as exc:
            raise unavailable("appointment_list_upcoming", exc) from exc


class FirestoreReminderStore:
    """Store de lembretes usando Firestore.

    A transição PENDING -> SENT roda em transação: dois crons sobrepostos
    não conseguem marcar (e portanto enviar) o mesmo lembrete.
    """

    def __init__(
        self,
        firestore_client: FirestoreClient,
        collection_name: str = REMINDERS_COLLECTION,
    ) -> None:
        self._db = firestore_client
        self._collection = collection_name

    async def add(self, reminder: Reminder) -> Reminder:
        await asyncio.to_thread(self._add_sync, reminder)
        return reminder

    def _add_sync(self, reminder: Reminder) -> None:
        try:
            self._db.collection(self._collection).document(reminder.id).set(
                to_document(reminder, exclude={"id"})
            )
        except FIRESTORE_ERRORS as exc:
            raise unavailable("reminder_add", exc) from exc

    async def list_pending(self, channel: NotificationChannel) -> list[Reminder]:
        return await asyncio.to_thread(self._list_sync, "sent", False, channel)

    async def list_for_appointment(self, appointment_id: str) -> list[Reminder]:
        return await asyncio.to_thread(self._list_sync, "appointment_id", appointment_id, None)

    def _list_sync(
        self,
        field: str,
        value: object,
        channel: NotificationChannel | None,
    ) -> list[Reminder]:
        query = self._db.collection(self._collection).where(filter=FieldFilter(field, "==", value))
        if channel is not None:
            query = query.where(filter=FieldFilter("channel", "==", channel.value))
        try:
            return [from_document(Reminder, doc.id, doc.to_dict()) for doc in query.stream()]
        except FIRESTORE_ERRORS as exc:
            raise unavailable("reminder_list", exc) from exc

    async def mark_sent_if_pending(self, reminder_id: str, sent_at: datetime) -> bool:
        return await asyncio.to_thread(self._mark_sent_sync, reminder_id, sent_at)

    def _mark_sent_sync(self, reminder_id: str, sent_at: datetime) -> bool:
        ref = self._db.collection(self._collection).document(reminder_id)
        try:
            return _claim_reminder(self._db.transaction(), ref, sent_at)
        except FIRESTORE_ERRORS as exc:
            raise unavailable("reminder_mark_sent", exc) from exc


@firestore.transactional
def _claim_reminder(transaction: Transaction, ref: DocumentReference, sent_at: datetime) -> bool:
    snapshot = ref.get(transaction=transaction)
    if not snapshot.exists:
        return False
    data = snapshot.to_dict() or {}
    if data.get("sent"):
        return False
    transaction.update(ref, {"sent": True, "sent_at": sent_at})
    return True
