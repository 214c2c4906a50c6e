"""Testes dos stores Firestore com cliente simulado (MagicMock)."""

from __future__ import annotations

from datetime import UTC, datetime
from unittest.mock import MagicMock

import pytest
from google.api_core import exceptions as gcp_exceptions

from app.domain.appointment import (
    Appointment,
    AppointmentStatus,
    NotificationChannel,
    Reminder,
)
from app.domain.delivery import DeliveryLogEntry, DeliveryLogType
from app.infra.stores import firestore_appointment_store
from app.infra.stores.firestore_appointment_store import (
    FirestoreAppointmentStore,
    FirestoreReminderStore,
)
from app.infra.stores.firestore_delivery_log_store import FirestoreDeliveryLogStore
from app.infra.stores.firestore_user_directory import FirestoreUserDirectory
from utils.errors import FirestoreUnavailableError

START = datetime(2026, 3, 11, 13, 0, tzinfo=UTC)


def _snapshot(doc_id: str, data: dict | None) -> MagicMock:
    snapshot = MagicMock()
    snapshot.id = doc_id
    snapshot.exists = data is not None
    snapshot.to_dict.return_value = data
    return snapshot


class TestFirestoreAppointmentStore:
    @pytest.mark.asyncio
    async def test_add_writes_enum_values(self) -> None:
        db = MagicMock()
        store = FirestoreAppointmentStore(db)
        appointment = Appointment(owner_id="user-1", title="Dentista", start=START)

        await store.add(appointment)

        db.collection.assert_called_with("compromissos")
        db.collection.return_value.document.assert_called_with(appointment.id)
        written = db.collection.return_value.document.return_value.set.call_args.args[0]
        assert written["status"] == "ATIVO"
        assert written["origin"] == "MANUAL"
        assert "id" not in written

    @pytest.mark.asyncio
    async def test_get_rebuilds_model(self) -> None:
        db = MagicMock()
        db.collection.return_value.document.return_value.get.return_value = _snapshot(
            "abc", {"owner_id": "user-1", "title": "Dentista", "start": START}
        )
        store = FirestoreAppointmentStore(db)

        appointment = await store.get("abc")

        assert appointment is not None
        assert appointment.id == "abc"
        assert appointment.end == START

    @pytest.mark.asyncio
    async def test_get_missing(self) -> None:
        db = MagicMock()
        db.collection.return_value.document.return_value.get.return_value = _snapshot("x", None)
        assert await FirestoreAppointmentStore(db).get("x") is None

    @pytest.mark.asyncio
    async def test_update_status_missing_doc(self) -> None:
        db = MagicMock()
        ref = db.collection.return_value.document.return_value
        ref.get.return_value = _snapshot("x", None)

        updated = await FirestoreAppointmentStore(db).update_status("x", AppointmentStatus.CANCELADO)

        assert updated is False
        ref.update.assert_not_called()

    @pytest.mark.asyncio
    async def test_api_error_becomes_unavailable(self) -> None:
        db = MagicMock()
        db.collection.return_value.document.return_value.get.side_effect = (
            gcp_exceptions.ServiceUnavailable("down")
        )

        with pytest.raises(FirestoreUnavailableError):
            await FirestoreAppointmentStore(db).get("abc")


class TestFirestoreReminderStore:
    @pytest.mark.asyncio
    async def test_list_pending(self) -> None:
        db = MagicMock()
        query = db.collection.return_value.where.return_value.where.return_value
        query.stream.return_value = [
            _snapshot("r1", {"appointment_id": "a1", "channel": "WHATSAPP", "sent": False})
        ]
        store = FirestoreReminderStore(db)

        reminders = await store.list_pending(NotificationChannel.WHATSAPP)

        assert [r.id for r in reminders] == ["r1"]
        assert reminders[0].channel == NotificationChannel.WHATSAPP

    def test_claim_marks_pending_reminder(self) -> None:
        transaction = MagicMock()
        ref = MagicMock()
        ref.get.return_value = _snapshot("r1", {"appointment_id": "a1", "sent": False})

        claimed = firestore_appointment_store._claim_reminder.to_wrap(transaction, ref, START)

        assert claimed is True
        transaction.update.assert_called_once_with(ref, {"sent": True, "sent_at": START})

    def test_claim_skips_sent_reminder(self) -> None:
        transaction = MagicMock()
        ref = MagicMock()
        ref.get.return_value = _snapshot("r1", {"appointment_id": "a1", "sent": True})

        claimed = firestore_appointment_store._claim_reminder.to_wrap(transaction, ref, START)

        assert claimed is False
        transaction.update.assert_not_called()

    @pytest.mark.asyncio
    async def test_mark_sent_uses_transaction(self, monkeypatch: pytest.MonkeyPatch) -> None:
        db = MagicMock()
        claim = MagicMock(return_value=True)
        monkeypatch.setattr(firestore_appointment_store, "_claim_reminder", claim)

        result = await FirestoreReminderStore(db).mark_sent_if_pending("r1", START)

        assert result is True
        claim.assert_called_once()
        assert claim.call_args.args[0] is db.transaction.return_value

    @pytest.mark.asyncio
    async def test_add(self) -> None:
        db = MagicMock()
        reminder = Reminder(appointment_id="a1")

        await FirestoreReminderStore(db).add(reminder)

        db.collection.assert_called_with("lembretes")
        written = db.collection.return_value.document.return_value.set.call_args.args[0]
        assert written["channel"] == "WHATSAPP"
        assert written["sent"] is False


class TestFirestoreUserDirectory:
    @pytest.mark.asyncio
    async def test_find_by_suffix(self) -> None:
        db = MagicMock()
        db.collection.return_value.where.return_value.stream.return_value = [
            _snapshot("user-1", {"phone": "+5511999998888", "whatsapp_enabled": True})
        ]

        users = await FirestoreUserDirectory(db).find_by_phone_suffix("999998888")

        assert [u.id for u in users] == ["user-1"]

    @pytest.mark.asyncio
    async def test_update_writes_phone_suffix(self) -> None:
        db = MagicMock()
        ref = db.collection.return_value.document.return_value
        ref.get.return_value = _snapshot("user-1", {})

        updated = await FirestoreUserDirectory(db).update_whatsapp(
            "user-1", phone="+5511999998888", enabled=True
        )

        assert updated is True
        ref.update.assert_called_once_with(
            {"phone": "+5511999998888", "whatsapp_enabled": True, "phone_suffix": "999998888"}
        )


class TestFirestoreDeliveryLogStore:
    @pytest.mark.asyncio
    async def test_append(self) -> None:
        db = MagicMock()
        entry = DeliveryLogEntry(
            log_type=DeliveryLogType.MESSAGE_SENT, destination="+5511999998888", success=True
        )

        await FirestoreDeliveryLogStore(db).append(entry)

        db.collection.assert_called_with("whatsapp_logs")
        written = db.collection.return_value.document.return_value.set.call_args.args[0]
        assert written["log_type"] == "MESSAGE_SENT"
        assert written["channel"] == "WHATSAPP"

    @pytest.mark.asyncio
    async def test_append_error(self) -> None:
        db = MagicMock()
        db.collection.return_value.document.return_value.set.side_effect = (
            gcp_exceptions.DeadlineExceeded("slow")
        )
        entry = DeliveryLogEntry(
            log_type=DeliveryLogType.WEBHOOK_ERROR, destination="5511", success=False
        )

        with pytest.raises(FirestoreUnavailableError):
            await FirestoreDeliveryLogStore(db).append(entry)
