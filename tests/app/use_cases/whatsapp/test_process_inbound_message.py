"""Testes do InboundMessageHandler (webhook -> resposta)."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any
from unittest.mock import AsyncMock

import pytest

from app.bootstrap.whatsapp_adapters import GraphApiWebhookParser
from app.domain.appointment import (
    Appointment,
    AppointmentOrigin,
    AppointmentStatus,
    UserProfile,
)
from app.domain.delivery import DeliveryLogType
from app.infra.stores.memory_stores import (
    MemoryAppointmentStore,
    MemoryDedupeStore,
    MemoryDeliveryLogStore,
    MemoryReminderStore,
    MemoryUserDirectory,
)
from app.services import replies
from app.services.appointment_service import AppointmentService
from app.services.owner_lookup import OwnerLookup
from app.use_cases.whatsapp import InboundMessageHandler
from tests.fakes.fake_sender import FakeMessageSender

NOW = datetime(2026, 3, 10, 12, 0, tzinfo=UTC)
OWNER_PHONE = "5511999998888"


def _payload(
    text: str | None = "ajuda",
    *,
    message_id: str = "wamid.1",
    from_number: str = OWNER_PHONE,
    message_type: str = "text",
) -> dict[str, Any]:
    message: dict[str, Any] = {"id": message_id, "from": from_number, "type": message_type}
    if text is not None:
        message["text"] = {"body": text}
    return {"entry": [{"changes": [{"value": {"messages": [message]}}]}]}


class Env:
    def __init__(self) -> None:
        self.appointments = MemoryAppointmentStore()
        self.reminders = MemoryReminderStore()
        self.users = MemoryUserDirectory(
            [UserProfile(id="user-1", name="Ana", phone="+5511999998888")]
        )
        self.log_store = MemoryDeliveryLogStore()
        self.sender = FakeMessageSender()
        self.service = AppointmentService(self.appointments, self.reminders, clock=lambda: NOW)
        self.handler = InboundMessageHandler(
            parser=GraphApiWebhookParser(),
            dedupe=MemoryDedupeStore(),
            sender=self.sender,
            log_store=self.log_store,
            owner_lookup=OwnerLookup(self.users),
            appointments=self.service,
            clock=lambda: NOW,
        )

    def log_types(self) -> list[DeliveryLogType]:
        return [r.log_type for r in self.log_store.get_records()]


@pytest.fixture
def env() -> Env:
    return Env()


class TestEnvelope:
    @pytest.mark.asyncio
    async def test_status_update_is_ignored(self, env: Env) -> None:
        payload = {
            "entry": [{"changes": [{"value": {"statuses": [{"id": "w", "status": "read"}]}}]}]
        }

        assert await env.handler.handle(payload) == "ok"
        assert env.sender.sent == []
        assert env.log_store.get_records() == []

    @pytest.mark.asyncio
    async def test_unknown_payload_is_ok(self, env: Env) -> None:
        assert await env.handler.handle({"object": "page"}) == "ok"
        assert env.sender.sent == []

    @pytest.mark.asyncio
    async def test_duplicate_message_is_processed_once(self, env: Env) -> None:
        assert await env.handler.handle(_payload("ajuda")) == "ok"
        assert await env.handler.handle(_payload("ajuda")) == "ok"

        assert len(env.sender.sent) == 1
        assert env.log_types() == [DeliveryLogType.WEBHOOK_RECEIVED]

    @pytest.mark.asyncio
    async def test_non_text_message_gets_text_only_reply(self, env: Env) -> None:
        await env.handler.handle(_payload(None, message_type="image"))

        assert env.sender.texts == [replies.text_only_message()]
        assert env.sender.sent[0].destination == "+5511999998888"

    @pytest.mark.asyncio
    async def test_unregistered_sender(self, env: Env) -> None:
        await env.handler.handle(_payload("ajuda", from_number="5521988887777"))

        assert env.sender.texts == [replies.UNREGISTERED_MESSAGE]
        assert env.sender.sent[0].destination == "+5521988887777"


class TestCommands:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("text", ["ajuda", "HELP", " Oi ", "olá"])
    async def test_help(self, env: Env, text: str) -> None:
        await env.handler.handle(_payload(text))

        assert env.sender.texts == [replies.help_message()]
        assert env.sender.sent[0].user_id == "user-1"

    @pytest.mark.asyncio
    async def test_agenda_empty(self, env: Env) -> None:
        await env.handler.handle(_payload("agenda"))
        assert env.sender.texts == [replies.NO_UPCOMING_MESSAGE]

    @pytest.mark.asyncio
    async def test_agenda_lists_upcoming(self, env: Env) -> None:
        await env.appointments.add(
            Appointment(owner_id="user-1", title="Dentista", start=NOW + timedelta(days=1))
        )

        await env.handler.handle(_payload("meus compromissos"))

        assert "1. *Dentista*" in env.sender.texts[0]

    @pytest.mark.asyncio
    async def test_cancel_by_position(self, env: Env) -> None:
        appointment = await env.appointments.add(
            Appointment(owner_id="user-1", title="Dentista", start=NOW + timedelta(days=1))
        )

        await env.handler.handle(_payload("cancelar 1"))

        assert env.sender.texts[0].startswith("🗑️ Compromisso cancelado: *Dentista*")
        stored = await env.appointments.get(appointment.id)
        assert stored is not None
        assert stored.status == AppointmentStatus.CANCELADO

    @pytest.mark.asyncio
    async def test_cancel_unknown_position(self, env: Env) -> None:
        await env.handler.handle(_payload("cancelar 3"))
        assert env.sender.texts == [replies.CANCEL_NOT_FOUND_MESSAGE]


class TestCreateAppointment:
    @pytest.mark.asyncio
    async def test_delimited_command_creates_appointment(self, env: Env) -> None:
        await env.handler.handle(_payload("Dentista | 15/03 | 10:00 - 11:00"))

        upcoming = await env.service.list_upcoming("user-1")
        assert len(upcoming) == 1
        created = upcoming[0]
        assert created.title == "Dentista"
        assert created.origin == AppointmentOrigin.WHATSAPP
        assert created.start == datetime(2026, 3, 15, 13, 0, tzinfo=UTC)
        assert len(await env.reminders.list_for_appointment(created.id)) == 1

        reply = env.sender.texts[0]
        assert reply.startswith("✅ Compromisso criado com sucesso!")
        assert "📅 15/03/2026" in reply
        assert "🕐 10:00 - 11:00" in reply

    @pytest.mark.asyncio
    async def test_unparseable_text_gets_help(self, env: Env) -> None:
        await env.handler.handle(_payload("quero marcar algo"))

        assert env.sender.texts == [replies.not_understood_message()]
        assert await env.service.list_upcoming("user-1") == []

    @pytest.mark.asyncio
    async def test_store_failure_replies_create_failed(self, env: Env) -> None:
        env.appointments.add = AsyncMock(side_effect=RuntimeError("down"))  # type: ignore[method-assign]

        result = await env.handler.handle(_payload("Dentista | amanhã | 10:00 - 11:00"))

        assert result == "ok"
        assert env.sender.texts == [replies.CREATE_FAILED_MESSAGE]


class TestErrors:
    @pytest.mark.asyncio
    async def test_unexpected_error_returns_error_and_logs(self, env: Env) -> None:
        env.sender.raise_on_send = RuntimeError("boom")

        result = await env.handler.handle(_payload("ajuda"))

        assert result == "error"
        assert env.log_types() == [
            DeliveryLogType.WEBHOOK_RECEIVED,
            DeliveryLogType.WEBHOOK_ERROR,
        ]
        error_entry = env.log_store.get_records()[1]
        assert error_entry.success is False
        assert error_entry.error == "boom"
        assert error_entry.destination == OWNER_PHONE

    @pytest.mark.asyncio
    async def test_log_store_failure_does_not_block_reply(self, env: Env) -> None:
        env.log_store.append = AsyncMock(side_effect=RuntimeError("down"))  # type: ignore[method-assign]

        result = await env.handler.handle(_payload("ajuda"))

        assert result == "ok"
        assert env.sender.texts == [replies.help_message()]
