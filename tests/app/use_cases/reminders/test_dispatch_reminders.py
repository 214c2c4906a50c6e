"""Testes do ReminderDispatcher (varredura de lembretes pendentes)."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock

import pytest

from app.domain.appointment import (
    Appointment,
    AppointmentStatus,
    NotificationChannel,
    Reminder,
    UserProfile,
)
from app.domain.delivery import NotificationStatus, SendResult
from app.infra.stores.memory_stores import (
    MemoryAppointmentStore,
    MemoryNotificationStore,
    MemoryReminderStore,
    MemoryUserDirectory,
)
from app.use_cases.reminders import ReminderDispatcher
from tests.fakes.fake_sender import FakeMessageSender

NOW = datetime(2026, 3, 10, 12, 0, tzinfo=UTC)


class Env:
    """Stores em memória e sender falso compartilhados por um teste."""

    def __init__(self, sender: FakeMessageSender | None = None) -> None:
        self.appointments = MemoryAppointmentStore()
        self.reminders = MemoryReminderStore()
        self.users = MemoryUserDirectory(
            [UserProfile(id="user-1", name="Ana", phone="11999998888", whatsapp_enabled=True)]
        )
        self.notifications = MemoryNotificationStore()
        self.sender = sender or FakeMessageSender()

    def dispatcher(self, **kwargs: object) -> ReminderDispatcher:
        return ReminderDispatcher(
            reminder_store=self.reminders,
            appointment_store=self.appointments,
            user_directory=self.users,
            sender=self.sender,
            notification_store=self.notifications,
            clock=lambda: NOW,
            **kwargs,  # type: ignore[arg-type]
        )

    async def schedule(
        self,
        minutes_from_now: int,
        *,
        lead_minutes: int = 60,
        owner_id: str = "user-1",
        status: AppointmentStatus = AppointmentStatus.ATIVO,
        location: str | None = "Centro",
    ) -> Reminder:
        appointment = await self.appointments.add(
            Appointment(
                owner_id=owner_id,
                title="Dentista",
                location=location,
                start=NOW + timedelta(minutes=minutes_from_now),
                status=status,
            )
        )
        return await self.reminders.add(
            Reminder(appointment_id=appointment.id, lead_minutes=lead_minutes)
        )


class TestSendWindow:
    @pytest.mark.asyncio
    async def test_sends_template_inside_window(self) -> None:
        env = Env()
        reminder = await env.schedule(50)

        summary = await env.dispatcher().run()

        assert summary.total == 1
        assert summary.sent == 1
        assert summary.errors == 0
        assert summary.message == "Processado: 1 enviados, 0 erros"
        assert [(r.reminder_id, r.status) for r in summary.results] == [(reminder.id, "enviado")]

        assert len(env.sender.sent) == 1
        sent = env.sender.sent[0]
        assert sent.destination == "+5511999998888"
        assert sent.kind == "template"
        assert sent.content == "lembrete_compromisso"
        assert sent.params == ["Ana", "Dentista", "50 minutos", "Centro", "09:50"]
        assert sent.user_id == "user-1"

        stored = await env.reminders.get(reminder.id)
        assert stored is not None
        assert stored.sent is True
        assert stored.sent_at == NOW

        records = env.notifications.get_records()
        assert len(records) == 1
        assert records[0].status == NotificationStatus.ENVIADO
        assert records[0].payload == {
            "phone": "+5511999998888",
            "titulo": "Dentista",
            "tempoRestante": "50 minutos",
            "messageId": "wamid.fake",
        }

    @pytest.mark.asyncio
    async def test_before_window_stays_pending(self) -> None:
        env = Env()
        reminder = await env.schedule(120)

        summary = await env.dispatcher().run()

        assert summary.total == 1
        assert env.sender.sent == []
        stored = await env.reminders.get(reminder.id)
        assert stored is not None
        assert stored.sent is False

    @pytest.mark.asyncio
    async def test_exactly_at_send_time_is_sent(self) -> None:
        env = Env()
        await env.schedule(60)

        summary = await env.dispatcher().run()

        assert summary.sent == 1
        assert env.sender.sent[0].params[2] == "1 hora"

    @pytest.mark.asyncio
    async def test_started_appointment_is_expired_without_send(self) -> None:
        env = Env()
        reminder = await env.schedule(-5)

        summary = await env.dispatcher().run()

        assert summary.expired == 1
        assert summary.total == 1
        assert env.sender.sent == []
        stored = await env.reminders.get(reminder.id)
        assert stored is not None
        assert stored.sent is True

    @pytest.mark.asyncio
    async def test_missing_location_uses_placeholder(self) -> None:
        env = Env()
        await env.schedule(30, location=None)

        await env.dispatcher().run()

        assert env.sender.sent[0].params[3] == "Não definido"


class TestSkips:
    @pytest.mark.asyncio
    async def test_cancelled_appointment_is_skipped(self) -> None:
        env = Env()
        reminder = await env.schedule(30, status=AppointmentStatus.CANCELADO)

        summary = await env.dispatcher().run()

        assert summary.skipped == 1
        assert summary.total == 1
        assert summary.message == "Processado: 0 enviados, 0 erros"
        assert env.sender.sent == []
        stored = await env.reminders.get(reminder.id)
        assert stored is not None
        assert stored.sent is False

    @pytest.mark.asyncio
    async def test_missing_appointment_is_skipped(self) -> None:
        env = Env()
        await env.reminders.add(Reminder(appointment_id="ghost"))

        summary = await env.dispatcher().run()

        assert summary.skipped == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("phone", [None, "123"])
    async def test_owner_without_valid_phone_stays_pending(self, phone: str | None) -> None:
        env = Env()
        env.users.add(UserProfile(id="user-2", phone=phone))
        reminder = await env.schedule(30, owner_id="user-2")

        summary = await env.dispatcher().run()

        assert summary.skipped == 1
        assert env.sender.sent == []
        stored = await env.reminders.get(reminder.id)
        assert stored is not None
        assert stored.sent is False

    @pytest.mark.asyncio
    async def test_other_channels_are_ignored(self) -> None:
        env = Env()
        appointment = await env.appointments.add(
            Appointment(owner_id="user-1", title="X", start=NOW + timedelta(minutes=10))
        )
        await env.reminders.add(
            Reminder(appointment_id=appointment.id, channel=NotificationChannel.EMAIL)
        )

        summary = await env.dispatcher().run()

        assert summary.total == 0
        assert env.sender.sent == []


class TestAtMostOnce:
    @pytest.mark.asyncio
    async def test_second_run_sends_nothing(self) -> None:
        env = Env()
        await env.schedule(50)
        dispatcher = env.dispatcher()

        await dispatcher.run()
        summary = await dispatcher.run()

        assert summary.total == 0
        assert len(env.sender.sent) == 1

    @pytest.mark.asyncio
    async def test_claimed_by_other_run_is_not_sent(self) -> None:
        env = Env()
        reminder = await env.schedule(50)
        env.reminders.mark_sent_if_pending = AsyncMock(return_value=False)  # type: ignore[method-assign]

        summary = await env.dispatcher().run()

        assert summary.total == 1
        assert env.sender.sent == []
        env.reminders.mark_sent_if_pending.assert_awaited_once_with(reminder.id, NOW)

    @pytest.mark.asyncio
    async def test_send_failure_is_counted_and_not_retried(self) -> None:
        env = Env(FakeMessageSender(result=SendResult(success=False, error="HTTP 500")))
        reminder = await env.schedule(50)
        dispatcher = env.dispatcher()

        summary = await dispatcher.run()
        again = await dispatcher.run()

        assert summary.errors == 1
        assert summary.results[0].status == "erro"
        assert summary.results[0].error == "HTTP 500"
        assert again.total == 0
        assert len(env.sender.sent) == 1
        records = env.notifications.get_records()
        assert records[0].status == NotificationStatus.ERRO
        assert records[0].reminder_id == reminder.id


class TestFailures:
    @pytest.mark.asyncio
    async def test_exception_is_isolated_per_reminder(self) -> None:
        env = Env()
        first = await env.schedule(20)
        await env.schedule(40)
        original_get = env.appointments.get
        calls = 0

        async def flaky_get(appointment_id: str) -> Appointment | None:
            nonlocal calls
            calls += 1
            if calls == 1:
                raise RuntimeError("firestore down")
            return await original_get(appointment_id)

        env.appointments.get = flaky_get  # type: ignore[method-assign]

        summary = await env.dispatcher().run()

        assert summary.errors == 1
        assert summary.sent == 1
        assert summary.total == 2
        statuses = {r.status for r in summary.results}
        assert statuses == {"exception", "enviado"}
        failed = next(r for r in summary.results if r.status == "exception")
        assert failed.reminder_id == first.id
        assert failed.error == "firestore down"

    @pytest.mark.asyncio
    async def test_notification_store_failure_keeps_count(self) -> None:
        env = Env()
        await env.schedule(50)
        env.notifications.append = AsyncMock(side_effect=RuntimeError("down"))  # type: ignore[method-assign]

        summary = await env.dispatcher().run()

        assert summary.sent == 1
        assert summary.errors == 0

    @pytest.mark.asyncio
    async def test_time_budget_leaves_rest_pending(self) -> None:
        env = Env()
        for minutes in (10, 20, 30):
            await env.schedule(minutes)
        ticks = iter([0.0, 0.0, 10.0, 10.0, 10.0])

        summary = await env.dispatcher(
            time_budget_seconds=5.0, monotonic=lambda: next(ticks)
        ).run()

        assert summary.budget_exhausted is True
        assert summary.sent == 1
        assert summary.total == 1
        pending = await env.reminders.list_pending(NotificationChannel.WHATSAPP)
        assert len(pending) == 2
