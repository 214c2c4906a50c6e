"""Testes do AppointmentService com stores em memória."""

from __future__ import annotations

from datetime import datetime, timedelta
from zoneinfo import ZoneInfo

import pytest

from app.domain.appointment import (
    Appointment,
    AppointmentOrigin,
    AppointmentStatus,
    NotificationChannel,
)
from app.infra.stores.memory_stores import MemoryAppointmentStore, MemoryReminderStore
from app.services.appointment_service import AppointmentService
from app.services.command_parser import ParsedCommand

SP = ZoneInfo("America/Sao_Paulo")
NOW = datetime(2026, 3, 10, 9, 0, tzinfo=SP)


def _service(
    appointments: MemoryAppointmentStore,
    reminders: MemoryReminderStore,
    **kwargs: object,
) -> AppointmentService:
    return AppointmentService(appointments, reminders, clock=lambda: NOW, **kwargs)


def _command(title: str = "Dentista", days: int = 1) -> ParsedCommand:
    start = NOW + timedelta(days=days)
    return ParsedCommand(title=title, start=start, end=start + timedelta(hours=1))


class TestCreateFromCommand:
    @pytest.mark.asyncio
    async def test_creates_whatsapp_appointment_and_reminder(self) -> None:
        appointments = MemoryAppointmentStore()
        reminders = MemoryReminderStore()
        service = _service(appointments, reminders)

        created = await service.create_from_command("user-1", _command())

        stored = await appointments.get(created.id)
        assert stored is not None
        assert stored.origin == AppointmentOrigin.WHATSAPP
        assert stored.status == AppointmentStatus.ATIVO
        assert stored.owner_id == "user-1"

        linked = await reminders.list_for_appointment(created.id)
        assert len(linked) == 1
        assert linked[0].channel == NotificationChannel.WHATSAPP
        assert linked[0].lead_minutes == 60
        assert linked[0].sent is False

    @pytest.mark.asyncio
    async def test_lead_minutes_is_configurable(self) -> None:
        reminders = MemoryReminderStore()
        service = _service(MemoryAppointmentStore(), reminders, lead_minutes=30)

        created = await service.create_from_command("user-1", _command())

        linked = await reminders.list_for_appointment(created.id)
        assert linked[0].lead_minutes == 30

    @pytest.mark.asyncio
    async def test_location_is_kept(self) -> None:
        service = _service(MemoryAppointmentStore(), MemoryReminderStore())
        start = NOW + timedelta(days=1)
        command = ParsedCommand("Almoço", start, start + timedelta(hours=1), "Centro")

        created = await service.create_from_command("user-1", command)

        assert created.location == "Centro"


class TestListAndCancel:
    @pytest.mark.asyncio
    async def test_list_upcoming_sorted_and_limited(self) -> None:
        appointments = MemoryAppointmentStore()
        service = _service(appointments, MemoryReminderStore(), upcoming_limit=2)
        for days in (3, 1, 2):
            await service.create_from_command("user-1", _command(f"D{days}", days))
        await appointments.add(
            Appointment(owner_id="user-1", title="Passado", start=NOW - timedelta(days=1))
        )
        await appointments.add(
            Appointment(owner_id="user-2", title="Outro", start=NOW + timedelta(hours=1))
        )

        upcoming = await service.list_upcoming("user-1")

        assert [a.title for a in upcoming] == ["D1", "D2"]

    @pytest.mark.asyncio
    async def test_cancel_by_position(self) -> None:
        appointments = MemoryAppointmentStore()
        service = _service(appointments, MemoryReminderStore())
        await service.create_from_command("user-1", _command("Primeiro", 1))
        second = await service.create_from_command("user-1", _command("Segundo", 2))

        cancelled = await service.cancel("user-1", 2)

        assert cancelled is not None
        assert cancelled.id == second.id
        assert cancelled.status == AppointmentStatus.CANCELADO
        stored = await appointments.get(second.id)
        assert stored is not None
        assert stored.status == AppointmentStatus.CANCELADO
        assert [a.title for a in await service.list_upcoming("user-1")] == ["Primeiro"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("position", [0, -1, 3])
    async def test_cancel_invalid_position(self, position: int) -> None:
        service = _service(MemoryAppointmentStore(), MemoryReminderStore())
        await service.create_from_command("user-1", _command())
        await service.create_from_command("user-1", _command(days=2))

        assert await service.cancel("user-1", position) is None
