"""Serviço de compromissos criados pelo WhatsApp.

Orquestra os stores de compromissos e lembretes. Todo compromisso criado
aqui nasce ATIVO, com origem WHATSAPP e um lembrete WHATSAPP pendente.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from app.domain.appointment import (
    Appointment,
    AppointmentOrigin,
    AppointmentStatus,
    NotificationChannel,
    Reminder,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from app.protocols.appointment_store import (
        AppointmentStoreProtocol,
        ReminderStoreProtocol,
    )
    from app.services.command_parser import ParsedCommand

logger = logging.getLogger(__name__)

DEFAULT_LEAD_MINUTES = 60
DEFAULT_UPCOMING_LIMIT = 5


def _utcnow() -> datetime:
    return datetime.now(UTC)


class AppointmentService:
    """Cria, lista e cancela compromissos de um usuário."""

    def __init__(
        self,
        appointment_store: AppointmentStoreProtocol,
        reminder_store: ReminderStoreProtocol,
        *,
        clock: Callable[[], datetime] = _utcnow,
        lead_minutes: int = DEFAULT_LEAD_MINUTES,
        upcoming_limit: int = DEFAULT_UPCOMING_LIMIT,
    ) -> None:
        self._appointments = appointment_store
        self._reminders = reminder_store
        self._clock = clock
        self._lead_minutes = lead_minutes
        self._upcoming_limit = upcoming_limit

    async def create_from_command(self, owner_id: str, command: ParsedCommand) -> Appointment:
        """Persiste o compromisso interpretado e seu lembrete padrão."""
        appointment = Appointment(
            owner_id=owner_id,
            title=command.title,
            location=command.location,
            start=command.start,
            end=command.end,
            origin=AppointmentOrigin.WHATSAPP,
            status=AppointmentStatus.ATIVO,
        )
        await self._appointments.add(appointment)
        await self._reminders.add(
            Reminder(
                appointment_id=appointment.id,
                channel=NotificationChannel.WHATSAPP,
                lead_minutes=self._lead_minutes,
            )
        )
        logger.info(
            "appointment_created",
            extra={
                "appointment_id": appointment.id,
                "owner_id": owner_id,
                "origin": appointment.origin.value,
            },
        )
        return appointment

    async def list_upcoming(self, owner_id: str) -> list[Appointment]:
        """Próximos compromissos ATIVO, ordenados por início."""
        return await self._appointments.list_upcoming(
            owner_id,
            after=self._clock(),
            limit=self._upcoming_limit,
        )

    async def cancel(self, owner_id: str, position: int) -> Appointment | None:
        """Cancela o N-ésimo item (1-based) da listagem de próximos.

        Retorna None quando a posição não existe na listagem atual.
        Lembretes do compromisso cancelado deixam de ser despachados
        porque o despachante só atende compromissos ATIVO.
        """
        if position < 1:
            return None
        upcoming = await self.list_upcoming(owner_id)
        if position > len(upcoming):
            return None

        target = upcoming[position - 1]
        if not await self._appointments.update_status(target.id, AppointmentStatus.CANCELADO):
            return None
        logger.info(
            "appointment_cancelled",
            extra={"appointment_id": target.id, "owner_id": owner_id},
        )
        return target.model_copy(update={"status": AppointmentStatus.CANCELADO})
