"""Protocolos de persistência de compromissos e lembretes."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from datetime import datetime

    from app.domain.appointment import (
        Appointment,
        AppointmentStatus,
        NotificationChannel,
        Reminder,
    )


class AppointmentStoreProtocol(Protocol):
    """Contrato para store de compromissos."""

    async def get(self, appointment_id: str) -> Appointment | None:
        """Busca compromisso por id."""
        ...

    async def add(self, appointment: Appointment) -> Appointment:
        """Persiste um novo compromisso."""
        ...

    async def update_status(self, appointment_id: str, status: AppointmentStatus) -> bool:
        """Atualiza o status. Retorna False se o compromisso não existe."""
        ...

    async def list_upcoming(
        self,
        owner_id: str,
        *,
        after: datetime,
        limit: int,
    ) -> list[Appointment]:
        """Compromissos ATIVO com início >= after, ordenados por início."""
        ...


class ReminderStoreProtocol(Protocol):
    """Contrato para store de lembretes.

    `mark_sent_if_pending` é a única transição de estado permitida e deve
    ser uma escrita condicional atômica: só altera lembretes ainda pendentes.
    """

    async def add(self, reminder: Reminder) -> Reminder:
        """Persiste um novo lembrete pendente."""
        ...

    async def list_pending(self, channel: NotificationChannel) -> list[Reminder]:
        """Lembretes com sent=False do canal informado."""
        ...

    async def list_for_appointment(self, appointment_id: str) -> list[Reminder]:
        """Lembretes de um compromisso."""
        ...

    async def mark_sent_if_pending(self, reminder_id: str, sent_at: datetime) -> bool:
        """Marca como enviado. Retorna True só para quem fez a transição."""
        ...
