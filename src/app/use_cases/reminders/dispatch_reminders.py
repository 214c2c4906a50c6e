"""Varredura e despacho de lembretes de compromisso via WhatsApp.

Invocado periodicamente pelo cron. Para cada lembrete WHATSAPP pendente:

1. compromisso ausente ou não ATIVO: ignora (segue pendente)
2. antes da janela (agora < início - antecedência): ignora
3. compromisso já começou: marca como enviado sem enviar (expirado)
4. dono sem telefone válido: ignora (segue pendente)
5. reivindica o lembrete (escrita condicional PENDING -> SENT)
6. envia o template e registra a notificação

A reivindicação acontece antes do envio: duas varreduras sobrepostas
nunca enviam o mesmo lembrete. Se o processo cair entre a reivindicação
e o envio, o lembrete fica SENT sem mensagem entregue.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Literal

from app.domain.appointment import NotificationChannel
from app.domain.delivery import NotificationRecord, NotificationStatus
from app.observability import record_dispatch_summary
from app.services.command_parser import DEFAULT_TIMEZONE
from app.services.phone import is_valid_whatsapp_phone, normalize_phone
from app.services.replies import (
    format_time,
    format_time_remaining,
    reminder_template_params,
)

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import tzinfo

    from app.domain.appointment import Appointment, Reminder
    from app.protocols.appointment_store import (
        AppointmentStoreProtocol,
        ReminderStoreProtocol,
    )
    from app.protocols.delivery_log_store import NotificationStoreProtocol
    from app.protocols.messaging import MessageSenderProtocol
    from app.protocols.user_directory import UserDirectoryProtocol

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE_NAME = "lembrete_compromisso"
DEFAULT_TIME_BUDGET_SECONDS = 50.0

DispatchStatus = Literal["enviado", "erro", "exception"]


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True, slots=True)
class DispatchResult:
    reminder_id: str
    status: DispatchStatus
    error: str | None = None


@dataclass(slots=True)
class DispatchSummary:
    """Resultado de uma varredura.

    `total` conta os lembretes pendentes examinados antes de o orçamento
    de tempo acabar, então `sent + errors <= total`.
    """

    total: int = 0
    sent: int = 0
    errors: int = 0
    expired: int = 0
    skipped: int = 0
    budget_exhausted: bool = False
    results: list[DispatchResult] = field(default_factory=list)

    @property
    def message(self) -> str:
        return f"Processado: {self.sent} enviados, {self.errors} erros"


class ReminderDispatcher:
    """Despachante de lembretes pendentes.

    Args:
        reminder_store: Lembretes (com escrita condicional atômica)
        appointment_store: Compromissos
        user_directory: Perfis dos donos dos compromissos
        sender: Sender WhatsApp
        notification_store: Histórico de notificações
        clock: Relógio de parede (datetime com timezone)
        tz: Fuso usado no horário exibido no template
        template_name: Template aprovado de lembrete
        time_budget_seconds: Tempo máximo da varredura; o restante
            fica pendente para a próxima execução
        monotonic: Relógio monotônico usado no orçamento de tempo
    """

    def __init__(
        self,
        *,
        reminder_store: ReminderStoreProtocol,
        appointment_store: AppointmentStoreProtocol,
        user_directory: UserDirectoryProtocol,
        sender: MessageSenderProtocol,
        notification_store: NotificationStoreProtocol,
        clock: Callable[[], datetime] = _utcnow,
        tz: tzinfo = DEFAULT_TIMEZONE,
        template_name: str = DEFAULT_TEMPLATE_NAME,
        time_budget_seconds: float = DEFAULT_TIME_BUDGET_SECONDS,
        monotonic: Callable[[], float] = time.monotonic,
    ) -> None:
        self._reminders = reminder_store
        self._appointments = appointment_store
        self._users = user_directory
        self._sender = sender
        self._notifications = notification_store
        self._clock = clock
        self._tz = tz
        self._template_name = template_name
        self._time_budget = time_budget_seconds
        self._monotonic = monotonic

    async def run(self) -> DispatchSummary:
        """Executa uma varredura completa (ou até esgotar o orçamento)."""
        started = self._monotonic()
        now = self._clock()
        summary = DispatchSummary()

        pending = await self._reminders.list_pending(NotificationChannel.WHATSAPP)
        logger.info("reminder_scan_started", extra={"pending": len(pending)})

        for reminder in pending:
            if self._monotonic() - started >= self._time_budget:
                summary.budget_exhausted = True
                logger.warning(
                    "reminder_scan_budget_exhausted",
                    extra={"budget_seconds": self._time_budget},
                )
                break
            summary.total += 1
            try:
                await self._process(reminder, now, summary)
            except Exception as exc:
                summary.errors += 1
                summary.results.append(
                    DispatchResult(reminder_id=reminder.id, status="exception", error=str(exc))
                )
                logger.exception(
                    "reminder_processing_failed",
                    extra={"reminder_id": reminder.id, "error_type": type(exc).__name__},
                )

        record_dispatch_summary(
            total=summary.total,
            sent=summary.sent,
            errors=summary.errors,
            expired=summary.expired,
            skipped=summary.skipped,
            elapsed_ms=(self._monotonic() - started) * 1000,
            budget_exhausted=summary.budget_exhausted,
        )
        return summary

    async def _process(self, reminder: Reminder, now: datetime, summary: DispatchSummary) -> None:
        appointment = await self._appointments.get(reminder.appointment_id)
        if appointment is None or not appointment.is_active:
            summary.skipped += 1
            return

        send_at = appointment.start - timedelta(minutes=reminder.lead_minutes)
        if now < send_at:
            return

        if now > appointment.start:
            if await self._reminders.mark_sent_if_pending(reminder.id, now):
                summary.expired += 1
                logger.info(
                    "reminder_expired",
                    extra={"reminder_id": reminder.id, "appointment_id": appointment.id},
                )
            return

        owner = await self._users.get(appointment.owner_id)
        if owner is None or not owner.phone:
            self._skip(reminder, "missing_phone", summary)
            return
        phone = normalize_phone(owner.phone)
        if not is_valid_whatsapp_phone(phone):
            self._skip(reminder, "invalid_phone", summary)
            return

        if not await self._reminders.mark_sent_if_pending(reminder.id, now):
            logger.info("reminder_already_claimed", extra={"reminder_id": reminder.id})
            return

        time_remaining = format_time_remaining(
            round((appointment.start - now).total_seconds() / 60)
        )
        result = await self._sender.send_template(
            phone,
            self._template_name,
            reminder_template_params(
                name=owner.name,
                title=appointment.title,
                time_remaining=time_remaining,
                location=appointment.location,
                start_time=format_time(appointment.start, self._tz),
            ),
            user_id=owner.id,
        )

        await self._record_notification(
            reminder,
            appointment,
            phone=phone,
            time_remaining=time_remaining,
            success=result.success,
            message_id=result.message_id,
            error=result.error,
            now=now,
        )
        if result.success:
            summary.sent += 1
            summary.results.append(DispatchResult(reminder_id=reminder.id, status="enviado"))
        else:
            summary.errors += 1
            summary.results.append(
                DispatchResult(reminder_id=reminder.id, status="erro", error=result.error)
            )

    async def _record_notification(
        self,
        reminder: Reminder,
        appointment: Appointment,
        *,
        phone: str,
        time_remaining: str,
        success: bool,
        message_id: str | None,
        error: str | None,
        now: datetime,
    ) -> None:
        record = NotificationRecord(
            reminder_id=reminder.id,
            owner_id=appointment.owner_id,
            channel=reminder.channel,
            status=NotificationStatus.ENVIADO if success else NotificationStatus.ERRO,
            payload={
                "phone": phone,
                "titulo": appointment.title,
                "tempoRestante": time_remaining,
                "messageId": message_id,
            },
            error=error,
            sent_at=now,
        )
        try:
            await self._notifications.append(record)
        except Exception as exc:
            # O envio já aconteceu; a falha do histórico não muda a contagem
            logger.error(
                "notification_record_failed",
                extra={"reminder_id": reminder.id, "error_type": type(exc).__name__},
            )

    @staticmethod
    def _skip(reminder: Reminder, reason: str, summary: DispatchSummary) -> None:
        summary.skipped += 1
        logger.warning(
            "reminder_skipped",
            extra={"reminder_id": reminder.id, "reason": reason},
        )
