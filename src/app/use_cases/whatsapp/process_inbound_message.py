"""Processamento de mensagens recebidas pelo webhook do WhatsApp.

Fluxo por mensagem:
    parse do envelope -> dedupe -> log WEBHOOK_RECEIVED -> dono do número
    -> comando (ajuda, agenda, cancelar N) ou criação de compromisso
    -> resposta por texto

Nenhuma exceção escapa de `handle`: a Meta precisa receber 200 sempre,
senão reentrega o evento.
"""

from __future__ import annotations

import logging
import re
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from app.domain.delivery import DeliveryLogEntry, DeliveryLogType
from app.protocols.models import InboundMessageEvent
from app.services import replies
from app.services.command_parser import DEFAULT_TIMEZONE, parse_command
from app.services.phone import normalize_phone
from config.logging import log_fallback

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import tzinfo

    from app.domain.appointment import UserProfile
    from app.protocols.dedupe import AsyncDedupeProtocol
    from app.protocols.delivery_log_store import DeliveryLogStoreProtocol
    from app.protocols.messaging import MessageSenderProtocol
    from app.protocols.normalizer import WebhookParserProtocol
    from app.services.appointment_service import AppointmentService
    from app.services.owner_lookup import OwnerLookup

logger = logging.getLogger(__name__)

STATUS_OK = "ok"
STATUS_ERROR = "error"

DEFAULT_DEDUPE_TTL_SECONDS = 86400

HELP_COMMANDS = frozenset({"ajuda", "help", "oi", "olá", "ola"})
AGENDA_COMMANDS = frozenset({"agenda", "meus compromissos"})
_CANCEL_COMMAND = re.compile(r"^cancelar\s+(\d+)$")


def _utcnow() -> datetime:
    return datetime.now(UTC)


class InboundMessageHandler:
    """Handler do POST do webhook.

    Args:
        parser: Converte o envelope da Meta em evento tipado
        dedupe: Store de dedupe por message_id
        sender: Sender WhatsApp para as respostas
        log_store: Log de entrega (WEBHOOK_RECEIVED / WEBHOOK_ERROR)
        owner_lookup: Busca do usuário pelo telefone
        appointments: Serviço de compromissos
        clock: Relógio de parede usado pelo parser
        tz: Fuso local dos horários digitados
        dedupe_ttl_seconds: TTL das chaves de dedupe
    """

    def __init__(
        self,
        *,
        parser: WebhookParserProtocol,
        dedupe: AsyncDedupeProtocol,
        sender: MessageSenderProtocol,
        log_store: DeliveryLogStoreProtocol,
        owner_lookup: OwnerLookup,
        appointments: AppointmentService,
        clock: Callable[[], datetime] = _utcnow,
        tz: tzinfo = DEFAULT_TIMEZONE,
        dedupe_ttl_seconds: int = DEFAULT_DEDUPE_TTL_SECONDS,
    ) -> None:
        self._parser = parser
        self._dedupe = dedupe
        self._sender = sender
        self._log_store = log_store
        self._owners = owner_lookup
        self._appointments = appointments
        self._clock = clock
        self._tz = tz
        self._dedupe_ttl = dedupe_ttl_seconds

    async def handle(self, payload: dict[str, Any]) -> str:
        """Processa um envelope. Retorna "ok" ou "error"."""
        event: InboundMessageEvent | None = None
        try:
            parsed = self._parser.parse(payload)
            if not isinstance(parsed, InboundMessageEvent):
                logger.debug("webhook_event_ignored", extra={"kind": parsed.kind})
                return STATUS_OK
            event = parsed

            if await self._dedupe.seen(event.message_id, self._dedupe_ttl):
                logger.info("webhook_duplicate_ignored", extra={"message_id": event.message_id})
                return STATUS_OK

            await self._append_log(
                DeliveryLogEntry(
                    log_type=DeliveryLogType.WEBHOOK_RECEIVED,
                    destination=event.from_number,
                    content=event.text,
                    payload={"message_id": event.message_id, "type": event.message_type},
                    success=True,
                )
            )
            await self._process(event)
            return STATUS_OK
        except Exception as exc:
            logger.exception(
                "webhook_processing_failed",
                extra={"error_type": type(exc).__name__},
            )
            await self._append_log(
                DeliveryLogEntry(
                    log_type=DeliveryLogType.WEBHOOK_ERROR,
                    destination=event.from_number if event else "",
                    payload={"message_id": event.message_id if event else None},
                    success=False,
                    error=str(exc) or type(exc).__name__,
                )
            )
            return STATUS_ERROR

    async def _process(self, event: InboundMessageEvent) -> None:
        phone = normalize_phone(event.from_number)

        if not event.is_text:
            await self._sender.send_text(phone, replies.text_only_message())
            return

        owner = await self._owners.find(event.from_number)
        if owner is None:
            logger.info("webhook_sender_unregistered", extra={"phone": phone})
            await self._sender.send_text(phone, replies.UNREGISTERED_MESSAGE)
            return

        reply = await self._reply_for(owner, (event.text or "").strip())
        await self._sender.send_text(phone, reply, user_id=owner.id)

    async def _reply_for(self, owner: UserProfile, text: str) -> str:
        command = text.lower()

        if command in HELP_COMMANDS:
            return replies.help_message()

        if command in AGENDA_COMMANDS:
            upcoming = await self._appointments.list_upcoming(owner.id)
            return replies.upcoming_message(upcoming, self._tz)

        cancel = _CANCEL_COMMAND.match(command)
        if cancel:
            cancelled = await self._appointments.cancel(owner.id, int(cancel.group(1)))
            if cancelled is None:
                return replies.CANCEL_NOT_FOUND_MESSAGE
            return replies.cancelled_message(cancelled, self._tz)

        parsed = parse_command(text, now=self._clock(), tz=self._tz)
        if parsed is None:
            log_fallback(logger, "command_parser", reason="no_grammar_matched")
            return replies.not_understood_message()

        try:
            await self._appointments.create_from_command(owner.id, parsed)
        except Exception as exc:
            logger.error(
                "appointment_create_failed",
                extra={"user_id": owner.id, "error_type": type(exc).__name__},
            )
            return replies.CREATE_FAILED_MESSAGE
        return replies.confirmation_message(
            parsed.title, parsed.start, parsed.end, parsed.location, self._tz
        )

    async def _append_log(self, entry: DeliveryLogEntry) -> None:
        try:
            await self._log_store.append(entry)
        except Exception as exc:
            logger.error(
                "delivery_log_append_failed",
                extra={"error_type": type(exc).__name__, "log_type": entry.log_type},
            )
