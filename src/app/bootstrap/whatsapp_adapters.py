"""Adapters concretos para WhatsApp (wiring em app/bootstrap).

Este módulo é o único autorizado a acoplar app <-> api.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any

from api.connectors.whatsapp.http_client import create_whatsapp_http_client
from api.connectors.whatsapp.meta_errors import WhatsAppSendError
from api.normalizers.whatsapp.extractor import parse_webhook_event
from api.payload_builders.whatsapp.factory import build_full_payload
from app.domain.delivery import DeliveryLogEntry, DeliveryLogType, SendResult
from app.observability import record_delivery, record_latency
from app.protocols.models import OutboundMessageRequest
from app.services.phone import to_whatsapp_recipient

if TYPE_CHECKING:
    from collections.abc import Sequence

    from app.protocols.models import WebhookEvent
    from app.protocols.delivery_log_store import DeliveryLogStoreProtocol
    from app.protocols.messaging import WhatsAppHttpClientProtocol
    from config.settings import WhatsAppSettings

logger = logging.getLogger(__name__)

NOT_CONFIGURED_ERROR = "WhatsApp não configurado"


class GraphApiMessageSender:
    """Sender da Cloud API com auditoria de toda tentativa.

    Contrato:
    - sem credenciais: retorna SendResult(success=False) sem chamar a API
    - com credenciais: exatamente uma chamada HTTP e exatamente um
      DeliveryLogEntry por tentativa, com sucesso ou falha
    - nunca levanta exceção e nunca repete a chamada
    """

    def __init__(
        self,
        settings: WhatsAppSettings,
        log_store: DeliveryLogStoreProtocol,
        http_client: WhatsAppHttpClientProtocol | None = None,
    ) -> None:
        self._settings = settings
        self._log_store = log_store
        self._http = http_client or create_whatsapp_http_client(settings)

    @property
    def is_configured(self) -> bool:
        return self._settings.is_configured

    async def send_text(
        self,
        destination: str,
        body: str,
        user_id: str | None = None,
    ) -> SendResult:
        """Envia texto livre (só entregue dentro da janela de 24h)."""
        if not self.is_configured:
            return _not_configured("text")
        return await self._execute(
            destination=destination,
            content=body,
            user_id=user_id,
            message_type="text",
            text=body,
        )

    async def send_template(
        self,
        destination: str,
        template_name: str,
        params: Sequence[str],
        user_id: str | None = None,
    ) -> SendResult:
        """Envia template aprovado com parâmetros posicionais."""
        if not self.is_configured:
            return _not_configured("template")
        return await self._execute(
            destination=destination,
            content=template_name,
            user_id=user_id,
            message_type="template",
            template_name=template_name,
            template_params=tuple(str(p) for p in params),
            language=self._settings.template_language,
        )

    async def _execute(
        self,
        *,
        destination: str,
        content: str,
        user_id: str | None,
        **fields: Any,
    ) -> SendResult:
        started = time.perf_counter()
        message_type = fields["message_type"]
        payload: dict[str, Any] = {}
        error_code: int | None = None

        try:
            request = OutboundMessageRequest(to=to_whatsapp_recipient(destination), **fields)
            payload = build_full_payload(request)
            response = await self._http.send_message(
                endpoint=self._settings.get_messages_endpoint(),
                access_token=self._settings.access_token,
                payload=payload,
            )
        except WhatsAppSendError as exc:
            error_code = exc.meta_error.error_code if exc.meta_error else exc.status_code
            result = SendResult(success=False, error=str(exc))
            audit: dict[str, Any] = {"request": payload, "response": exc.response_data}
        except Exception as exc:
            result = SendResult(success=False, error=str(exc) or type(exc).__name__)
            audit = {"request": payload, "error": result.error}
        else:
            result = SendResult(success=True, message_id=_extract_message_id(response))
            audit = {"request": payload, "response": response}

        await self._record(destination, content, user_id, result, audit)

        record_delivery(message_type, result.success, error_code)
        elapsed_ms = (time.perf_counter() - started) * 1000
        record_latency("whatsapp_sender", f"send_{message_type}", elapsed_ms)
        if not result.success:
            logger.warning(
                "whatsapp_send_failed",
                extra={"message_type": message_type, "error_code": error_code},
            )
        return result

    async def _record(
        self,
        destination: str,
        content: str,
        user_id: str | None,
        result: SendResult,
        audit: dict[str, Any],
    ) -> None:
        entry = DeliveryLogEntry(
            log_type=(
                DeliveryLogType.MESSAGE_SENT if result.success else DeliveryLogType.MESSAGE_FAILED
            ),
            destination=destination,
            content=content,
            payload=audit,
            success=result.success,
            error=result.error,
            user_id=user_id,
        )
        try:
            await self._log_store.append(entry)
        except Exception as exc:
            # Falha de auditoria não muda o resultado do envio
            logger.error(
                "delivery_log_append_failed",
                extra={"error_type": type(exc).__name__, "log_type": entry.log_type},
            )


class GraphApiWebhookParser:
    """Converte o envelope do webhook Meta em evento tipado."""

    def parse(self, payload: dict[str, Any]) -> WebhookEvent:
        return parse_webhook_event(payload)


def _not_configured(message_type: str) -> SendResult:
    logger.warning("whatsapp_not_configured", extra={"message_type": message_type})
    return SendResult(success=False, error=NOT_CONFIGURED_ERROR)


def _extract_message_id(response: dict[str, Any]) -> str | None:
    messages = response.get("messages") or []
    if messages and isinstance(messages[0], dict):
        return messages[0].get("id")
    return None
