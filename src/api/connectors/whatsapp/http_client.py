"""Cliente HTTP especializado para WhatsApp/Meta API.

Estende HttpClient genérico com comportamentos específicos de WhatsApp:
- Header Authorization Bearer
- Interpretação de erros Meta (error.type, error.code, error.message)
- Corpo da resposta preservado na exceção para o log de entrega
- Logging estruturado sem PII (tokens, números)
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from api.connectors.whatsapp.http_base import HttpClient, HttpClientConfig
from api.connectors.whatsapp.meta_errors import WhatsAppSendError, parse_meta_error
from api.connectors.whatsapp.meta_logging import log_http_failure, log_meta_error, log_success

if TYPE_CHECKING:
    import httpx

    from config.settings import WhatsAppSettings

logger: logging.Logger = logging.getLogger(__name__)


class WhatsAppHttpClient(HttpClient):
    """Cliente HTTP para a Cloud API do WhatsApp.

    `send_message` retorna o JSON da Meta em caso de sucesso e levanta
    WhatsAppSendError para qualquer resposta de erro. Falhas de transporte
    saem como HttpError.
    """

    async def send_message(
        self,
        endpoint: str,
        access_token: str,
        payload: dict[str, Any],
    ) -> dict[str, Any]:
        """Envia mensagem via WhatsApp API.

        Args:
            endpoint: URL do endpoint (ex: .../messages)
            access_token: Bearer token para autenticação
            payload: Payload JSON da mensagem

        Returns:
            Response JSON da Meta

        Raises:
            ValueError: Se access_token está vazio
            WhatsAppSendError: Se a Meta respondeu com erro
            HttpError: Se falhou o transporte
        """
        if not access_token or not access_token.strip():
            raise ValueError("access_token é obrigatório para envio de mensagens")

        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {access_token}",
        }
        response = await self.post(endpoint, json=payload, headers=headers)
        return self._process_response(response, endpoint)

    def _process_response(self, response: httpx.Response, endpoint: str) -> dict[str, Any]:
        response_data = _safe_json(response)

        meta_error = parse_meta_error(response_data)
        if meta_error:
            log_meta_error(meta_error, response.status_code, endpoint)
            raise WhatsAppSendError(
                meta_error.error_message or f"HTTP {response.status_code}",
                status_code=response.status_code,
                response_data=response_data,
                meta_error=meta_error,
            )

        if response.is_error:
            log_http_failure(response.status_code, endpoint)
            raise WhatsAppSendError(
                f"HTTP {response.status_code}",
                status_code=response.status_code,
                response_data=response_data,
            )

        log_success(response.status_code, endpoint)
        return response_data


def _safe_json(response: httpx.Response) -> dict[str, Any]:
    try:
        data = response.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        logger.warning("whatsapp_response_not_json", extra={"status_code": response.status_code})
        return {}
    return data if isinstance(data, dict) else {}


def create_whatsapp_http_client(
    settings: WhatsAppSettings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> WhatsAppHttpClient:
    """Factory do cliente WhatsApp.

    Sem retries: a política de nova tentativa pertence ao despachante
    de lembretes e à próxima execução do cron.
    """
    config = HttpClientConfig(
        timeout_seconds=settings.request_timeout_seconds,
        max_retries=0,
        transport=transport,
    )
    return WhatsAppHttpClient(config=config)
