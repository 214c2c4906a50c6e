"""Erros e helpers de parsing para API Meta/WhatsApp."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from api.connectors.whatsapp.http_base import HttpError

# Janela de 24h fechada: texto livre só é aceito após mensagem do usuário
OUTSIDE_SERVICE_WINDOW_CODE = 131047


@dataclass(frozen=True)
class WhatsAppApiError:
    """Erro retornado pela API Meta/WhatsApp."""

    error_type: str
    error_code: int
    error_message: str
    is_permanent: bool  # True se erro não é retentável


class WhatsAppSendError(HttpError):
    """Falha de envio com o corpo da resposta preservado para auditoria."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None,
        response_data: dict[str, Any],
        meta_error: WhatsAppApiError | None = None,
    ) -> None:
        super().__init__(
            message,
            status_code=status_code,
            is_retryable=bool(meta_error and not meta_error.is_permanent),
        )
        self.response_data = response_data
        self.meta_error = meta_error


def is_permanent_error(error_code: int, error_type: str) -> bool:
    """Classifica erro como permanente ou transitório.

    Erros permanentes: 400, 401, 403, 404, 413 e janela de 24h fechada.
    Erros transitórios: 429 (rate limit), 500+ (server errors).
    """
    permanent_codes = {400, 401, 403, 404, 413, OUTSIDE_SERVICE_WINDOW_CODE}
    if error_code in permanent_codes:
        return True

    permanent_types = {"OAuthException", "InvalidRequest"}
    return error_type in permanent_types


def parse_meta_error(response_data: dict[str, Any]) -> WhatsAppApiError | None:
    """Extrai informações de erro do response da Meta.

    Args:
        response_data: Dict do response JSON

    Returns:
        WhatsAppApiError se houver erro, None se sucesso
    """
    error_obj = response_data.get("error")
    if not error_obj or not isinstance(error_obj, dict):
        return None

    error_type = str(error_obj.get("type", "unknown"))
    error_code = int(error_obj.get("code", 0) or 0)
    error_message = str(error_obj.get("message") or "")

    return WhatsAppApiError(
        error_type=error_type,
        error_code=error_code,
        error_message=error_message,
        is_permanent=is_permanent_error(error_code, error_type),
    )
