"""Helpers de logging para API Meta/WhatsApp (sem PII)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .meta_errors import WhatsAppApiError

logger = logging.getLogger(__name__)


def log_meta_error(
    meta_error: WhatsAppApiError,
    status_code: int,
    endpoint: str,
) -> None:
    """Loga erro da Meta sem expor token nem destinatário."""
    logger.warning(
        "whatsapp_api_error",
        extra={
            "endpoint": endpoint,
            "status_code": status_code,
            "error_type": meta_error.error_type,
            "error_code": meta_error.error_code,
            "is_permanent": meta_error.is_permanent,
        },
    )


def log_http_failure(status_code: int, endpoint: str) -> None:
    """Loga resposta não-2xx sem corpo de erro reconhecível."""
    logger.warning(
        "whatsapp_http_failure",
        extra={"endpoint": endpoint, "status_code": status_code},
    )


def log_success(status_code: int, endpoint: str) -> None:
    """Loga sucesso sem expor dados sensíveis."""
    logger.debug(
        "whatsapp_api_success",
        extra={"endpoint": endpoint, "status_code": status_code},
    )
