"""Filters de logging para contexto e mascaramento.

- CorrelationIdFilter: injeta correlation_id e service em cada record.
- PhoneMaskingFilter: mascara telefones passados via `extra`, mantendo
  apenas os 4 últimos dígitos.

Logs estruturados, sem PII.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

# Campos de `extra` que podem carregar telefone
PHONE_FIELDS = frozenset({"phone", "destination", "to", "from_number", "sender"})

_NON_DIGITS = re.compile(r"\D")


def mask_phone(value: str) -> str:
    """Mascara um telefone deixando só os 4 últimos dígitos."""
    digits = _NON_DIGITS.sub("", value or "")
    if len(digits) <= 4:
        return "*" * len(digits)
    return f"{'*' * (len(digits) - 4)}{digits[-4:]}"


class CorrelationIdFilter(logging.Filter):
    """Injeta correlation_id e service em cada record de log.

    Args:
        service_name: Nome do serviço para identificação nos logs.
        correlation_id_getter: Função que retorna o correlation_id atual.
            Se não fornecida, usa string vazia como fallback.
    """

    def __init__(
        self,
        service_name: str,
        correlation_id_getter: Callable[[], str] | None = None,
    ) -> None:
        super().__init__()
        self._service_name = service_name
        self._get_correlation_id = correlation_id_getter or (lambda: "")

    def filter(self, record: logging.LogRecord) -> bool:
        """Adiciona correlation_id e service ao record.

        Se correlation_id já foi passado via `extra`, preserva o valor.
        """
        existing = getattr(record, "correlation_id", None)
        record.correlation_id = existing if existing else self._get_correlation_id()
        record.service = self._service_name
        return True


class PhoneMaskingFilter(logging.Filter):
    """Mascara campos de telefone conhecidos antes da formatação."""

    def filter(self, record: logging.LogRecord) -> bool:
        for field in PHONE_FIELDS:
            value = getattr(record, field, None)
            if isinstance(value, str) and value:
                setattr(record, field, mask_phone(value))
        return True
