"""Protocolos de auditoria de envio (append-only)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from app.domain.delivery import DeliveryLogEntry, NotificationRecord


class DeliveryLogStoreProtocol(Protocol):
    """Contrato para o log de entrega WhatsApp."""

    async def append(self, entry: DeliveryLogEntry) -> None:
        """Registra uma entrada imutável."""
        ...


class NotificationStoreProtocol(Protocol):
    """Contrato para o histórico de notificações de lembretes."""

    async def append(self, record: NotificationRecord) -> None:
        """Registra o resultado de um lembrete despachado."""
        ...
