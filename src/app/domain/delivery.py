"""Modelos de auditoria de envio e notificação."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from app.domain.appointment import NotificationChannel


class DeliveryLogType(StrEnum):
    """Tipos de registro no log de entrega WhatsApp."""

    MESSAGE_SENT = "MESSAGE_SENT"
    MESSAGE_FAILED = "MESSAGE_FAILED"
    WEBHOOK_RECEIVED = "WEBHOOK_RECEIVED"
    WEBHOOK_ERROR = "WEBHOOK_ERROR"


class NotificationStatus(StrEnum):
    ENVIADO = "ENVIADO"
    ERRO = "ERRO"


class DeliveryLogEntry(BaseModel):
    """Registro imutável de uma tentativa de envio ou evento de webhook."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    channel: NotificationChannel = Field(default=NotificationChannel.WHATSAPP)
    log_type: DeliveryLogType = Field(..., description="Tipo do registro.")
    destination: str = Field(..., description="Telefone de destino ou origem.")
    content: str | None = Field(default=None, description="Texto ou nome do template.")
    payload: dict[str, Any] = Field(default_factory=dict, description="Request/response.")
    success: bool = Field(..., description="Resultado da tentativa.")
    error: str | None = Field(default=None, description="Mensagem de erro, se houver.")
    user_id: str | None = Field(default=None, description="Usuário vinculado.")
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class NotificationRecord(BaseModel):
    """Resultado de um lembrete despachado."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    reminder_id: str
    owner_id: str
    channel: NotificationChannel = Field(default=NotificationChannel.WHATSAPP)
    status: NotificationStatus
    payload: dict[str, Any] = Field(default_factory=dict)
    error: str | None = None
    sent_at: datetime


class SendResult(BaseModel):
    """Resultado uniforme do envio; nunca levanta exceção para o chamador."""

    model_config = ConfigDict(frozen=True)

    success: bool
    message_id: str | None = None
    error: str | None = None


__all__ = [
    "DeliveryLogEntry",
    "DeliveryLogType",
    "NotificationRecord",
    "NotificationStatus",
    "SendResult",
]
