"""Modelos de domínio de compromissos e lembretes.

Compromissos são criados pelo usuário (web/app) ou pelo parser de
comandos do WhatsApp. Lembretes pertencem a exatamente um compromisso e
mudam de estado uma única vez: PENDING -> SENT.
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


def _new_id() -> str:
    return uuid.uuid4().hex


def _utcnow() -> datetime:
    return datetime.now(UTC)


class AppointmentOrigin(StrEnum):
    """Procedência do compromisso."""

    MANUAL = "MANUAL"
    WHATSAPP = "WHATSAPP"
    COPA2026 = "COPA2026"
    MOBILE = "MOBILE"


class AppointmentStatus(StrEnum):
    """Status do compromisso. Só ATIVO dispara lembretes."""

    ATIVO = "ATIVO"
    CONFIRMADO = "CONFIRMADO"
    PENDENTE = "PENDENTE"
    CANCELADO = "CANCELADO"


class NotificationChannel(StrEnum):
    """Canal de entrega. O despachante só atende WHATSAPP."""

    WHATSAPP = "WHATSAPP"
    EMAIL = "EMAIL"
    PUSH = "PUSH"


class ReminderState(StrEnum):
    """Estados do lembrete vistos pelo despachante."""

    PENDING = "PENDING"
    SENT = "SENT"


class Appointment(BaseModel):
    """Compromisso de um usuário."""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(default_factory=_new_id, description="Identificador do compromisso.")
    owner_id: str = Field(..., description="Usuário dono do compromisso.")
    title: str = Field(..., min_length=1, description="Título do compromisso.")
    description: str | None = Field(default=None, description="Descrição livre.")
    location: str | None = Field(default=None, description="Local do compromisso.")
    start: datetime = Field(..., description="Início (timezone-aware).")
    end: datetime | None = Field(default=None, description="Fim; padrão é o início.")
    origin: AppointmentOrigin = Field(default=AppointmentOrigin.MANUAL)
    status: AppointmentStatus = Field(default=AppointmentStatus.ATIVO)
    created_at: datetime = Field(default_factory=_utcnow)

    @model_validator(mode="before")
    @classmethod
    def _default_end(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("end") is None and data.get("start") is not None:
            data = {**data, "end": data["start"]}
        return data

    @model_validator(mode="after")
    def _check_interval(self) -> Appointment:
        if self.end is not None and self.end < self.start:
            raise ValueError("end deve ser maior ou igual a start")
        return self

    @property
    def is_active(self) -> bool:
        return self.status == AppointmentStatus.ATIVO


class Reminder(BaseModel):
    """Lembrete associado a um compromisso."""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(default_factory=_new_id, description="Identificador do lembrete.")
    appointment_id: str = Field(..., description="Compromisso dono do lembrete.")
    channel: NotificationChannel = Field(default=NotificationChannel.WHATSAPP)
    lead_minutes: int = Field(default=60, ge=0, description="Antecedência em minutos.")
    sent: bool = Field(default=False, description="True após o despacho (irreversível).")
    sent_at: datetime | None = Field(default=None, description="Momento do despacho.")

    @property
    def state(self) -> ReminderState:
        return ReminderState.SENT if self.sent else ReminderState.PENDING


class UserProfile(BaseModel):
    """Dados do usuário relevantes para notificações."""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(..., description="Identificador do usuário.")
    name: str | None = Field(default=None, description="Nome para saudação.")
    phone: str | None = Field(default=None, description="Telefone informado pelo usuário.")
    whatsapp_enabled: bool = Field(default=False, description="Canal WhatsApp habilitado.")


__all__ = [
    "Appointment",
    "AppointmentOrigin",
    "AppointmentStatus",
    "NotificationChannel",
    "Reminder",
    "ReminderState",
    "UserProfile",
]
