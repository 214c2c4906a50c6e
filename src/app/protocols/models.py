"""Contratos de mensagens outbound compartilhados entre app/ e api/."""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator


class OutboundMessageRequest(BaseModel):
    """Requisição de envio para a Graph API."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    to: str = Field(..., min_length=8, description="Destino só com dígitos (sem '+').")
    message_type: Literal["text", "template"] = Field(default="text")
    text: str | None = Field(default=None, description="Corpo da mensagem de texto.")
    template_name: str | None = Field(default=None, description="Template aprovado.")
    template_params: tuple[str, ...] = Field(default=(), description="Parâmetros do body.")
    language: str = Field(default="pt_BR", description="Idioma do template.")

    @model_validator(mode="after")
    def _check_content(self) -> OutboundMessageRequest:
        if self.message_type == "text" and not self.text:
            raise ValueError("text é obrigatório para mensagens de texto")
        if self.message_type == "template" and not self.template_name:
            raise ValueError("template_name é obrigatório para templates")
        return self


class InboundMessageEvent(BaseModel):
    """Mensagem recebida de um usuário."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    kind: Literal["message"] = "message"
    message_id: str = Field(..., description="wamid da Meta, usado no dedupe.")
    from_number: str = Field(..., description="Telefone do remetente (só dígitos).")
    message_type: str = Field(..., description="Tipo informado pela Meta (text, image...).")
    text: str | None = Field(default=None, description="Corpo, para mensagens de texto.")
    timestamp: int | None = Field(default=None, description="Epoch em segundos.")
    contact_name: str | None = Field(default=None, description="Nome do perfil WhatsApp.")

    @property
    def is_text(self) -> bool:
        return self.message_type == "text" and bool(self.text and self.text.strip())


class StatusEvent(BaseModel):
    """Atualização de status (sent, delivered, read, failed) de mensagem enviada."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    kind: Literal["status"] = "status"
    message_id: str | None = None
    status: str = "unknown"
    recipient_id: str | None = None


class UnknownEvent(BaseModel):
    """Envelope que não corresponde a nenhum formato conhecido."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    kind: Literal["unknown"] = "unknown"
    reason: str = "unrecognized_payload"


WebhookEvent = Annotated[
    InboundMessageEvent | StatusEvent | UnknownEvent,
    Field(discriminator="kind"),
]
