"""Settings específicas de WhatsApp.

Configurações do canal WhatsApp via Graph API (Cloud API da Meta).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

# Constantes do Graph API
GRAPH_API_VERSION: str = "v21.0"
GRAPH_API_BASE_URL: str = "https://graph.facebook.com"

# Template aprovado para lembretes de compromisso
REMINDER_TEMPLATE_NAME: str = "lembrete_compromisso"
TEMPLATE_LANGUAGE_CODE: str = "pt_BR"


@dataclass(frozen=True)
class WhatsAppSettings:
    """Configurações do canal WhatsApp.

    Attributes:
        verify_token: Token para verificação de webhook
        webhook_secret: Secret para validação HMAC de payloads (opcional)
        access_token: Token de acesso à Graph API
        phone_number_id: ID do número de telefone no Meta Business
        api_version: Versão da Graph API (ex: v21.0)
        api_base_url: URL base da Graph API
        request_timeout_seconds: Timeout para requisições HTTP
        reminder_template_name: Nome do template de lembrete
        template_language: Código de idioma dos templates
    """

    # Credenciais
    verify_token: str = ""
    webhook_secret: str = ""
    access_token: str = ""
    phone_number_id: str = ""

    # API
    api_version: str = GRAPH_API_VERSION
    api_base_url: str = GRAPH_API_BASE_URL

    # Timeouts
    request_timeout_seconds: float = 30.0

    # Templates
    reminder_template_name: str = REMINDER_TEMPLATE_NAME
    template_language: str = TEMPLATE_LANGUAGE_CODE

    @property
    def is_configured(self) -> bool:
        """True quando há credenciais suficientes para enviar mensagens."""
        return bool(self.phone_number_id and self.access_token)

    @property
    def api_endpoint(self) -> str:
        """URL base completa da API com versão."""
        return f"{self.api_base_url}/{self.api_version}"

    def get_messages_endpoint(self, phone_number_id: str | None = None) -> str:
        """Retorna URL para envio de mensagens.

        Args:
            phone_number_id: ID do número. Usa self.phone_number_id se None.

        Returns:
            URL completa no formato: https://graph.facebook.com/v21.0/{id}/messages

        Raises:
            ValueError: Se phone_number_id não informado e não configurado.
        """
        pid = phone_number_id or self.phone_number_id
        if not pid:
            raise ValueError("phone_number_id é obrigatório")
        return f"{self.api_endpoint}/{pid}/messages"

    def validate(self) -> list[str]:
        """Valida configurações mínimas de WhatsApp.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []

        if not self.phone_number_id:
            errors.append("WHATSAPP_PHONE_NUMBER_ID não configurado")

        if not self.access_token:
            errors.append("WHATSAPP_ACCESS_TOKEN não configurado")

        if not self.verify_token:
            errors.append("WHATSAPP_VERIFY_TOKEN não configurado")

        if self.request_timeout_seconds <= 0:
            errors.append("WHATSAPP_REQUEST_TIMEOUT_SECONDS deve ser > 0")

        return errors


def _load_from_env() -> WhatsAppSettings:
    """Carrega WhatsAppSettings a partir de variáveis de ambiente.

    Aceita os nomes legados WHATSAPP_API_TOKEN e WHATSAPP_PHONE_ID.
    """
    return WhatsAppSettings(
        verify_token=os.getenv("WHATSAPP_VERIFY_TOKEN", ""),
        webhook_secret=os.getenv("WHATSAPP_WEBHOOK_SECRET", ""),
        access_token=os.getenv(
            "WHATSAPP_ACCESS_TOKEN", os.getenv("WHATSAPP_API_TOKEN", "")
        ),
        phone_number_id=os.getenv(
            "WHATSAPP_PHONE_NUMBER_ID", os.getenv("WHATSAPP_PHONE_ID", "")
        ),
        api_version=os.getenv("WHATSAPP_API_VERSION", GRAPH_API_VERSION),
        api_base_url=os.getenv("WHATSAPP_API_BASE_URL", GRAPH_API_BASE_URL),
        request_timeout_seconds=float(
            os.getenv("WHATSAPP_REQUEST_TIMEOUT_SECONDS", "30")
        ),
        reminder_template_name=os.getenv(
            "WHATSAPP_REMINDER_TEMPLATE", REMINDER_TEMPLATE_NAME
        ),
        template_language=os.getenv(
            "WHATSAPP_TEMPLATE_LANGUAGE", TEMPLATE_LANGUAGE_CODE
        ),
    )


@lru_cache(maxsize=1)
def get_whatsapp_settings() -> WhatsAppSettings:
    """Retorna instância cacheada de WhatsAppSettings.

    A cache garante singleton para múltiplas injeções.
    """
    return _load_from_env()
