"""Conector WhatsApp: adapter de borda para a Meta Graph API.

Único ponto de IO para o canal WhatsApp:
- Webhook (verify, signature, receive)
- HTTP client para envio de mensagens
- Erros do Graph API
"""

from .http_base import HttpClient, HttpClientConfig, HttpError
from .http_client import WhatsAppHttpClient, create_whatsapp_http_client
from .meta_errors import (
    WhatsAppApiError,
    WhatsAppSendError,
    is_permanent_error,
    parse_meta_error,
)
from .signature import SignatureResult, compute_signature, verify_meta_signature

__all__ = [
    "HttpClient",
    "HttpClientConfig",
    "HttpError",
    "SignatureResult",
    "WhatsAppApiError",
    "WhatsAppHttpClient",
    "WhatsAppSendError",
    "compute_signature",
    "create_whatsapp_http_client",
    "is_permanent_error",
    "parse_meta_error",
    "verify_meta_signature",
]
