"""Endpoints de webhook do WhatsApp.

Endpoints:
- GET /webhook/whatsapp: verificação de webhook (Meta challenge)
- POST /webhook/whatsapp: recebimento de mensagens

Segurança:
- Validação HMAC (X-Hub-Signature-256) quando WHATSAPP_WEBHOOK_SECRET existe
- Depois da assinatura, sempre 200: a Meta reentrega eventos
  que não recebem 200
"""

from __future__ import annotations

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Request, Response, status

from api.connectors.whatsapp.webhook.receive import (
    InvalidJsonError,
    InvalidSignatureError,
    parse_webhook_request,
)
from api.connectors.whatsapp.webhook.verify import (
    WebhookChallengeError,
    verify_webhook_challenge,
)
from app.bootstrap.dependencies import get_inbound_handler
from app.use_cases.whatsapp import InboundMessageHandler
from config.settings import get_whatsapp_settings

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("")
async def verify_webhook(request: Request) -> Response:
    """Verificação de webhook: responde ao challenge da Meta.

    Query params esperados:
    - hub.mode: deve ser "subscribe"
    - hub.verify_token: deve corresponder ao configurado
    - hub.challenge: valor a retornar

    Returns:
        Texto do challenge ou erro 403.
    """
    settings = get_whatsapp_settings()
    hub_mode = request.query_params.get("hub.mode")

    try:
        challenge = verify_webhook_challenge(
            hub_mode=hub_mode,
            hub_verify_token=request.query_params.get("hub.verify_token"),
            hub_challenge=request.query_params.get("hub.challenge"),
            expected_token=settings.verify_token,
        )
    except WebhookChallengeError as exc:
        logger.warning(
            "webhook_verification_failed",
            extra={"channel": "whatsapp", "error": str(exc)},
        )
        return Response(
            content="Forbidden",
            media_type="text/plain",
            status_code=status.HTTP_403_FORBIDDEN,
        )

    logger.info("webhook_verified", extra={"channel": "whatsapp", "hub_mode": hub_mode})
    # Meta espera o challenge como texto puro
    return Response(
        content=challenge,
        media_type="text/plain",
        status_code=status.HTTP_200_OK,
    )


@router.post("", response_model=None)
async def receive_webhook(
    request: Request,
    handler: Annotated[InboundMessageHandler, Depends(get_inbound_handler)],
) -> Response | dict[str, Any]:
    """Recebimento de eventos inbound do WhatsApp.

    Returns:
        {"status": "ok"|"error"} (inclusive para JSON inválido) ou 401
        para assinatura inválida.
    """
    settings = get_whatsapp_settings()
    raw_body = await request.body()

    try:
        payload, signature_result = parse_webhook_request(
            raw_body=raw_body,
            headers=dict(request.headers),
            secret=settings.webhook_secret or None,
        )
    except InvalidSignatureError as exc:
        logger.warning(
            "webhook_signature_invalid",
            extra={"channel": "whatsapp", "error": str(exc)},
        )
        return Response(
            content="Unauthorized",
            media_type="text/plain",
            status_code=status.HTTP_401_UNAUTHORIZED,
        )
    except InvalidJsonError as exc:
        logger.warning(
            "webhook_json_invalid",
            extra={"channel": "whatsapp", "error": str(exc)},
        )
        return {"status": "error"}

    logger.info(
        "webhook_received",
        extra={
            "channel": "whatsapp",
            "signature_valid": signature_result.valid,
            "signature_skipped": signature_result.skipped,
            "payload_size": len(raw_body),
        },
    )
    return {"status": await handler.handle(payload)}
