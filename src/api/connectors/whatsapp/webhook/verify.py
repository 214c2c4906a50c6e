"""Handshake de verificação do webhook exigido pela Meta."""

from __future__ import annotations

import hmac

SUBSCRIBE_MODE = "subscribe"


class WebhookChallengeError(ValueError):
    """Erro de verificação do desafio do webhook."""


def verify_webhook_challenge(
    hub_mode: str | None,
    hub_verify_token: str | None,
    hub_challenge: str | None,
    expected_token: str | None,
) -> str:
    """Valida o desafio e retorna o challenge a ser ecoado literalmente.

    Args:
        hub_mode: Valor de hub.mode
        hub_verify_token: Valor de hub.verify_token
        hub_challenge: Valor de hub.challenge
        expected_token: WHATSAPP_VERIFY_TOKEN configurado

    Raises:
        WebhookChallengeError: Se token não configurado ou não confere
    """
    if not expected_token:
        raise WebhookChallengeError("missing_verify_token")

    token_matches = hmac.compare_digest(
        (hub_verify_token or "").encode("utf-8"),
        expected_token.encode("utf-8"),
    )
    if hub_mode != SUBSCRIBE_MODE or not token_matches:
        raise WebhookChallengeError("verification_failed")

    return hub_challenge or ""
