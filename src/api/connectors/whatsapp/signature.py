"""Validação da assinatura X-Hub-Signature-256 enviada pela Meta."""

from __future__ import annotations

import hashlib
import hmac
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

SIGNATURE_HEADER = "x-hub-signature-256"
_PREFIX = "sha256="


@dataclass(frozen=True, slots=True)
class SignatureResult:
    """Resultado da verificação de assinatura."""

    valid: bool
    skipped: bool = False
    error: str | None = None


def compute_signature(raw_body: bytes, secret: str) -> str:
    """Calcula o header esperado para um corpo e secret."""
    digest = hmac.new(secret.encode("utf-8"), raw_body, hashlib.sha256).hexdigest()
    return f"{_PREFIX}{digest}"


def verify_meta_signature(
    raw_body: bytes,
    headers: Mapping[str, str],
    secret: str | None,
) -> SignatureResult:
    """Confere o HMAC-SHA256 do corpo bruto.

    Sem secret configurado a verificação é pulada (skipped=True).
    """
    if not secret:
        return SignatureResult(valid=True, skipped=True)

    received = _get_header(headers, SIGNATURE_HEADER)
    if not received:
        return SignatureResult(valid=False, error="missing_signature")

    if not received.startswith(_PREFIX):
        return SignatureResult(valid=False, error="malformed_signature")

    expected = compute_signature(raw_body, secret)
    if not hmac.compare_digest(received, expected):
        return SignatureResult(valid=False, error="signature_mismatch")

    return SignatureResult(valid=True)


def _get_header(headers: Mapping[str, str], name: str) -> str:
    for key, value in headers.items():
        if key.lower() == name:
            return value
    return ""
