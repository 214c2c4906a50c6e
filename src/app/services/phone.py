"""Normalização de telefones brasileiros para o formato E.164 do WhatsApp.

Funções puras, sem IO. Nunca levantam exceção para entradas malformadas:
o chamador decide o que fazer com um telefone inválido.
"""

from __future__ import annotations

import re

COUNTRY_CODE = "55"
SUFFIX_LENGTH = 9

_ALLOWED_CHARS = re.compile(r"[^\d+]")
_NON_DIGITS = re.compile(r"\D")
_VALID_WHATSAPP = re.compile(rf"^\+{COUNTRY_CODE}\d{{10,11}}$")


def normalize_phone(raw: str | None) -> str:
    """Converte um telefone em formato livre para +55DDDNUMERO.

    Regras, na ordem:
    - já começa com 55 e tem 12+ dígitos: só prefixa '+'
    - 11 dígitos (DDD + celular com 9): prefixa +55
    - 10 dígitos (DDD + número sem o 9): insere o 9 após o DDD
    - 8 ou 9 dígitos (sem DDD): prefixa +55
    - qualquer outro caso: devolve os dígitos com '+', sem validar
    """
    cleaned = _ALLOWED_CHARS.sub("", raw or "")
    if cleaned.startswith("+"):
        cleaned = cleaned[1:]
    cleaned = cleaned.replace("+", "")

    if cleaned.startswith(COUNTRY_CODE) and len(cleaned) >= 12:
        return f"+{cleaned}"

    if len(cleaned) == 11:
        return f"+{COUNTRY_CODE}{cleaned}"

    if len(cleaned) == 10:
        return f"+{COUNTRY_CODE}{cleaned[:2]}9{cleaned[2:]}"

    if len(cleaned) in (8, 9):
        return f"+{COUNTRY_CODE}{cleaned}"

    return f"+{cleaned}"


def is_valid_whatsapp_phone(phone: str | None) -> bool:
    """True se o telefone normalizado é +55 seguido de 10 ou 11 dígitos."""
    if not phone:
        return False
    return bool(_VALID_WHATSAPP.match(normalize_phone(phone)))


def format_phone_display(phone: str | None) -> str:
    """Formata para exibição: +55 11 99999-9999.

    Telefones fora do padrão de celular voltam apenas normalizados.
    """
    normalized = normalize_phone(phone)
    digits = normalized[1:]
    if len(digits) != 13:
        return normalized
    return f"+{digits[:2]} {digits[2:4]} {digits[4:9]}-{digits[9:]}"


def phone_digits_suffix(phone: str | None, length: int = SUFFIX_LENGTH) -> str:
    """Últimos `length` dígitos, usados na busca tolerante de usuário."""
    digits = _NON_DIGITS.sub("", phone or "")
    return digits[-length:]


def to_whatsapp_recipient(phone: str) -> str:
    """Formato do campo `to` da Graph API: só dígitos, sem '+'."""
    return phone.replace("+", "")
