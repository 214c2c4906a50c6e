"""Helpers de extração de campos do envelope WhatsApp.

Separado de extractor.py para manter cada função pequena e testável.
"""

from __future__ import annotations

from typing import Any


def extract_first_value(payload: dict[str, Any]) -> dict[str, Any] | None:
    """Retorna entry[0].changes[0].value, ou None se ausente."""
    entries = payload.get("entry")
    if not isinstance(entries, list) or not entries or not isinstance(entries[0], dict):
        return None
    changes = entries[0].get("changes")
    if not isinstance(changes, list) or not changes or not isinstance(changes[0], dict):
        return None
    value = changes[0].get("value")
    return value if isinstance(value, dict) else None


def extract_text_body(msg: dict[str, Any]) -> str | None:
    """Extrai corpo de mensagem de texto."""
    text_block = msg.get("text")
    if isinstance(text_block, dict):
        body = text_block.get("body")
        return body if isinstance(body, str) else None
    return None


def extract_contact_name(value: dict[str, Any]) -> str | None:
    """Nome do perfil do primeiro contato, quando enviado pela Meta."""
    contacts = value.get("contacts")
    if not isinstance(contacts, list) or not contacts or not isinstance(contacts[0], dict):
        return None
    profile = contacts[0].get("profile")
    if isinstance(profile, dict):
        name = profile.get("name")
        return name if isinstance(name, str) else None
    return None


def parse_timestamp(raw: Any) -> int | None:
    """Timestamp da Meta chega como string de epoch em segundos."""
    try:
        return int(raw)
    except (TypeError, ValueError):
        return None
