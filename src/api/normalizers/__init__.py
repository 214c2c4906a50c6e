"""Normalizers por canal: conversão de payloads externos para modelos internos.

- whatsapp/: webhook da WhatsApp Cloud API
"""

from .whatsapp import parse_webhook_event

__all__ = ["parse_webhook_event"]
