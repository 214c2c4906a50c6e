"""Payload builders por canal para APIs externas.

- whatsapp/: WhatsApp Cloud API (texto e template)
"""

__all__: list[str] = []
