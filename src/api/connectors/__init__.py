"""Connectors: adapters de borda para APIs externas.

Estrutura:
- whatsapp/: WhatsApp Cloud API (Meta Graph API)
"""

__all__: list[str] = []
