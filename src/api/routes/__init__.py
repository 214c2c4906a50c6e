"""Rotas HTTP da API: adapters de entrada.

Responsabilidades:
- Definir endpoints HTTP (webhook, cron, health, configurações)
- Validação inicial de request (headers, assinatura, query params)
- Delegação para use cases montados em app/bootstrap
- Respostas HTTP apropriadas

Estrutura:
- routes/whatsapp/: webhook WhatsApp
- routes/cron/: varredura de lembretes
- routes/health/: health checks e readiness
- routes/configuracoes/: preferências do canal WhatsApp
- router.py: registra todos os routers no app principal
"""

from __future__ import annotations

from api.routes.router import create_api_router

__all__ = ["create_api_router"]
