"""Agregador de rotas: registra todos os routers.

Uso:
    from api.routes import create_api_router

    app = FastAPI()
    app.include_router(create_api_router())
"""

from __future__ import annotations

from fastapi import APIRouter

from api.routes.configuracoes.router import router as configuracoes_router
from api.routes.cron.router import router as cron_router
from api.routes.health.router import router as health_router
from api.routes.whatsapp.webhook import router as whatsapp_webhook_router


def create_api_router() -> APIRouter:
    """Cria router principal com todos os sub-routers registrados.

    Returns:
        APIRouter configurado com todos os endpoints.
    """
    api_router = APIRouter()

    # Health checks (sem prefixo para /health e /ready na raiz)
    api_router.include_router(health_router, tags=["health"])

    # Webhook WhatsApp (GET para challenge, POST para eventos)
    api_router.include_router(
        whatsapp_webhook_router,
        prefix="/webhook/whatsapp",
        tags=["whatsapp"],
    )

    # Cron de lembretes
    api_router.include_router(cron_router, prefix="/api/cron", tags=["cron"])

    # Preferências de canal do usuário
    api_router.include_router(
        configuracoes_router,
        prefix="/api/configuracoes",
        tags=["configuracoes"],
    )

    return api_router
