"""Endpoint do cron de lembretes.

GET e POST /api/cron/lembretes executam uma varredura do despachante.
Agendadores externos (Cloud Scheduler, Vercel Cron) chamam com
`Authorization: Bearer {CRON_SECRET}`.
"""

from __future__ import annotations

import hmac
import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from app.bootstrap.dependencies import get_reminder_dispatcher
from app.observability import correlation_scope
from app.use_cases.reminders import ReminderDispatcher
from config.settings import get_base_settings, get_reminder_settings, get_whatsapp_settings

logger = logging.getLogger(__name__)

router = APIRouter()

NOT_CONFIGURED_MESSAGE = "WhatsApp não configurado"


def is_authorized(authorization: str | None, secret: str, *, is_development: bool) -> bool:
    """Sem CRON_SECRET, só desenvolvimento passa."""
    if not secret:
        return is_development
    expected = f"Bearer {secret}"
    return hmac.compare_digest((authorization or "").encode("utf-8"), expected.encode("utf-8"))


@router.api_route("/lembretes", methods=["GET", "POST"], response_model=None)
async def run_reminders(
    request: Request,
    dispatcher: Annotated[ReminderDispatcher, Depends(get_reminder_dispatcher)],
) -> JSONResponse | dict[str, Any]:
    """Executa uma varredura de lembretes."""
    authorized = is_authorized(
        request.headers.get("authorization"),
        get_reminder_settings().cron_secret,
        is_development=get_base_settings().is_development,
    )
    if not authorized:
        logger.warning("cron_unauthorized", extra={"path": request.url.path})
        return JSONResponse(status_code=401, content={"error": "Unauthorized"})

    if not get_whatsapp_settings().is_configured:
        logger.warning("cron_whatsapp_not_configured")
        return {"message": NOT_CONFIGURED_MESSAGE, "enviados": 0}

    with correlation_scope():
        try:
            summary = await dispatcher.run()
        except Exception as exc:
            logger.exception("cron_reminders_failed", extra={"error_type": type(exc).__name__})
            return JSONResponse(status_code=500, content={"error": "Erro interno"})

    return {
        "message": summary.message,
        "enviados": summary.sent,
        "erros": summary.errors,
        "total": summary.total,
        "resultados": [
            {"id": result.reminder_id, "status": result.status, "error": result.error}
            for result in summary.results
        ],
    }
