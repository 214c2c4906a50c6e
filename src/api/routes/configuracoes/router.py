"""Configurações do canal WhatsApp do usuário.

GET e PUT /api/configuracoes/whatsapp. A autenticação fica no gateway à
frente do serviço, que repassa o usuário autenticado em `X-User-ID`.
"""

from __future__ import annotations

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Header
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from app.bootstrap.dependencies import get_channel_preference_service
from app.services.channel_preferences import USER_NOT_FOUND_MESSAGE, ChannelPreferenceService

logger = logging.getLogger(__name__)

router = APIRouter()

SAVED_MESSAGE = "Configurações salvas com sucesso"
UNAUTHORIZED_MESSAGE = "Não autorizado"


class WhatsappSettingsRequest(BaseModel):
    """Corpo do PUT: telefone opcional (vale o já gravado) e o liga/desliga."""

    model_config = ConfigDict(populate_by_name=True)

    telefone: str | None = None
    whatsapp_ativado: bool = Field(alias="whatsappAtivado")


def _unauthorized() -> JSONResponse:
    return JSONResponse(status_code=401, content={"message": UNAUTHORIZED_MESSAGE})


@router.get("/whatsapp", response_model=None)
async def read_whatsapp_settings(
    service: Annotated[ChannelPreferenceService, Depends(get_channel_preference_service)],
    user_id: Annotated[str | None, Header(alias="X-User-ID")] = None,
) -> JSONResponse | dict[str, Any]:
    if not user_id:
        return _unauthorized()

    preference = await service.get_whatsapp(user_id)
    if preference is None:
        return JSONResponse(status_code=404, content={"message": USER_NOT_FOUND_MESSAGE})
    return {"whatsapp": {"ativado": preference.enabled, "telefone": preference.phone or ""}}


@router.put("/whatsapp", response_model=None)
async def update_whatsapp_settings(
    body: WhatsappSettingsRequest,
    service: Annotated[ChannelPreferenceService, Depends(get_channel_preference_service)],
    user_id: Annotated[str | None, Header(alias="X-User-ID")] = None,
) -> JSONResponse | dict[str, Any]:
    """Liga/desliga o WhatsApp; ligar exige telefone válido (400 caso contrário)."""
    if not user_id:
        return _unauthorized()

    result = await service.update_whatsapp(user_id, body.telefone, body.whatsapp_ativado)
    if result.not_found:
        return JSONResponse(status_code=404, content={"message": result.error})
    if not result.success:
        logger.info("whatsapp_settings_rejected", extra={"user_id": user_id})
        return JSONResponse(status_code=400, content={"message": result.error})

    return {
        "message": SAVED_MESSAGE,
        "whatsapp": {"ativado": body.whatsapp_ativado, "telefone": result.phone or ""},
    }
