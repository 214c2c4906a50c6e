"""Serviços de aplicação.

Unidades reutilizáveis de orquestração (sem IO direto).
Implementações concretas de IO ficam em app/infra/.
"""

from app.services.appointment_service import AppointmentService
from app.services.channel_preferences import ChannelPreferenceService, ChannelUpdateResult
from app.services.owner_lookup import OwnerLookup

__all__ = [
    "AppointmentService",
    "ChannelPreferenceService",
    "ChannelUpdateResult",
    "OwnerLookup",
]
