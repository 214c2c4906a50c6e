"""Settings do pipeline de lembretes.

Agrupa o segredo do cron, o fuso horário local e os limites
de execução do despachante.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

DEFAULT_TIMEZONE: str = "America/Sao_Paulo"


@dataclass(frozen=True)
class ReminderSettings:
    """Configurações de lembretes.

    Attributes:
        cron_secret: Segredo esperado no header Authorization do cron
        timezone: Fuso horário usado para datas e horários exibidos
        default_lead_minutes: Antecedência padrão de novos lembretes
        scan_time_budget_seconds: Tempo máximo de uma varredura
        owner_lookup_cache_ttl_seconds: TTL do cache de busca por telefone
        upcoming_limit: Máximo de compromissos no comando "agenda"
    """

    cron_secret: str = ""
    timezone: str = DEFAULT_TIMEZONE
    default_lead_minutes: int = 60
    scan_time_budget_seconds: float = 50.0
    owner_lookup_cache_ttl_seconds: float = 300.0
    upcoming_limit: int = 5

    @property
    def tzinfo(self) -> ZoneInfo:
        """Retorna o ZoneInfo configurado."""
        return ZoneInfo(self.timezone)

    def validate(self, *, is_development: bool = False) -> list[str]:
        """Valida configurações de lembretes.

        Args:
            is_development: Permite CRON_SECRET vazio em desenvolvimento.

        Returns:
            Lista de erros de validação.
        """
        errors: list[str] = []

        if not self.cron_secret and not is_development:
            errors.append("CRON_SECRET obrigatório em staging/production")

        try:
            ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError):
            errors.append(f"APP_TIMEZONE inválido: {self.timezone}")

        if self.default_lead_minutes <= 0:
            errors.append("REMINDER_DEFAULT_LEAD_MINUTES deve ser > 0")

        if self.scan_time_budget_seconds <= 0:
            errors.append("REMINDER_SCAN_TIME_BUDGET_SECONDS deve ser > 0")

        if self.owner_lookup_cache_ttl_seconds < 0:
            errors.append("OWNER_LOOKUP_CACHE_TTL_SECONDS deve ser >= 0")

        return errors


def _load_reminders_from_env() -> ReminderSettings:
    """Carrega ReminderSettings de variáveis de ambiente."""
    return ReminderSettings(
        cron_secret=os.getenv("CRON_SECRET", ""),
        timezone=os.getenv("APP_TIMEZONE", DEFAULT_TIMEZONE),
        default_lead_minutes=int(os.getenv("REMINDER_DEFAULT_LEAD_MINUTES", "60")),
        scan_time_budget_seconds=float(
            os.getenv("REMINDER_SCAN_TIME_BUDGET_SECONDS", "50")
        ),
        owner_lookup_cache_ttl_seconds=float(
            os.getenv("OWNER_LOOKUP_CACHE_TTL_SECONDS", "300")
        ),
        upcoming_limit=int(os.getenv("REMINDER_UPCOMING_LIMIT", "5")),
    )


@lru_cache(maxsize=1)
def get_reminder_settings() -> ReminderSettings:
    """Retorna instância cacheada de ReminderSettings."""
    return _load_reminders_from_env()
