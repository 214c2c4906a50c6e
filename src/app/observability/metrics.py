"""Registro de métricas via structured logging.

As métricas saem como logs estruturados (`metric_type` no payload) e são
agregadas depois no backend de logs.

Métricas suportadas:
- Latência: tempo de execução por componente/operação
- Entrega: counter de envios WhatsApp por resultado
- Varredura: resumo de cada execução do cron de lembretes
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def record_latency(
    component: str,
    operation: str,
    latency_ms: float,
    correlation_id: str | None = None,
) -> None:
    """Registra latência de operação.

    Args:
        component: Nome do componente (ex: "whatsapp_sender")
        operation: Nome da operação (ex: "send_template")
        latency_ms: Latência em milissegundos
        correlation_id: ID de correlação para rastreamento
    """
    extra: dict[str, object] = {
        "metric_type": "latency",
        "component": component,
        "operation": operation,
        "latency_ms": round(latency_ms, 2),
    }
    if correlation_id:
        extra["correlation_id"] = correlation_id
    logger.info("metric_latency", extra=extra)


def record_delivery(message_type: str, success: bool, error_code: int | None = None) -> None:
    """Registra uma tentativa de envio ao provedor.

    Args:
        message_type: "text" ou "template"
        success: Resultado da tentativa
        error_code: Código de erro Meta/HTTP quando houver
    """
    extra: dict[str, object] = {
        "metric_type": "delivery",
        "message_type": message_type,
        "outcome": "success" if success else "failure",
    }
    if error_code is not None:
        extra["error_code"] = error_code
    logger.info("metric_delivery", extra=extra)


def record_dispatch_summary(
    *,
    total: int,
    sent: int,
    errors: int,
    expired: int,
    skipped: int,
    elapsed_ms: float,
    budget_exhausted: bool = False,
) -> None:
    """Registra o resumo de uma varredura de lembretes."""
    logger.info(
        "metric_dispatch_summary",
        extra={
            "metric_type": "dispatch",
            "total": total,
            "sent": sent,
            "errors": errors,
            "expired": expired,
            "skipped": skipped,
            "elapsed_ms": round(elapsed_ms, 2),
            "budget_exhausted": budget_exhausted,
        },
    )
