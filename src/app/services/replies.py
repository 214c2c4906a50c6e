"""Textos fixos enviados pelo WhatsApp (ajuda, confirmação, listagem).

Funções puras: recebem dados já resolvidos e devolvem o texto final.
Datas e horas são exibidas no fuso local informado.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.services.command_parser import DEFAULT_TIMEZONE

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import datetime, tzinfo

    from app.domain.appointment import Appointment

HELP_MESSAGE = (
    "📅 *AgendAI - Como criar compromissos:*\n\n"
    "Envie no formato:\n"
    "*título | data | hora início - hora fim*\n\n"
    "Exemplos:\n"
    "• Dentista | 15/03 | 10:00 - 11:00\n"
    "• Reunião | amanhã | 14:00 - 15:30\n"
    "• Call com cliente | hoje | 16:00 - 17:00\n"
    "• Médico | 20/03/2026 | 09:00 - 10:00\n\n"
    "Ou no formato natural:\n"
    "• Dentista dia 15/03 às 10:00 - 11:00\n\n"
    "Outros comandos:\n"
    "• *agenda*: seus próximos compromissos\n"
    "• *cancelar 1*: cancela o 1º compromisso da agenda"
)

UNREGISTERED_MESSAGE = (
    "❌ Seu número não está cadastrado no AgendAI.\n\n"
    "Acesse nosso site para criar sua conta e cadastre seu telefone nas configurações.\n\n"
    "🌐 agendai.com"
)

NO_UPCOMING_MESSAGE = "📅 Você não tem compromissos futuros agendados."

CREATE_FAILED_MESSAGE = "❌ Erro ao criar o compromisso. Tente novamente."

CANCEL_NOT_FOUND_MESSAGE = (
    "🤔 Não encontrei esse compromisso. Envie *agenda* para ver a lista numerada."
)

INVALID_PHONE_MESSAGE = "Telefone inválido para WhatsApp. Use o formato: +55 11 99999-9999"

NOT_UNDERSTOOD_PREFIX = "🤔 Não consegui entender o compromisso.\n\n"

TEXT_ONLY_PREFIX = "📱 Por enquanto, aceito apenas mensagens de texto. "


def help_message() -> str:
    return HELP_MESSAGE


def not_understood_message() -> str:
    return NOT_UNDERSTOOD_PREFIX + HELP_MESSAGE


def text_only_message() -> str:
    return TEXT_ONLY_PREFIX + HELP_MESSAGE


def format_date(value: datetime, tz: tzinfo = DEFAULT_TIMEZONE) -> str:
    """dd/mm/aaaa no fuso local."""
    return value.astimezone(tz).strftime("%d/%m/%Y")


def format_time(value: datetime, tz: tzinfo = DEFAULT_TIMEZONE) -> str:
    """HH:MM no fuso local."""
    return value.astimezone(tz).strftime("%H:%M")


def confirmation_message(
    title: str,
    start: datetime,
    end: datetime,
    location: str | None = None,
    tz: tzinfo = DEFAULT_TIMEZONE,
) -> str:
    """Confirmação enviada após criar um compromisso pelo WhatsApp."""
    lines = [
        "✅ Compromisso criado com sucesso!",
        "",
        f"📌 *{title}*",
        f"📅 {format_date(start, tz)}",
        f"🕐 {format_time(start, tz)} - {format_time(end, tz)}",
    ]
    if location:
        lines.append(f"📍 {location}")
    lines.extend(["", "Você receberá um lembrete antes do compromisso."])
    return "\n".join(lines)


def upcoming_message(appointments: Sequence[Appointment], tz: tzinfo = DEFAULT_TIMEZONE) -> str:
    """Lista numerada dos próximos compromissos (ou aviso de agenda vazia)."""
    if not appointments:
        return NO_UPCOMING_MESSAGE

    blocks = ["📅 *Seus próximos compromissos:*", ""]
    for index, appointment in enumerate(appointments, start=1):
        blocks.append(f"{index}. *{appointment.title}*")
        blocks.append(
            f"   📅 {format_date(appointment.start, tz)} às {format_time(appointment.start, tz)}"
        )
        if appointment.location:
            blocks.append(f"   📍 {appointment.location}")
        blocks.append("")
    return "\n".join(blocks).rstrip("\n")


def cancelled_message(appointment: Appointment, tz: tzinfo = DEFAULT_TIMEZONE) -> str:
    """Confirmação de cancelamento."""
    return (
        f"🗑️ Compromisso cancelado: *{appointment.title}* "
        f"({format_date(appointment.start, tz)} às {format_time(appointment.start, tz)})."
    )


def format_time_remaining(minutes: int) -> str:
    """Antecedência legível: "45 minutos", "1 hora", "3 dias"."""
    if minutes < 60:
        return f"{minutes} minutos"
    if minutes < 1440:
        hours = round(minutes / 60)
        return f"{hours} hora" if hours == 1 else f"{hours} horas"
    days = round(minutes / 1440)
    return f"{days} dia" if days == 1 else f"{days} dias"


def reminder_template_params(
    *,
    name: str | None,
    title: str,
    time_remaining: str,
    location: str | None,
    start_time: str,
) -> list[str]:
    """Parâmetros posicionais do template lembrete_compromisso ({{1}}..{{5}})."""
    return [
        name or "Olá",
        title,
        time_remaining,
        location or "Não definido",
        start_time,
    ]
