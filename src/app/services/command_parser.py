"""Parser determinístico de comandos de agendamento.

Converte uma linha de texto livre recebida pelo WhatsApp em título,
início e fim. Gramáticas aceitas, tentadas em ordem:

1. Delimitada:  "Dentista | 15/03/2026 | 10:00 - 11:00"
                "Reunião | amanhã | 14:00"
                "Almoço | hoje | 12:00 - 13:00 | Centro"   (local opcional)
2. Natural:     "Reunião dia 15/03 às 14:00"
                "Dentista 20/03/2026 10:00-11:00"

Sem horário final, o compromisso dura 1 hora. Se o fim ficar antes ou
igual ao início ("23:00 - 01:00"), o fim passa para o dia seguinte.

O parser é total: texto que não casa com nenhuma gramática, ou com data
ou hora impossível, retorna None. Nunca levanta exceção.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, tzinfo
from typing import TYPE_CHECKING
from zoneinfo import ZoneInfo

if TYPE_CHECKING:
    from collections.abc import Callable

DEFAULT_TIMEZONE = ZoneInfo("America/Sao_Paulo")
DEFAULT_DURATION = timedelta(hours=1)

_TODAY_WORDS = frozenset({"hoje"})
_TOMORROW_WORDS = frozenset({"amanhã", "amanha"})

_FULL_DATE = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4}|\d{2})$")
_SHORT_DATE = re.compile(r"^(\d{1,2})/(\d{1,2})$")
_TIME_FIELD = re.compile(r"^(\d{1,2}):(\d{2})(?:\s*-\s*(\d{1,2}):(\d{2}))?$")
_NATURAL = re.compile(
    r"^(.+?)\s+(?:dia\s+)?(\d{1,2}/\d{1,2}(?:/\d{2,4})?)\s+(?:às?\s+)?"
    r"(\d{1,2}:\d{2})\s*(?:-\s*(\d{1,2}:\d{2}))?$",
    re.IGNORECASE,
)


@dataclass(frozen=True, slots=True)
class ParsedCommand:
    """Compromisso extraído de uma mensagem (não persistido)."""

    title: str
    start: datetime
    end: datetime
    location: str | None = None


def parse_command(
    text: str | None,
    *,
    now: datetime | None = None,
    tz: tzinfo = DEFAULT_TIMEZONE,
) -> ParsedCommand | None:
    """Tenta cada gramática em ordem; a primeira que casar vence.

    Args:
        text: Mensagem recebida.
        now: Instante de referência para "hoje"; default é o relógio atual.
        tz: Fuso horário local dos horários informados.
    """
    cleaned = (text or "").strip()
    if not cleaned:
        return None

    reference = now or datetime.now(tz)
    today = reference.astimezone(tz).date() if reference.tzinfo else reference.date()

    for grammar in GRAMMARS:
        parsed = grammar(cleaned, today, tz)
        if parsed is not None:
            return parsed
    return None


def parse_delimited(text: str, today: date, tz: tzinfo) -> ParsedCommand | None:
    """Gramática "título | data | HH:MM[-HH:MM] [| local]"."""
    if "|" not in text:
        return None

    parts = [part.strip() for part in text.split("|")]
    if len(parts) < 3:
        return None

    title, date_token, time_field = parts[0], parts[1].lower(), parts[2]
    if not title:
        return None

    day = resolve_date(date_token, today)
    if day is None:
        return None

    match = _TIME_FIELD.match(time_field)
    if match is None:
        return None

    start_time = _build_time(match.group(1), match.group(2))
    end_time = (
        _build_time(match.group(3), match.group(4)) if match.group(3) is not None else None
    )
    if start_time is None or (match.group(3) is not None and end_time is None):
        return None

    location = parts[3] if len(parts) > 3 and parts[3] else None
    return _build_command(title, day, start_time, end_time, tz, location)


def parse_natural(text: str, today: date, tz: tzinfo) -> ParsedCommand | None:
    """Gramática "título [dia] DD/MM[/AAAA] [às] HH:MM[-HH:MM]"."""
    match = _NATURAL.match(text)
    if match is None:
        return None

    title = match.group(1).strip()
    if not title:
        return None

    day = resolve_date(match.group(2), today)
    if day is None:
        return None

    start_time = _parse_hhmm(match.group(3))
    end_time = _parse_hhmm(match.group(4)) if match.group(4) else None
    if start_time is None or (match.group(4) and end_time is None):
        return None

    return _build_command(title, day, start_time, end_time, tz)


GRAMMARS: tuple[Callable[[str, date, tzinfo], ParsedCommand | None], ...] = (
    parse_delimited,
    parse_natural,
)


def resolve_date(token: str | None, today: date) -> date | None:
    """Resolve "hoje", "amanhã", DD/MM/AAAA, DD/MM/AA ou DD/MM.

    DD/MM sem ano usa o ano corrente; se a data já passou, vai para o
    ano seguinte. Datas impossíveis (31/02) retornam None.
    """
    normalized = (token or "").strip().lower()
    if normalized in _TODAY_WORDS:
        return today
    if normalized in _TOMORROW_WORDS:
        return today + timedelta(days=1)

    full = _FULL_DATE.match(normalized)
    if full:
        day, month, year = (int(g) for g in full.groups())
        if year < 100:
            year += 2000
        return _safe_date(year, month, day)

    short = _SHORT_DATE.match(normalized)
    if short:
        day, month = int(short.group(1)), int(short.group(2))
        candidate = _safe_date(today.year, month, day)
        if candidate is not None and candidate < today:
            candidate = _safe_date(today.year + 1, month, day)
        return candidate

    return None


def _build_command(
    title: str,
    day: date,
    start_time: time,
    end_time: time | None,
    tz: tzinfo,
    location: str | None = None,
) -> ParsedCommand:
    start = datetime.combine(day, start_time, tzinfo=tz)
    if end_time is None:
        end = start + DEFAULT_DURATION
    else:
        end = datetime.combine(day, end_time, tzinfo=tz)
        if end <= start:
            end = datetime.combine(day + timedelta(days=1), end_time, tzinfo=tz)
    return ParsedCommand(title=title, start=start, end=end, location=location)


def _parse_hhmm(value: str | None) -> time | None:
    if not value or ":" not in value:
        return None
    hour, _, minute = value.partition(":")
    return _build_time(hour, minute)


def _build_time(hour: str, minute: str) -> time | None:
    try:
        return time(int(hour), int(minute))
    except ValueError:
        return None


def _safe_date(year: int, month: int, day: int) -> date | None:
    try:
        return date(year, month, day)
    except ValueError:
        return None
