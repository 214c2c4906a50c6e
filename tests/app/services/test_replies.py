"""Testes dos textos fixos do WhatsApp."""

from __future__ import annotations

from datetime import datetime
from zoneinfo import ZoneInfo

import pytest

from app.domain.appointment import Appointment
from app.services import replies

SP = ZoneInfo("America/Sao_Paulo")


def _appointment(title: str, day: int, hour: int, location: str | None = None) -> Appointment:
    return Appointment(
        owner_id="user-1",
        title=title,
        start=datetime(2026, 3, day, hour, 0, tzinfo=SP),
        location=location,
    )


class TestFixedTexts:
    def test_help_lists_formats_and_commands(self) -> None:
        text = replies.help_message()

        assert "título | data | hora início - hora fim" in text
        assert "Dentista dia 15/03 às 10:00 - 11:00" in text
        assert "*agenda*" in text

    def test_not_understood_appends_help(self) -> None:
        text = replies.not_understood_message()

        assert text.startswith(replies.NOT_UNDERSTOOD_PREFIX)
        assert text.endswith(replies.HELP_MESSAGE)

    def test_text_only_appends_help(self) -> None:
        text = replies.text_only_message()

        assert text.startswith("📱 Por enquanto, aceito apenas mensagens de texto.")
        assert text.endswith(replies.HELP_MESSAGE)


class TestConfirmation:
    def test_contains_title_date_and_times(self) -> None:
        text = replies.confirmation_message(
            "Dentista",
            datetime(2026, 3, 15, 10, 0, tzinfo=SP),
            datetime(2026, 3, 15, 11, 0, tzinfo=SP),
        )

        assert "✅ Compromisso criado com sucesso!" in text
        assert "*Dentista*" in text
        assert "15/03/2026" in text
        assert "10:00 - 11:00" in text
        assert "📍" not in text

    def test_location_line_when_present(self) -> None:
        text = replies.confirmation_message(
            "Almoço",
            datetime(2026, 3, 15, 12, 0, tzinfo=SP),
            datetime(2026, 3, 15, 13, 0, tzinfo=SP),
            location="Centro",
        )
        assert "📍 Centro" in text

    def test_times_are_shown_in_local_timezone(self) -> None:
        start = datetime(2026, 3, 15, 13, 0, tzinfo=ZoneInfo("UTC"))
        assert replies.format_time(start, SP) == "10:00"
        assert replies.format_date(start, SP) == "15/03/2026"


class TestUpcoming:
    def test_empty_list(self) -> None:
        assert replies.upcoming_message([]) == replies.NO_UPCOMING_MESSAGE

    def test_numbered_list(self) -> None:
        text = replies.upcoming_message(
            [
                _appointment("Dentista", 15, 10),
                _appointment("Reunião", 16, 14, location="Escritório"),
            ],
            SP,
        )

        assert "1. *Dentista*" in text
        assert "15/03/2026 às 10:00" in text
        assert "2. *Reunião*" in text
        assert "📍 Escritório" in text
        assert not text.endswith("\n")

    def test_cancelled_message(self) -> None:
        text = replies.cancelled_message(_appointment("Dentista", 15, 10), SP)
        assert "Dentista" in text
        assert "15/03/2026 às 10:00" in text


class TestReminderParams:
    @pytest.mark.parametrize(
        ("minutes", "expected"),
        [
            (0, "0 minutos"),
            (45, "45 minutos"),
            (59, "59 minutos"),
            (60, "1 hora"),
            (89, "1 hora"),
            (90, "2 horas"),
            (120, "2 horas"),
            (1439, "24 horas"),
            (1440, "1 dia"),
            (2880, "2 dias"),
        ],
    )
    def test_format_time_remaining(self, minutes: int, expected: str) -> None:
        assert replies.format_time_remaining(minutes) == expected

    def test_template_params_order_and_fallbacks(self) -> None:
        params = replies.reminder_template_params(
            name=None,
            title="Dentista",
            time_remaining="50 minutos",
            location=None,
            start_time="10:00",
        )

        assert params == ["Olá", "Dentista", "50 minutos", "Não definido", "10:00"]

    def test_template_params_with_values(self) -> None:
        params = replies.reminder_template_params(
            name="Ana",
            title="Dentista",
            time_remaining="1 hora",
            location="Clínica",
            start_time="10:00",
        )
        assert params[0] == "Ana"
        assert params[3] == "Clínica"
