"""Testes do logging JSON estruturado."""

from __future__ import annotations

import io
import json
import logging

import pytest

from config.logging import (
    CorrelationIdFilter,
    PhoneMaskingFilter,
    configure_logging,
    create_json_formatter,
    mask_phone,
)


def _capture(correlation_id: str = "") -> tuple[logging.Logger, io.StringIO]:
    stream = io.StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(create_json_formatter())
    handler.addFilter(CorrelationIdFilter("agendai", lambda: correlation_id))
    handler.addFilter(PhoneMaskingFilter())

    logger = logging.getLogger(f"test_logging.{id(stream)}")
    logger.handlers = [handler]
    logger.propagate = False
    logger.setLevel(logging.DEBUG)
    return logger, stream


class TestJsonFormatter:
    def test_required_fields(self) -> None:
        logger, stream = _capture("corr-1")

        logger.info("reminder_dispatched", extra={"reminder_id": "r1"})

        record = json.loads(stream.getvalue())
        assert record["message"] == "reminder_dispatched"
        assert record["level"] == "INFO"
        assert record["logger"] == logger.name
        assert record["correlation_id"] == "corr-1"
        assert record["service"] == "agendai"
        assert record["reminder_id"] == "r1"
        assert "asctime" in record

    def test_explicit_correlation_id_is_kept(self) -> None:
        logger, stream = _capture("from-context")

        logger.info("event", extra={"correlation_id": "explicit"})

        assert json.loads(stream.getvalue())["correlation_id"] == "explicit"

    def test_phone_fields_are_masked(self) -> None:
        logger, stream = _capture()

        logger.info("webhook_sender_unregistered", extra={"phone": "+5511999998888"})

        record = json.loads(stream.getvalue())
        assert record["phone"] == "*********8888"
        assert "999998888" not in stream.getvalue()


class TestMaskPhone:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("+55 (11) 99999-8888", "*********8888"), ("123", "***"), ("", "")],
    )
    def test_mask(self, raw: str, expected: str) -> None:
        assert mask_phone(raw) == expected


class TestConfigureLogging:
    def test_invalid_level(self) -> None:
        with pytest.raises(ValueError):
            configure_logging(level="LOUD")

    def test_replaces_root_handlers(self) -> None:
        root = logging.getLogger()
        previous = root.handlers[:]
        previous_level = root.level
        try:
            configure_logging(level="WARNING")
            configure_logging(level="INFO")
            assert len(root.handlers) == 1
            assert root.level == logging.INFO
        finally:
            root.handlers = previous
            root.setLevel(previous_level)
