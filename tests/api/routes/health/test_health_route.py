"""Testes de /health e /ready."""

from __future__ import annotations

import json
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from starlette.requests import Request

from api.routes.health import router as health


def _request(**state: object) -> Request:
    scope = {
        "type": "http",
        "method": "GET",
        "path": "/ready",
        "headers": [],
        "query_string": b"",
        "app": SimpleNamespace(state=SimpleNamespace(**state)),
    }
    return Request(scope)


class TestHealth:
    @pytest.mark.anyio
    async def test_health_ok(self) -> None:
        response = await health.health_check()

        assert response.status == "ok"
        assert response.service
        assert response.timestamp


class TestReady:
    @pytest.mark.anyio
    async def test_memory_backends_are_skipped(self) -> None:
        response = await health.readiness_check(_request())

        body = json.loads(response.body)
        assert response.status_code == 200
        assert body["status"] == "ready"
        assert body["checks"]["redis"]["status"] == "skipped"
        assert body["checks"]["firestore"]["status"] == "skipped"

    @pytest.mark.anyio
    async def test_all_dependencies_ok(self) -> None:
        redis_client = AsyncMock()
        redis_client.ping.return_value = True
        firestore_client = MagicMock()

        response = await health.readiness_check(
            _request(redis_client=redis_client, firestore_client=firestore_client)
        )

        body = json.loads(response.body)
        assert response.status_code == 200
        assert body["checks"]["redis"]["status"] == "ok"
        assert body["checks"]["firestore"]["status"] == "ok"
        firestore_client.collection.assert_called_once_with("_health")

    @pytest.mark.anyio
    async def test_redis_failure_is_not_ready(self) -> None:
        redis_client = AsyncMock()
        redis_client.ping.side_effect = ConnectionError("refused")

        response = await health.readiness_check(_request(redis_client=redis_client))

        body = json.loads(response.body)
        assert response.status_code == 503
        assert body["status"] == "not_ready"
        assert body["checks"]["redis"] == {
            "status": "failed",
            "latency_ms": None,
            "error": "ConnectionError",
        }
