from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from optionpulse.main import app, container


def test_lifespan_without_credentials_keeps_loop_stopped():
    if container.settings.has_credentials:
        pytest.skip("credenciales reales en el entorno")

    with TestClient(app) as client:
        assert client.get("/api/health").status_code == 200
        status = client.get("/api/status").json()

    assert status["symbol"] == container.settings.symbol
    assert status["loop"]["running"] is False
    assert status["cycles"] == 0
