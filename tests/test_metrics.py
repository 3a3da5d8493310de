"""
Prometheus metrics endpoint test.
"""

from unittest.mock import MagicMock

from fastapi.testclient import TestClient

from main import create_app


def test_metrics_endpoint_exposes_provider_calls(mock_settings, mock_stripe):
    settings = mock_settings.model_copy(update={"METRICS_ENABLED": True})
    mock_stripe["account"].create.return_value = MagicMock(id="acct_metrics")

    with TestClient(create_app(settings)) as client:
        client.post("/account")
        response = client.get("/metrics")

    assert response.status_code == 200
    assert "connect_demo_provider_calls_total" in response.text
    assert 'operation="account.create"' in response.text
