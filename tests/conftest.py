"""Test configuration and fixtures."""

import os
from pathlib import Path
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from core.settings import Settings
from main import create_app

REPO_ROOT = Path(__file__).resolve().parent.parent

CREDENTIAL_VARS = (
    "STRIPE_SECRET_KEY",
    "STRIPE_PUBLISHABLE_KEY",
    "STRIPE_CONNECTED_ACCOUNT_ID",
)


@pytest.fixture(autouse=True)
def setup_test_environment():
    """Setup test environment variables before each test."""
    # Store original env vars
    original_env = dict(os.environ)

    for name in CREDENTIAL_VARS:
        os.environ.pop(name, None)
    os.environ.update({"ENVIRONMENT": "test", "LOG_LEVEL": "INFO"})

    yield

    # Restore original env vars
    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def static_dir(tmp_path):
    """A built SPA bundle: index document plus one asset."""
    dist = tmp_path / "dist"
    (dist / "assets").mkdir(parents=True)
    (dist / "index.html").write_bytes(b"<!doctype html><div id='root'></div>\n")
    (dist / "assets" / "app.js").write_bytes(b"console.log('app');\n")
    return dist


@pytest.fixture
def mock_settings(static_dir):
    return Settings(
        _env_file=None,
        STRIPE_SECRET_KEY="sk_test_mock",
        STRIPE_PUBLISHABLE_KEY="pk_test_mock",
        STRIPE_CONNECTED_ACCOUNT_ID="acct_connected_mock",
        APP_NAME="Test Connect Demo",
        ENVIRONMENT="test",
        VIEWS_DIR=str(REPO_ROOT / "views"),
        STATIC_DIR=str(static_dir),
        METRICS_ENABLED=False,
        TRACING_ENABLED=False,
    )


@pytest.fixture
def app(mock_settings):
    return create_app(mock_settings)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def mock_stripe():
    """Patch every Stripe resource the service calls."""
    with patch("payments.stripe_service.stripe.Account") as account, patch(
        "payments.stripe_service.stripe.AccountLink"
    ) as account_link, patch(
        "payments.stripe_service.stripe.PaymentIntent"
    ) as payment_intent, patch(
        "payments.stripe_service.stripe.Transfer"
    ) as transfer:
        yield {
            "account": account,
            "account_link": account_link,
            "payment_intent": payment_intent,
            "transfer": transfer,
        }
