"""
StripeService unit tests.
"""

from unittest.mock import MagicMock, patch

import pytest
import stripe

from core.errors import InternalError, ProviderError
from core.metrics import provider_calls
from payments.stripe_service import StripeService, provider_message


def _count(operation, outcome):
    return provider_calls.labels(operation=operation, outcome=outcome)._value.get()


def test_stripe_service_does_not_set_global_key(mock_settings):
    stripe.api_key = None
    StripeService(settings=mock_settings)
    assert stripe.api_key is None


@patch("payments.stripe_service.stripe.Account.retrieve")
def test_stripe_service_test_connection_success(mock_retrieve, mock_settings):
    mock_retrieve.return_value = {"id": "acct_platform"}

    service = StripeService(settings=mock_settings)

    assert service.test_connection() is True
    mock_retrieve.assert_called_once_with(api_key="sk_test_mock")


@patch("payments.stripe_service.stripe.Account.retrieve")
def test_stripe_service_test_connection_failure(mock_retrieve, mock_settings):
    mock_retrieve.side_effect = Exception("Stripe connection failed")

    service = StripeService(settings=mock_settings)

    assert service.test_connection() is False


def test_provider_message_prefers_stripe_message():
    err = stripe.CardError(
        "Your card was declined.", None, "card_declined",
        headers={"request-id": "req_abc"},
    )
    assert str(err) == "Request req_abc: Your card was declined."
    assert provider_message(err) == "Your card was declined."


def test_provider_message_generic_error():
    assert provider_message(ValueError("boom")) == "boom"


@pytest.mark.asyncio
async def test_create_account_counts_success(mock_settings, mock_stripe):
    mock_stripe["account"].create.return_value = MagicMock(id="acct_1")
    before = _count("account.create", "success")

    service = StripeService(settings=mock_settings)
    assert await service.create_account() == "acct_1"

    assert _count("account.create", "success") == before + 1


@pytest.mark.asyncio
async def test_stripe_error_becomes_provider_error(mock_settings, mock_stripe):
    mock_stripe["payment_intent"].create.side_effect = stripe.APIConnectionError(
        "Could not connect to Stripe"
    )
    before = _count("payment_intent.create", "provider_error")

    service = StripeService(settings=mock_settings)
    with pytest.raises(ProviderError, match="Could not connect to Stripe"):
        await service.create_payment_intent("acct_connected_mock")

    assert _count("payment_intent.create", "provider_error") == before + 1


@pytest.mark.asyncio
async def test_generic_error_becomes_internal_error(mock_settings, mock_stripe):
    mock_stripe["transfer"].create.side_effect = RuntimeError("unexpected")

    service = StripeService(settings=mock_settings)
    with pytest.raises(InternalError, match="unexpected"):
        await service.create_transfer("acct_connected_mock")


@pytest.mark.asyncio
async def test_account_link_urls_follow_base_url(mock_settings, mock_stripe):
    settings = mock_settings.model_copy(update={"BASE_URL": "https://demo.example"})
    mock_stripe["account_link"].create.return_value = MagicMock(url="https://x")

    service = StripeService(settings=settings)
    await service.create_account_link("acct_9")

    kwargs = mock_stripe["account_link"].create.call_args.kwargs
    assert kwargs["return_url"] == "https://demo.example/return/acct_9"
    assert kwargs["refresh_url"] == "https://demo.example/refresh/acct_9"
