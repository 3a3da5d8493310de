"""
Stripe Connect Service

This module wraps the Stripe calls the demo makes on behalf of the platform:
- Creating connected accounts and onboarding links
- Creating direct-charge payment intents on a connected account
- Transferring funds from the platform to a connected account
"""

from typing import Any, Callable

import stripe
import structlog
from starlette.concurrency import run_in_threadpool

from core.errors import InternalError, ProviderError
from core.logging import BusinessEvents
from core.metrics import provider_calls
from core.settings import Settings

# Fixed demo values
CHECKOUT_AMOUNT = 1000  # minor units
CHECKOUT_CURRENCY = "usd"
APPLICATION_FEE_AMOUNT = 123
TRANSFER_AMOUNT = 1
TRANSFER_CURRENCY = "sgd"
TRANSFER_SOURCE_TYPE = "card"


def provider_message(exc: Exception) -> str:
    """Message to show callers: the structured Stripe message when there is one."""
    if isinstance(exc, stripe.StripeError) and exc.user_message:
        return exc.user_message
    return str(exc)


class StripeService:
    def __init__(self, settings: Settings):
        """
        Initialize StripeService.

        Args:
            settings: Application settings. The secret key is sent with each
                request instead of being set globally on the stripe module.
        """
        self._api_key = settings.STRIPE_SECRET_KEY
        self.log = structlog.get_logger(__name__)
        self.base_url = settings.BASE_URL

    def test_connection(self) -> bool:
        """Test the Stripe API connection."""
        try:
            stripe.Account.retrieve(api_key=self._api_key)
            return True
        except Exception:
            return False

    async def _call(self, operation: str, fn: Callable[[], Any], **context) -> Any:
        try:
            result = await run_in_threadpool(fn)
        except stripe.StripeError as e:
            provider_calls.labels(operation=operation, outcome="provider_error").inc()
            self.log.error(
                BusinessEvents.PROVIDER_FAILURE,
                operation=operation,
                error=str(e),
                code=e.code,
                http_status=e.http_status,
                **context,
            )
            raise ProviderError(provider_message(e)) from e
        except Exception as e:
            provider_calls.labels(operation=operation, outcome="internal_error").inc()
            self.log.error(
                BusinessEvents.PROVIDER_FAILURE,
                operation=operation,
                error=str(e),
                **context,
            )
            raise InternalError(str(e)) from e

        provider_calls.labels(operation=operation, outcome="success").inc()
        return result

    async def create_account(self) -> str:
        """Create a connected account with default parameters and return its id."""
        account = await self._call(
            "account.create",
            lambda: stripe.Account.create(api_key=self._api_key),
        )
        self.log.info(BusinessEvents.ACCOUNT_CREATED, account=account.id)
        return account.id

    async def create_account_link(self, account: str) -> str:
        """
        Create an onboarding link for a connected account.

        Returns:
            The hosted onboarding URL
        """
        link = await self._call(
            "account_link.create",
            lambda: stripe.AccountLink.create(
                account=account,
                return_url=f"{self.base_url}/return/{account}",
                refresh_url=f"{self.base_url}/refresh/{account}",
                type="account_onboarding",
                api_key=self._api_key,
            ),
            account=account,
        )
        self.log.info(BusinessEvents.ACCOUNT_LINK_CREATED, account=account)
        return link.url

    async def create_payment_intent(self, connected_account: str) -> str:
        """
        Create a direct-charge PaymentIntent on the connected account.

        Returns:
            The intent's client secret
        """
        intent = await self._call(
            "payment_intent.create",
            lambda: stripe.PaymentIntent.create(
                amount=CHECKOUT_AMOUNT,
                currency=CHECKOUT_CURRENCY,
                automatic_payment_methods={"enabled": True},
                application_fee_amount=APPLICATION_FEE_AMOUNT,
                stripe_account=connected_account,
                api_key=self._api_key,
            ),
            connected_account=connected_account,
        )
        self.log.info(
            BusinessEvents.PAYMENT_INTENT_CREATED,
            payment_intent=intent.id,
            connected_account=connected_account,
            amount=CHECKOUT_AMOUNT,
        )
        return intent.client_secret

    async def create_transfer(self, destination: str) -> dict[str, Any]:
        """
        Move a fixed demo amount from the platform balance to ``destination``.

        Returns:
            The full transfer object as plain JSON data
        """
        transfer = await self._call(
            "transfer.create",
            lambda: stripe.Transfer.create(
                amount=TRANSFER_AMOUNT,
                currency=TRANSFER_CURRENCY,
                destination=destination,
                source_type=TRANSFER_SOURCE_TYPE,
                api_key=self._api_key,
            ),
            destination=destination,
        )
        self.log.info(
            BusinessEvents.TRANSFER_CREATED,
            transfer=transfer.id,
            destination=destination,
            amount=TRANSFER_AMOUNT,
        )
        return transfer.to_dict()
