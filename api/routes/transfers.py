"""
Transfers API

A Transfer is created when moving funds between Stripe accounts on a Connect
platform. https://docs.stripe.com/api/transfers/create
"""

from fastapi import APIRouter, Depends

from core.dependencies import get_settings, get_stripe_service
from core.settings import Settings
from payments.stripe_service import StripeService

router = APIRouter()


@router.api_route("/transfers/create", methods=["GET", "POST"])
async def create_transfer(
    settings: Settings = Depends(get_settings),
    stripe_service: StripeService = Depends(get_stripe_service),
):
    """
    Transfer a fixed demo amount (1 minor unit of SGD) to the configured
    connected account and return the Stripe transfer object.

    Fails with "insufficient available funds" until the platform balance has
    been topped up, e.g. with the 4000000000000077 test card.
    """
    return await stripe_service.create_transfer(settings.STRIPE_CONNECTED_ACCOUNT_ID)
