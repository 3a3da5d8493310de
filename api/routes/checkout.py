"""
Direct charges on the connected account

https://docs.stripe.com/connect/direct-charges?platform=web&ui=elements
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from api.schemas import CheckoutViewModel, CompletionViewModel
from core.dependencies import get_settings, get_stripe_service, get_templates
from core.settings import Settings
from payments.stripe_service import StripeService

router = APIRouter()

CHECKOUT_TEMPLATE = "checkout.html"
COMPLETE_TEMPLATE = "checkout/complete.html"


@router.get("/checkout", response_class=HTMLResponse)
async def checkout(
    request: Request,
    settings: Settings = Depends(get_settings),
    stripe_service: StripeService = Depends(get_stripe_service),
    templates: Jinja2Templates = Depends(get_templates),
):
    connected_account_id = settings.STRIPE_CONNECTED_ACCOUNT_ID
    client_secret = await stripe_service.create_payment_intent(connected_account_id)

    view = CheckoutViewModel(
        publishable_key=settings.STRIPE_PUBLISHABLE_KEY,
        client_secret=client_secret,
        connected_account_id=connected_account_id,
        return_url=(
            f"{settings.BASE_URL}/checkout/complete?account={connected_account_id}"
        ),
    )
    return templates.TemplateResponse(request, CHECKOUT_TEMPLATE, view.model_dump())


@router.get("/checkout/complete", response_class=HTMLResponse)
async def checkout_complete(
    request: Request,
    account: str = "",
    settings: Settings = Depends(get_settings),
    templates: Jinja2Templates = Depends(get_templates),
):
    """Post-payment landing page; the page itself checks the intent status."""
    view = CompletionViewModel(
        publishable_key=settings.STRIPE_PUBLISHABLE_KEY,
        connected_account_id=account,
    )
    return templates.TemplateResponse(request, COMPLETE_TEMPLATE, view.model_dump())
