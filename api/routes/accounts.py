"""
Stripe Connect onboarding routes

https://docs.stripe.com/connect/onboarding/quickstart
"""

import json

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import ValidationError

from api.schemas import AccountLinkRequest, AccountLinkResponse, AccountResponse
from core.dependencies import get_stripe_service
from api.routes.static import ALL_METHODS
from core.errors import InputError
from payments.stripe_service import StripeService

router = APIRouter()

# Every method the SPA catch-all would otherwise answer
OTHER_METHODS = [method for method in ALL_METHODS if method != "POST"]


@router.post("/account", response_model=AccountResponse)
async def create_account(stripe_service: StripeService = Depends(get_stripe_service)):
    """Create a new connected account and return its id."""
    account_id = await stripe_service.create_account()
    return AccountResponse(account=account_id)


@router.post("/account_link", response_model=AccountLinkResponse)
async def create_account_link(
    request: Request, stripe_service: StripeService = Depends(get_stripe_service)
):
    """
    Create an onboarding link for a connected account.

    **Request Example:**
    ```json
    {"account": "acct_123"}
    ```
    """
    body = await request.body()
    try:
        payload = AccountLinkRequest.model_validate(json.loads(body))
    except (json.JSONDecodeError, UnicodeDecodeError, ValidationError) as e:
        raise InputError(str(e))

    url = await stripe_service.create_account_link(payload.account)
    return AccountLinkResponse(url=url)


# Registered explicitly so these paths never fall through to the SPA catch-all
@router.api_route("/account", methods=OTHER_METHODS, include_in_schema=False)
@router.api_route("/account_link", methods=OTHER_METHODS, include_in_schema=False)
async def method_not_allowed():
    raise HTTPException(
        status_code=405, detail="Method Not Allowed", headers={"Allow": "POST"}
    )
