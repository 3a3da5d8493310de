"""
API Schemas Module

Pydantic models for request bodies, JSON responses and template contexts.
"""

from pydantic import BaseModel, ConfigDict


class AccountLinkRequest(BaseModel):
    """Body of POST /account_link."""

    account: str = ""

    model_config = ConfigDict(extra="ignore")


class AccountResponse(BaseModel):
    account: str


class AccountLinkResponse(BaseModel):
    url: str


class ErrorResponse(BaseModel):
    error: str


class CheckoutViewModel(BaseModel):
    """Context for views/checkout.html"""

    publishable_key: str
    client_secret: str
    connected_account_id: str
    return_url: str


class CompletionViewModel(BaseModel):
    """Context for views/checkout/complete.html"""

    publishable_key: str
    connected_account_id: str
