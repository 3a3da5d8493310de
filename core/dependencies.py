from fastapi import Request
from fastapi.templating import Jinja2Templates

from core.settings import Settings
from payments.stripe_service import StripeService


def get_settings(request: Request) -> Settings:
    """Dependency that provides the immutable application settings."""
    settings = getattr(request.app.state, "settings", None)
    assert settings is not None, "Settings not initialized. Use create_app()."
    return settings


def get_stripe_service(request: Request) -> StripeService:
    """Dependency that provides the Stripe service bound to this app."""
    return request.app.state.stripe_service


def get_templates(request: Request) -> Jinja2Templates:
    return request.app.state.templates
