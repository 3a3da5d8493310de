"""
Stripe Connect Demo - Main Application Entry Point

This module builds the FastAPI application that front-ends the Stripe API for
a platform + connected account payment flow: account onboarding, direct-charge
checkout and transfers, plus the single-page app served from the static
directory.
"""

import sys
from typing import Optional, Sequence

import structlog
import uvicorn
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.templating import Jinja2Templates
from starlette.concurrency import run_in_threadpool

from api.errors import register_exception_handlers
from api.middleware import log_api_entry
from api.routes import router, static_router
from api.routes.checkout import CHECKOUT_TEMPLATE, COMPLETE_TEMPLATE
from core.dependencies import get_settings, get_stripe_service
from core.logging import BusinessEvents, configure_logging
from core.metrics import init_metrics
from core.settings import ConfigError, Settings, load_settings
from core.tracing import init_tracer
from payments.stripe_service import StripeService

log = structlog.get_logger(__name__)


def load_templates(views_dir: str) -> Jinja2Templates:
    """Load the server-rendered views, failing at startup if any is missing."""
    templates = Jinja2Templates(directory=views_dir)
    for name in (CHECKOUT_TEMPLATE, COMPLETE_TEMPLATE):
        templates.get_template(name)
    return templates


def create_app(settings: Settings, stripe_service: Optional[StripeService] = None):
    """
    Build the application around an immutable settings object.

    Args:
        settings: Validated application settings
        stripe_service: Optional pre-built service (defaults to one bound to
            ``settings``)
    """
    app = FastAPI(
        title=settings.APP_NAME,
        description="Demo server for Stripe Connect onboarding, direct charges and transfers.",
        version="1.0.0",
    )
    app.state.settings = settings
    app.state.stripe_service = stripe_service or StripeService(settings)
    app.state.templates = load_templates(settings.VIEWS_DIR)

    if settings.TRACING_ENABLED:
        init_tracer(app, settings.OTEL_SERVICE_NAME)

    if settings.METRICS_ENABLED:
        init_metrics(app)

    app.middleware("http")(log_api_entry)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    @app.get("/health")
    async def health(settings: Settings = Depends(get_settings)):
        """Health check endpoint alias."""
        return {
            "status": "ok",
            "app_name": settings.APP_NAME,
            "environment": settings.ENVIRONMENT,
        }

    @app.get("/healthz")
    async def health_check(
        deep: bool = False,
        settings: Settings = Depends(get_settings),
        stripe_service: StripeService = Depends(get_stripe_service),
    ):
        """Health check endpoint; ``deep=true`` also checks the Stripe key."""
        data = {
            "status": "ok",
            "app_name": settings.APP_NAME,
            "environment": settings.ENVIRONMENT,
        }
        if deep:
            data["stripe"] = (
                "ok"
                if await run_in_threadpool(stripe_service.test_connection)
                else "unreachable"
            )
        return data

    app.include_router(router)
    # Must come last: it matches every path
    app.include_router(static_router)
    return app


def main(argv: Optional[Sequence[str]] = None):
    configure_logging()
    try:
        settings = load_settings(argv)
    except ConfigError as e:
        log.error(BusinessEvents.CONFIG_INVALID, error=str(e))
        sys.exit(1)

    configure_logging(level=settings.LOG_LEVEL, env=settings.ENVIRONMENT)
    app = create_app(settings)
    log.info(BusinessEvents.SERVER_LISTENING, host=settings.HOST, port=settings.PORT)
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_config=None)


if __name__ == "__main__":
    main()
