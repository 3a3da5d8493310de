from http import HTTPStatus

import structlog
from fastapi import Request

from core.logging import BusinessEvents


def status_text(code: int) -> str:
    try:
        return HTTPStatus(code).phrase
    except ValueError:
        return ""


async def log_api_entry(request: Request, call_next):
    """Middleware to log each request and the status its handler produced"""
    # Get a fresh logger each time to ensure test configurations are respected
    log = structlog.get_logger(__name__)

    log.info(
        BusinessEvents.API_ENTRY,
        method=request.method,
        path=request.url.path,
        client_host=request.client.host if request.client else None,
    )
    try:
        response = await call_next(request)
    except Exception:
        # The app-level handler still answers 500; record that before propagating
        log.info(
            BusinessEvents.API_RESPONSE,
            method=request.method,
            path=request.url.path,
            status=500,
            status_text=status_text(500),
        )
        raise
    log.info(
        BusinessEvents.API_RESPONSE,
        method=request.method,
        path=request.url.path,
        status=response.status_code,
        status_text=status_text(response.status_code),
    )
    return response
