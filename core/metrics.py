"""
Prometheus metrics instrumentation for the Connect demo server.

Exposes request metrics in Prometheus format at /metrics, plus a counter of
calls made to the payments provider.
"""

from prometheus_client import Counter
from prometheus_fastapi_instrumentator import Instrumentator

provider_calls = Counter(
    "connect_demo_provider_calls_total",
    "Total number of calls made to the Stripe API",
    ["operation", "outcome"],  # outcome: success, provider_error, internal_error
)


def init_metrics(app):
    """
    Initialize Prometheus metrics instrumentation for the FastAPI app.

    Args:
        app: FastAPI application instance

    Returns:
        Instrumentator instance
    """
    inst = Instrumentator(
        should_group_status_codes=False,
        should_ignore_untemplated=True,
        excluded_handlers=["/metrics"],
    )
    inst.instrument(app).expose(app, endpoint="/metrics", include_in_schema=False)
    return inst
