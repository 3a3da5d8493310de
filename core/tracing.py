import structlog
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter

log = structlog.get_logger(__name__)


def init_tracer(app, service_name: str = "stripe-connect-demo"):
    """Initialize OpenTelemetry tracer with OTLP exporter and instrument the app"""
    provider = TracerProvider(resource=Resource.create({"service.name": service_name}))

    try:
        otlp_exporter = OTLPSpanExporter()
    except Exception as exc:  # pragma: no cover – only hit when the collector is absent
        log.warning("OTLP exporter unavailable, tracing to console", error=str(exc))
        otlp_exporter = ConsoleSpanExporter()

    provider.add_span_processor(BatchSpanProcessor(otlp_exporter))
    trace.set_tracer_provider(provider)

    FastAPIInstrumentor.instrument_app(app, tracer_provider=provider)
