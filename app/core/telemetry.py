"""OpenTelemetry telemetry setup for distributed tracing."""

import logging
from typing import TYPE_CHECKING

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.httpx import HTTPXClientInstrumentor
from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

from app.config import settings

if TYPE_CHECKING:
    from fastapi import FastAPI

logger = logging.getLogger(__name__)


def setup_telemetry(app: "FastAPI | None" = None) -> bool:
    """Configure OpenTelemetry tracing.

    This sets up:
    - TracerProvider with service name resource
    - OTLP exporter to send traces to a collector
    - FastAPI instrumentation for automatic request tracing, when an app is given

    Returns True if tracing was enabled.
    """
    if not settings.OTEL_EXPORTER_OTLP_ENDPOINT:
        logger.info("Telemetry disabled: OTEL_EXPORTER_OTLP_ENDPOINT not configured")
        return False

    try:
        resource = Resource.create(
            {
                "service.name": settings.OTEL_SERVICE_NAME,
                "service.version": "1.0.0",
                "deployment.environment": "development" if settings.DEBUG else "production",
            }
        )

        tracer_provider = TracerProvider(resource=resource)
        trace.set_tracer_provider(tracer_provider)

        otlp_exporter = OTLPSpanExporter(
            endpoint=settings.OTEL_EXPORTER_OTLP_ENDPOINT,
            insecure=True,  # Set to False for production with TLS
        )
        tracer_provider.add_span_processor(BatchSpanProcessor(otlp_exporter))

        if app is not None:
            FastAPIInstrumentor.instrument_app(
                app,
                tracer_provider=tracer_provider,
                excluded_urls="health,api/docs,api/redoc,api/openapi.json",
            )

        logger.info(
            f"Telemetry enabled: exporting to {settings.OTEL_EXPORTER_OTLP_ENDPOINT}"
        )
        return True

    except Exception as e:
        logger.warning(f"Failed to setup telemetry: {e}")
        return False


def get_tracer(name: str) -> trace.Tracer:
    """Get a tracer instance for manual span creation.

    Example:
        tracer = get_tracer(__name__)
        with tracer.start_as_current_span("operation_name") as span:
            span.set_attribute("key", "value")
    """
    return trace.get_tracer(name)


def setup_all_instrumentation(app: "FastAPI | None" = None) -> None:
    """Setup telemetry plus outbound httpx and SQLAlchemy tracing."""
    if not setup_telemetry(app):
        return

    HTTPXClientInstrumentor().instrument()
    logger.info("httpx instrumentation enabled")

    SQLAlchemyInstrumentor().instrument(enable_commenter=True)
    logger.info("SQLAlchemy instrumentation enabled")
