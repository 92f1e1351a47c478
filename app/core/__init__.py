"""Core module for exceptions and telemetry."""

from app.core.exceptions import BadRequestError, FlussonicAPIError, NotFoundError
from app.core.telemetry import get_tracer, setup_all_instrumentation, setup_telemetry

__all__ = [
    "BadRequestError",
    "FlussonicAPIError",
    "NotFoundError",
    "get_tracer",
    "setup_telemetry",
    "setup_all_instrumentation",
]
