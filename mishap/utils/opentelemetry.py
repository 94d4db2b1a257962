"""\
OpenTelemetry
=============

Author: Akshay Mestry <xa@mes3.dev>
Created on: Friday, July 04 2025
Last updated on: Monday, October 19 2026

This module provides `OpenTelemetry` integration for the error handler.
Rendering runs inside a span and reported errors are recorded on the
current span, so failed requests show up with their exception in any
tracing backend.
"""

from __future__ import annotations

import typing as t

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import (
    OTLPSpanExporter,
)
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.sdk.trace.export import ConsoleSpanExporter
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.trace import StatusCode

if t.TYPE_CHECKING:
    from mishap.core.config import RenderConfig

__all__: list[str] = [
    "get_tracer",
    "record_exception",
]

_provider: TracerProvider | None = None


def get_tracer(config: RenderConfig, name: str | None = None) -> trace.Tracer:
    """Configure and return a tracer for the error handler.

    When telemetry is disabled, the tracer comes from whatever provider
    the application has installed, which is a no-op one by default.
    Otherwise, an SDK `TracerProvider` is installed with a console
    exporter in debug mode and an OTLP exporter in production. The
    provider is installed once per process and reused afterwards.

    :param config: Configuration to read the telemetry settings from.
    :param name: Override for the service name, defaults to `None`. If
        not provided, uses the name from the configuration.
    :return: A configured `OpenTelemetry Tracer` instance.
    """
    global _provider
    service = name or config.telemetry.name or config.name
    if not config.telemetry.enabled:
        return trace.get_tracer(service)
    if _provider is not None:
        return _provider.get_tracer(service)
    resource = Resource.create(
        {
            "service.name": service,
            "service.version": config.version,
            "deployment.environment": (
                "development" if config.debug else "production"
            ),
            "telemetry.sdk.name": "mishap",
        }
    )
    if config.debug:
        processor = SimpleSpanProcessor(ConsoleSpanExporter())
    else:
        processor = BatchSpanProcessor(OTLPSpanExporter())
    _provider = TracerProvider(resource=resource)
    _provider.add_span_processor(processor)
    trace.set_tracer_provider(_provider)
    return _provider.get_tracer(service)


def record_exception(exception: BaseException) -> None:
    """Record an exception on the current span if it is recording."""
    span = trace.get_current_span()
    if span.is_recording():
        span.record_exception(exception)
        span.set_status(StatusCode.ERROR, str(exception))
