import pytest
from opentelemetry import trace
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import (
    InMemorySpanExporter,
)
from opentelemetry.trace import StatusCode

from mishap.core.config import RenderConfig
from mishap.core.config import TelemetryConfig
from mishap.utils import opentelemetry as telemetry
from mishap.utils.opentelemetry import get_tracer
from mishap.utils.opentelemetry import record_exception


@pytest.fixture
def spans():
    exporter = InMemorySpanExporter()
    provider = TracerProvider()
    provider.add_span_processor(SimpleSpanProcessor(exporter))
    return provider, exporter


@pytest.fixture
def installed(monkeypatch):
    providers = []
    monkeypatch.setattr(telemetry, "_provider", None)
    monkeypatch.setattr(trace, "set_tracer_provider", providers.append)
    return providers


@pytest.mark.unit
class TestTracing:
    def test_disabled_returns_a_tracer(self):
        tracer = get_tracer(RenderConfig())
        with tracer.start_as_current_span("noop") as span:
            span.set_attribute("key", "value")

    def test_record_exception_on_recording_span(self, spans):
        provider, exporter = spans
        tracer = provider.get_tracer("test")
        with tracer.start_as_current_span("request"):
            record_exception(ValueError("boom"))
        (span,) = exporter.get_finished_spans()
        assert span.status.status_code is StatusCode.ERROR
        assert span.events[0].name == "exception"
        assert span.events[0].attributes["exception.message"] == "boom"

    def test_record_exception_without_span(self):
        record_exception(ValueError("boom"))

    def test_provider_installed_once(self, installed):
        config = RenderConfig(
            debug=True, telemetry=TelemetryConfig(enabled=True)
        )
        get_tracer(config)
        get_tracer(config, name="checkout")
        assert len(installed) == 1
        assert isinstance(installed[0], TracerProvider)
        assert telemetry._provider is installed[0]

    def test_disabled_installs_nothing(self, installed):
        get_tracer(RenderConfig())
        assert installed == []
        assert telemetry._provider is None
