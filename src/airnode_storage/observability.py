"""OpenTelemetry tracing configuration for Airnode bucket storage.

Environment Variables:
    AIRNODE_OTEL_ENABLED: Set to "1" to enable tracing (default: disabled)
    AIRNODE_REQUIRE_OTEL: Set to "1" to fail if tracing cannot initialize
    AIRNODE_OTEL_SERVICE_NAME: Service name for spans (default: "airnode-storage")
    AIRNODE_OTEL_EXPORTER: Exporter type - "otlp" or "console" (default: "otlp")
    AIRNODE_OTEL_EXPORTER_OTLP_ENDPOINT: OTLP endpoint URL (optional)
    AIRNODE_OTEL_EXPORTER_OTLP_PROTOCOL: "grpc" or "http" (default: "grpc")
    AIRNODE_OTEL_TEST_CAPTURE: Set to "1" to use in-memory exporter for tests
"""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from opentelemetry.sdk.trace import ReadableSpan, TracerProvider
    from opentelemetry.sdk.trace.export import SpanExporter

logger = logging.getLogger(__name__)

AIRNODE_OTEL_ENABLED_ENV = "AIRNODE_OTEL_ENABLED"
AIRNODE_REQUIRE_OTEL_ENV = "AIRNODE_REQUIRE_OTEL"
AIRNODE_OTEL_TEST_CAPTURE_ENV = "AIRNODE_OTEL_TEST_CAPTURE"

_tracer_provider: TracerProvider | None = None
_is_configured: bool = False
_test_exporter: Any = None


class TracingConfigError(Exception):
    """Raised when tracing configuration fails and AIRNODE_REQUIRE_OTEL=1."""


def _get_env_bool(key: str, default: bool = False) -> bool:
    """Get boolean from environment variable."""
    val = os.environ.get(key, "").strip().lower()
    if val in ("1", "true", "yes"):
        return True
    if val in ("0", "false", "no", ""):
        return default
    return default


def _get_env_str(key: str, default: str = "") -> str:
    return os.environ.get(key, default).strip()


def is_tracing_enabled() -> bool:
    """Check if OpenTelemetry tracing is enabled."""
    return _get_env_bool(AIRNODE_OTEL_ENABLED_ENV, False)


def _create_otlp_exporter(protocol: str, endpoint: str | None) -> SpanExporter:
    """Create OTLP exporter based on protocol."""
    kwargs: dict[str, Any] = {}
    if endpoint:
        kwargs["endpoint"] = endpoint

    if protocol == "http":
        from opentelemetry.exporter.otlp.proto.http.trace_exporter import (
            OTLPSpanExporter as HTTPExporter,
        )

        return HTTPExporter(**kwargs)

    from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import (
        OTLPSpanExporter as GRPCExporter,
    )

    return GRPCExporter(**kwargs)


def configure_tracing() -> bool:
    """Configure OpenTelemetry tracing.

    Idempotent - safe to call multiple times.

    Returns:
        True if tracing is enabled and configured, False otherwise.

    Raises:
        TracingConfigError: If AIRNODE_REQUIRE_OTEL=1 and configuration fails.
    """
    global _tracer_provider, _is_configured, _test_exporter

    if not is_tracing_enabled():
        _is_configured = True
        logger.debug("OpenTelemetry tracing disabled (%s not set)", AIRNODE_OTEL_ENABLED_ENV)
        return False

    test_capture = _get_env_bool(AIRNODE_OTEL_TEST_CAPTURE_ENV, False)

    # The global tracer provider can only be set once per process
    if _test_exporter is not None and test_capture:
        return True
    if _is_configured and _tracer_provider is not None:
        return True

    _is_configured = True

    try:
        from opentelemetry import trace
        from opentelemetry.sdk.resources import Resource
        from opentelemetry.sdk.trace import TracerProvider
        from opentelemetry.sdk.trace.export import BatchSpanProcessor, SimpleSpanProcessor

        service_name = _get_env_str("AIRNODE_OTEL_SERVICE_NAME", "airnode-storage")
        exporter_type = _get_env_str("AIRNODE_OTEL_EXPORTER", "otlp")
        endpoint = _get_env_str("AIRNODE_OTEL_EXPORTER_OTLP_ENDPOINT", "")
        protocol = _get_env_str("AIRNODE_OTEL_EXPORTER_OTLP_PROTOCOL", "grpc")

        provider = TracerProvider(resource=Resource.create({"service.name": service_name}))

        if test_capture:
            from opentelemetry.sdk.trace.export.in_memory_span_exporter import (
                InMemorySpanExporter,
            )

            _test_exporter = InMemorySpanExporter()
            provider.add_span_processor(SimpleSpanProcessor(_test_exporter))
        elif exporter_type == "console":
            from opentelemetry.sdk.trace.export import ConsoleSpanExporter

            provider.add_span_processor(SimpleSpanProcessor(ConsoleSpanExporter()))
        else:
            provider.add_span_processor(
                BatchSpanProcessor(_create_otlp_exporter(protocol, endpoint or None))
            )

        trace.set_tracer_provider(provider)
        _tracer_provider = provider

        logger.info(
            "OpenTelemetry tracing configured: service=%s, exporter=%s",
            service_name,
            exporter_type if not test_capture else "in-memory",
        )
        return True

    except Exception as e:
        logger.error("Failed to configure OpenTelemetry tracing: %s", e)
        if _get_env_bool(AIRNODE_REQUIRE_OTEL_ENV, False):
            raise TracingConfigError(
                f"OpenTelemetry tracing required but configuration failed: {e}"
            ) from e
        return False


def get_test_spans() -> list[ReadableSpan]:
    """Get captured spans from the in-memory exporter (for testing)."""
    if _test_exporter is not None:
        return list(_test_exporter.get_finished_spans())
    return []


def reset_tracing() -> None:
    """Reset tracing configuration (for testing).

    The global TracerProvider cannot be replaced once set, so the in-memory
    exporter is kept and only its captured spans are cleared.
    """
    global _is_configured

    if _test_exporter is not None:
        _test_exporter.clear()
    _is_configured = False
