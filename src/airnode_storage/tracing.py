"""OpenTelemetry tracing for Airnode bucket operations.

Provides a decorator that wraps provider operations in spans.

Span attributes never carry raw object keys or local file paths: keys are
exported as SHA256 hashes. Bucket names are not secret and are exported as-is.
"""

from __future__ import annotations

import functools
import hashlib
import inspect
import logging
from collections.abc import Callable
from typing import Any, TypeVar, cast

from airnode_storage.observability import is_tracing_enabled

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

TRACER_NAME = "airnode.bucket"

_KEY_ARGUMENTS = ("key", "destination_key", "from_key", "to_key")


def _hash_key(key: str) -> str:
    return hashlib.sha256(key.encode("utf-8")).hexdigest()


def traced_bucket_operation(operation: str) -> Callable[[F], F]:
    """Decorator to trace bucket operations with OpenTelemetry.

    Args:
        operation: Operation name (e.g., "create_bucket", "fetch_file").

    Returns:
        Decorated function that emits a span when tracing is enabled.
    """

    def decorator(func: F) -> F:
        signature = inspect.signature(func)

        @functools.wraps(func)
        def wrapper(self: Any, *args: Any, **kwargs: Any) -> Any:
            if not is_tracing_enabled():
                return func(self, *args, **kwargs)

            try:
                from opentelemetry import trace
            except ImportError:
                return func(self, *args, **kwargs)

            arguments = signature.bind_partial(self, *args, **kwargs).arguments
            tracer = trace.get_tracer(TRACER_NAME)

            with tracer.start_as_current_span(f"{TRACER_NAME}.{operation}") as span:
                span.set_attribute("storage.backend", getattr(self, "backend_name", "unknown"))
                bucket_name = arguments.get("bucket_name")
                if bucket_name:
                    span.set_attribute("airnode.bucket_name", bucket_name)
                for name in _KEY_ARGUMENTS:
                    value = arguments.get(name)
                    if value:
                        span.set_attribute(f"airnode.{name}_sha256", _hash_key(value))

                try:
                    result = func(self, *args, **kwargs)
                except Exception as e:
                    span.set_attribute("error", True)
                    span.set_attribute("error.type", type(e).__name__)
                    raise

                if operation == "create_bucket" and isinstance(result, str):
                    span.set_attribute("airnode.bucket_name", result)
                elif operation == "fetch_file" and isinstance(result, bytes):
                    span.set_attribute("airnode.object_size_bytes", len(result))
                return result

        return cast(F, wrapper)

    return decorator
