"""
OpenTelemetry instrumentation utilities for tracing git invocations and
history pipeline runs.
"""

import functools
import os
import time
from collections.abc import Callable
from contextlib import contextmanager
from typing import Any

from opentelemetry import trace as otel_trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import ConsoleSpanExporter, SimpleSpanProcessor
from opentelemetry.trace import Status, StatusCode


class TelemetryManager:
    """Manages OpenTelemetry setup and instrumentation"""

    def __init__(self, service_name: str = "git-history-toolkit"):
        """
        Initialize telemetry manager.

        Args:
            service_name: Name of the service for telemetry identification
        """
        self.service_name = service_name
        self.enabled = os.getenv("OTEL_SDK_DISABLED", "false").lower() != "true"
        self.tracer = None

        if self.enabled:
            self._setup_telemetry()

    def _setup_telemetry(self) -> None:
        """Set up OpenTelemetry tracing"""
        resource = Resource.create(
            {
                "service.name": self.service_name,
                "service.version": "1.0.0",
            }
        )
        tracer_provider = TracerProvider(resource=resource)

        # Spans are only exported when explicitly requested
        if os.getenv("OTEL_CONSOLE_EXPORT", "false").lower() == "true":
            tracer_provider.add_span_processor(
                SimpleSpanProcessor(ConsoleSpanExporter())
            )

        self.tracer = tracer_provider.get_tracer(__name__)

    @contextmanager
    def trace_operation(
        self, operation_name: str, attributes: dict[str, Any] | None = None
    ):
        """
        Context manager for tracing operations.

        Args:
            operation_name: Name of the operation being traced
            attributes: Additional attributes to add to the span

        Yields:
            The current span, or None when telemetry is disabled
        """
        if not self.enabled or not self.tracer:
            yield None
            return

        with self.tracer.start_as_current_span(
            operation_name, record_exception=False, set_status_on_exception=False
        ) as span:
            if attributes:
                for key, value in attributes.items():
                    span.set_attribute(key, str(value))

            try:
                yield span
            except Exception as e:
                span.set_status(Status(StatusCode.ERROR, str(e)))
                span.record_exception(e)
                raise

    def trace_function(
        self,
        operation_name: str | None = None,
        include_args: bool = False,
    ):
        """
        Decorator for tracing function calls.

        Args:
            operation_name: Custom operation name (defaults to function name)
            include_args: Whether to include keyword arguments as attributes

        Returns:
            Decorated function
        """

        def decorator(func: Callable) -> Callable:
            @functools.wraps(func)
            def wrapper(*args, **kwargs):
                name = operation_name or f"{func.__module__}.{func.__name__}"

                with self.trace_operation(name) as span:
                    if span and include_args:
                        for key, value in kwargs.items():
                            span.set_attribute(
                                f"kwarg.{key}", str(value)[:100]
                            )  # Limit length

                    start_time = time.time()
                    result = func(*args, **kwargs)
                    if span:
                        span.set_attribute(
                            "duration_seconds", time.time() - start_time
                        )
                    return result

            return wrapper

        return decorator


# Global telemetry manager instance
_telemetry_manager: TelemetryManager | None = None


def get_telemetry_manager() -> TelemetryManager:
    """Get or create the global telemetry manager instance"""
    global _telemetry_manager
    if _telemetry_manager is None:
        _telemetry_manager = TelemetryManager()
    return _telemetry_manager


def trace_operation(operation_name: str, attributes: dict[str, Any] | None = None):
    """
    Convenience function for tracing operations.

    Args:
        operation_name: Name of the operation
        attributes: Additional attributes
    """
    return get_telemetry_manager().trace_operation(operation_name, attributes)


def trace_function(operation_name: str | None = None, include_args: bool = False):
    """
    Convenience decorator for tracing functions.

    Args:
        operation_name: Custom operation name
        include_args: Whether to include keyword arguments
    """
    return get_telemetry_manager().trace_function(operation_name, include_args)
