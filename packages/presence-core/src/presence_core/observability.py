"""Structured logging and OpenTelemetry spans for presence-core.

This module provides:
- Structured logging setup via structlog
- A span helper wrapping each presence build
"""

from __future__ import annotations

import time
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

import structlog
from opentelemetry import trace
from opentelemetry.trace import SpanKind, Status, StatusCode

if TYPE_CHECKING:
    from opentelemetry.trace import Span, Tracer

TRACER_NAME = "presence.build"

logger = structlog.get_logger(__name__)
_tracer: Tracer | None = None


def get_tracer() -> Tracer:
    """Get the OpenTelemetry tracer for presence-core.

    Returns:
        OpenTelemetry Tracer instance.
    """
    global _tracer
    if _tracer is None:
        _tracer = trace.get_tracer(TRACER_NAME)
    return _tracer


def configure_logging(
    *,
    log_level: str = "WARNING",
    json_format: bool = False,
    add_timestamp: bool = True,
) -> None:
    """Configure structured logging.

    Args:
        log_level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_format: If True, output JSON format. If False, output human-readable.
        add_timestamp: If True, add ISO timestamp to log entries.

    Example:
        >>> configure_logging(log_level="DEBUG")
    """
    import logging

    processors: list[Any] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if add_timestamp:
        processors.insert(0, structlog.processors.TimeStamper(fmt="iso"))

    if json_format:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, log_level.upper()),
    )


@contextmanager
def span(
    name: str,
    *,
    attributes: dict[str, Any] | None = None,
) -> Iterator[Span]:
    """Create an OpenTelemetry span with structured logging.

    Args:
        name: Span name (e.g., "compile_presence").
        attributes: Optional span attributes.

    Yields:
        OpenTelemetry Span instance.

    Example:
        >>> with span("compile_presence", attributes={"presence": "YouTube"}):
        ...     build()
    """
    attrs = attributes or {}
    start = time.monotonic()

    with get_tracer().start_as_current_span(
        name,
        kind=SpanKind.INTERNAL,
        attributes=attrs,
        record_exception=False,
        set_status_on_exception=False,
    ) as current:
        logger.debug("span_started", span=name, **attrs)
        try:
            yield current
        except Exception as e:
            current.set_status(Status(StatusCode.ERROR, str(e)))
            current.record_exception(e)
            logger.debug(
                "span_failed",
                span=name,
                error=str(e),
                duration_ms=int((time.monotonic() - start) * 1000),
                **attrs,
            )
            raise
        current.set_status(Status(StatusCode.OK))
        logger.debug(
            "span_completed",
            span=name,
            duration_ms=int((time.monotonic() - start) * 1000),
            **attrs,
        )
