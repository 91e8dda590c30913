"""Structured logging utilities for the allowlist registry.

Thin structlog setup shared by every module. Output is JSON by default;
``configure_logging(json_output=False)`` switches to the console renderer
for local development. Every event carries ``component="allowlists"`` and
the emitting module under ``logger`` so registry logs can be filtered out
of a host application's stream.
"""

import logging
import sys
import time
from typing import Any, Optional

import structlog
from structlog._config import BoundLoggerLazyProxy
from structlog.types import EventDict, Processor

from allowlists.constants import LOG_COMPONENT, SLOW_LOAD_THRESHOLD_MS


def add_component(logger: logging.Logger, method_name: str, event_dict: EventDict) -> EventDict:
    """Tag events with the registry component name."""
    event_dict.setdefault("component", LOG_COMPONENT)
    return event_dict


def configure_logging(
    log_level: str = "INFO",
    json_output: bool = True
) -> None:
    """Configure structured logging.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_output: If True, output JSON format. If False, use console format.
    """
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        add_component,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if json_output:
        processors.append(structlog.processors.JSONRenderer(sort_keys=True))
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, log_level.upper())
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str = LOG_COMPONENT) -> structlog.stdlib.BoundLogger:
    """Get a logger bound to ``name`` (typically ``__name__``)."""
    # ``logger`` collides with wrap_logger's first parameter, so build the lazy
    # proxy directly to keep it as an initial value.
    return BoundLoggerLazyProxy(None, initial_values={"logger": name}, logger_factory_args=())


class PerformanceLogger:
    """Context manager for timing an operation such as the registry load."""

    def __init__(
        self,
        operation: str,
        logger: Optional[structlog.stdlib.BoundLogger] = None,
        threshold_ms: float = SLOW_LOAD_THRESHOLD_MS,
        **context: Any,
    ):
        self.operation = operation
        self.logger = logger or get_logger()
        self.threshold_ms = threshold_ms
        self.context = context
        self.start_time: float = 0
        self.end_time: float = 0

    def __enter__(self) -> "PerformanceLogger":
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.end_time = time.perf_counter()
        duration_ms = (self.end_time - self.start_time) * 1000

        if exc_type is not None:
            self.logger.error(
                f"{self.operation} failed",
                operation=self.operation,
                duration_ms=duration_ms,
                error=str(exc_val),
                **self.context,
            )
        else:
            # Over threshold → WARNING
            log_method = self.logger.warning if duration_ms > self.threshold_ms else self.logger.debug
            log_method(
                f"{self.operation} completed",
                operation=self.operation,
                duration_ms=duration_ms,
                **self.context,
            )

    @property
    def duration_ms(self) -> float:
        """Get duration in milliseconds."""
        if self.end_time == 0:
            return (time.perf_counter() - self.start_time) * 1000
        return (self.end_time - self.start_time) * 1000


# Defaults at import; allowlists.registry.configure() reapplies the level and
# renderer from Config.
configure_logging()
