"""Logging configuration and utilities."""

import logging
from typing import Any

import structlog


def configure_logging(level: str = "INFO", json_output: bool = True) -> None:
    """Configure structlog for the VMAP document package.

    Args:
        level: Minimum log level name (e.g., "DEBUG", "INFO")
        json_output: Render JSON lines instead of console output
    """
    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level.upper())
        ),
    )


def get_context_logger(name: str) -> structlog.BoundLogger:
    """Get a context-aware logger.

    Args:
        name: Logger name

    Returns:
        Structured logger instance
    """
    return structlog.get_logger(name)


class DocumentContext:
    """Context manager binding document-level logging context.

    Example:
        with DocumentContext(document_id="breaks-42", source="cms"):
            parser.parse_vmap(xml)
    """

    def __init__(self, **context: Any):
        self.context = context

    def __enter__(self):
        structlog.contextvars.bind_contextvars(**self.context)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        structlog.contextvars.unbind_contextvars(*self.context.keys())


__all__ = [
    "configure_logging",
    "get_context_logger",
    "DocumentContext",
]
