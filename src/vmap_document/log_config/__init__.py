"""Logging configuration package."""

from .main import DocumentContext, configure_logging, get_context_logger


__all__ = [
    "configure_logging",
    "get_context_logger",
    "DocumentContext",
]
