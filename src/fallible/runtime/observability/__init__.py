"""Observability for the library's own diagnostics."""

from .logging import configure_logging, get_logger, log_context, reset_logging

__all__ = ["configure_logging", "get_logger", "log_context", "reset_logging"]
