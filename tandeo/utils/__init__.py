"""Shared helpers."""

from .log import get_logger, log_event

__all__ = ["get_logger", "log_event"]
