# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2024 Tandeo contributors

"""Structured event logging shared by the pipeline stages."""
from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

__all__ = ["get_logger", "log_event"]

_LOGGER_NAME = "tandeo"


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).replace(microsecond=0).isoformat()


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return the ``tandeo`` logger (or a child), configuring it on first use."""

    root = logging.getLogger(_LOGGER_NAME)
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(message)s"))
        root.addHandler(handler)
        log_level = (os.environ.get("TANDEO_LOG_LEVEL") or "INFO").strip().upper()
        root.setLevel(getattr(logging, log_level, logging.INFO))
        root.propagate = False
    return logging.getLogger(name) if name else root


def log_event(
    event: str,
    payload: Optional[Dict[str, Any]] = None,
    *,
    level: str = "info",
    logger: Optional[logging.Logger] = None,
) -> None:
    """Emit one event line, JSON by default or plain text with ``TANDEO_LOG_FORMAT=text``."""

    logger = logger or get_logger()
    payload = payload or {}
    log_format = (os.environ.get("TANDEO_LOG_FORMAT") or "json").strip().lower()
    record = {"ts": _utc_now_iso(), "event": event, **payload}
    if log_format == "json":
        msg = json.dumps(record, ensure_ascii=False, default=str)
    else:
        msg = f"{record.get('ts')} {event} {payload}"
    fn = getattr(logger, level, logger.info)
    fn(msg)
