# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2024 Tandeo contributors

"""Runtime configuration.

Reconstruction constants live on :class:`ReconstructionConfig`; everything the
pipeline needs to reach the outside world lives on :class:`Settings`. Both are
populated from ``TANDEO_*`` environment variables by :meth:`Settings.from_env`.
"""
from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

SPANISH_MONTHS: Tuple[str, ...] = (
    "enero",
    "febrero",
    "marzo",
    "abril",
    "mayo",
    "junio",
    "julio",
    "agosto",
    "septiembre",
    "setiembre",
    "octubre",
    "noviembre",
    "diciembre",
)

DEFAULT_BULLET_GLYPHS: Tuple[str, ...] = ("-", "»", "«", "“", "”")


class ReconstructionConfig(BaseModel):
    """Tunable constants of the reconstruction stage."""

    model_config = ConfigDict(frozen=True)

    confidence_threshold: float = 30.0
    baseline_variance: float = Field(40.0, gt=0)
    month_names: Tuple[str, ...] = SPANISH_MONTHS
    connective: str = "de"
    turn_marker: str = "TURNO"
    bullet_glyphs: Tuple[str, ...] = DEFAULT_BULLET_GLYPHS


def _env_str(name: str, default: Optional[str] = None) -> Optional[str]:
    raw = os.environ.get(name)
    if raw is None:
        return default
    raw = raw.strip()
    return raw or default


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None:
        return default
    raw = raw.strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None:
        return default
    raw = raw.strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_truthy(name: str, default: bool = False) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() not in {"0", "false", "no", "off", ""}


def _default_download_dir() -> Path:
    return Path(tempfile.gettempdir()) / "tandeo"


@dataclass(frozen=True)
class Settings:
    reconstruction: ReconstructionConfig = field(default_factory=ReconstructionConfig)
    history_path: Path = Path("history.json")
    history_window: int = 10
    download_dir: Path = field(default_factory=_default_download_dir)
    feed_url: Optional[str] = None
    feed_selector: str = "img"
    ocr_lang: str = "spa"
    telegram_token: Optional[str] = None
    telegram_chat_id: Optional[str] = None
    require_date: bool = True
    http_timeout_sec: float = 30.0

    @classmethod
    def from_env(cls) -> "Settings":
        reconstruction = ReconstructionConfig(
            confidence_threshold=_env_float("TANDEO_CONFIDENCE_THRESHOLD", 30.0),
            baseline_variance=_env_float("TANDEO_BASELINE_VARIANCE", 40.0),
        )
        download_dir = _env_str("TANDEO_DOWNLOAD_DIR")
        return cls(
            reconstruction=reconstruction,
            history_path=Path(_env_str("TANDEO_HISTORY_PATH", "history.json")),
            history_window=max(1, _env_int("TANDEO_HISTORY_WINDOW", 10)),
            download_dir=Path(download_dir) if download_dir else _default_download_dir(),
            feed_url=_env_str("TANDEO_FEED_URL"),
            feed_selector=_env_str("TANDEO_FEED_SELECTOR", "img") or "img",
            ocr_lang=_env_str("TANDEO_OCR_LANG", "spa") or "spa",
            telegram_token=_env_str("TANDEO_TELEGRAM_TOKEN"),
            telegram_chat_id=_env_str("TANDEO_TELEGRAM_CHAT_ID"),
            require_date=_env_truthy("TANDEO_REQUIRE_DATE", True),
            http_timeout_sec=max(1.0, _env_float("TANDEO_HTTP_TIMEOUT_SEC", 30.0)),
        )


__all__ = ["DEFAULT_BULLET_GLYPHS", "ReconstructionConfig", "SPANISH_MONTHS", "Settings"]
