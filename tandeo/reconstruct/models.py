# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2024 Tandeo contributors

"""Data models for the notice reconstruction stage.

Recognizer output enters as :class:`RawParagraph` / :class:`RawLine` and the
stage emits a :class:`ReconstructedNotice`. Pydantic validates the raw input
so a line missing ``text``, ``confidence`` or ``baseline.x0`` fails at the
boundary instead of deep inside the reconstruction pass.
"""
from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Baseline(BaseModel):
    """Text baseline of a recognized line in pixel coordinates."""

    model_config = ConfigDict(frozen=True)

    x0: float
    y0: Optional[float] = None
    x1: Optional[float] = None
    y1: Optional[float] = None


class RawLine(BaseModel):
    """One OCR-recognized line as produced by a recognizer."""

    model_config = ConfigDict(frozen=True)

    text: str
    confidence: float
    baseline: Baseline

    @property
    def baseline_x(self) -> float:
        return self.baseline.x0


class RawParagraph(BaseModel):
    model_config = ConfigDict(frozen=True)

    lines: List[RawLine] = Field(default_factory=list)


class Role(str, Enum):
    DATE = "date"
    SECTION_HEADING = "section_heading"
    TURN_LABEL = "turn_label"
    BODY_CONTENT = "body_content"
    UNCLASSIFIED = "unclassified"


class ParsedLine(BaseModel):
    """Working representation of a line inside the reconstruction pass."""

    text: str
    x_baseline: float
    role: Role = Role.UNCLASSIFIED


class ReconstructedNotice(BaseModel):
    """Reconstructed notice: deduplication key plus publishable body text."""

    id: str
    text: str
    date: Optional[str] = None
    turn: Optional[str] = None
    lines: List[ParsedLine] = Field(default_factory=list)
