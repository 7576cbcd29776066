# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2024 Tandeo contributors

"""Rebuild a notice from filtered OCR lines.

The pass walks the filtered lines once, front to back, and appends accepted
lines to a fresh output list. Alignment state and the detected date/turn are
carried in a :class:`_PassState` value rather than in closures, so each
transition can be exercised on its own.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from typing import Iterable, List, Optional, Sequence

from ..config import ReconstructionConfig
from ..utils.log import get_logger, log_event
from .alignment import AlignmentGate, AlignmentState
from .classifier import LineClassifier
from .line_filter import filter_lines, flatten_paragraphs
from .models import ParsedLine, RawLine, RawParagraph, ReconstructedNotice, Role

__all__ = [
    "DocumentReconstructor",
    "UNDATED_PLACEHOLDER",
    "UNKNOWN_TURN",
    "build_notice_id",
    "normalize_token",
]

# Rendered in place of a missing date; kept stable so existing history entries still match.
UNDATED_PLACEHOLDER = "undefined"
UNKNOWN_TURN = "unknown"

_NON_ALNUM = re.compile(r"[\W_]+")

logger = get_logger(__name__)


def normalize_token(text: str) -> str:
    """Collapse every run of non-alphanumeric characters into a single hyphen."""

    return _NON_ALNUM.sub("-", text)


def build_notice_id(date: Optional[str], turn: Optional[str]) -> str:
    return f"{date if date is not None else UNDATED_PLACEHOLDER}-{turn or UNKNOWN_TURN}"


@dataclass(frozen=True)
class _PassState:
    alignment: AlignmentState = field(default_factory=AlignmentState)
    date: Optional[str] = None
    turn: Optional[str] = None


class DocumentReconstructor:
    def __init__(self, config: Optional[ReconstructionConfig] = None) -> None:
        self.config = config or ReconstructionConfig()
        self.classifier = LineClassifier(self.config)
        self.gate = AlignmentGate(
            variance=self.config.baseline_variance,
            bullet_glyphs=self.config.bullet_glyphs,
        )
        self._turn_prefix = re.compile(re.escape(self.config.turn_marker) + " ?")

    def trim_leading_noise(self, lines: Sequence[ParsedLine]) -> List[ParsedLine]:
        """Drop every line above the first one that carries a date."""

        for index, line in enumerate(lines):
            if self.classifier.match_date(line.text) is not None:
                return list(lines[index:])
        return []

    def normalize_turn(self, text: str) -> str:
        stripped = self._turn_prefix.sub("", text, count=1)
        return normalize_token(stripped).lower()

    def step(self, line: ParsedLine, state: _PassState, out: List[ParsedLine]) -> _PassState:
        """Classify ``line``, update ``state`` and append accepted body lines to ``out``."""

        role = self.classifier.classify(line.text)
        line = line.model_copy(update={"role": role})

        if role == Role.DATE:
            matched = self.classifier.match_date(line.text) or line.text
            return replace(state, date=normalize_token(matched))
        if role == Role.TURN_LABEL:
            return replace(state, turn=self.normalize_turn(line.text))
        if role in (Role.SECTION_HEADING, Role.BODY_CONTENT):
            decision = self.gate.admit(line, state.alignment)
            if not decision.accepted:
                log_event(
                    "line.misaligned",
                    {"text": line.text, "role": role.value, "x": line.x_baseline},
                    level="debug",
                    logger=logger,
                )
            out.extend(decision.emitted)
            return replace(state, alignment=decision.state)
        raise ValueError(f"Unhandled line role {role.value!r}")

    def reconstruct(self, lines: Iterable[RawLine]) -> ReconstructedNotice:
        parsed = filter_lines(lines, self.config.confidence_threshold)
        working = self.trim_leading_noise(parsed)

        state = _PassState()
        body: List[ParsedLine] = []
        for line in working:
            state = self.step(line, state, body)

        return ReconstructedNotice(
            id=build_notice_id(state.date, state.turn),
            text="\n".join(line.text for line in body),
            date=state.date,
            turn=state.turn,
            lines=body,
        )

    def reconstruct_paragraphs(self, paragraphs: Iterable[RawParagraph]) -> ReconstructedNotice:
        return self.reconstruct(flatten_paragraphs(paragraphs))
