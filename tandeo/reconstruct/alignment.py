# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2024 Tandeo contributors

"""Baseline alignment gate.

OCR on a busy page picks up captions and ads that happen to look like body
text or headings. The first body line and the first heading each fix a
reference baseline for their role; later lines of the same role whose
baseline drifts by ``variance`` pixels or more are dropped as belonging to
another visual column.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import Optional, Sequence, Tuple

from ..config import DEFAULT_BULLET_GLYPHS
from .models import ParsedLine, Role

__all__ = ["AlignmentGate", "AlignmentState", "GateDecision"]


@dataclass(frozen=True)
class AlignmentState:
    first_bullet_baseline: Optional[float] = None
    first_heading_baseline: Optional[float] = None


@dataclass(frozen=True)
class GateDecision:
    """Outcome of gating one line.

    ``emitted`` holds the lines to append to the body in order: the
    normalized bullet, or a blank separator followed by the heading.
    """

    accepted: bool
    emitted: Tuple[ParsedLine, ...]
    state: AlignmentState


class AlignmentGate:
    def __init__(
        self,
        variance: float = 40.0,
        bullet_glyphs: Sequence[str] = DEFAULT_BULLET_GLYPHS,
    ) -> None:
        self.variance = variance
        glyphs = "".join(re.escape(glyph) for glyph in bullet_glyphs)
        self._bullet_prefix = re.compile(rf"^[{glyphs}] ?") if glyphs else None

    def within(self, reference: Optional[float], x: float) -> bool:
        return reference is None or abs(x - reference) < self.variance

    def normalize_bullet(self, text: str) -> str:
        if self._bullet_prefix is not None:
            text = self._bullet_prefix.sub("", text, count=1)
        return f"- {text}"

    def admit_bullet(self, line: ParsedLine, state: AlignmentState) -> GateDecision:
        reference = state.first_bullet_baseline
        if not self.within(reference, line.x_baseline):
            return GateDecision(accepted=False, emitted=(), state=state)
        if reference is None:
            state = replace(state, first_bullet_baseline=line.x_baseline)
        bullet = ParsedLine(
            text=self.normalize_bullet(line.text),
            x_baseline=line.x_baseline,
            role=Role.BODY_CONTENT,
        )
        return GateDecision(accepted=True, emitted=(bullet,), state=state)

    def admit_heading(self, line: ParsedLine, state: AlignmentState) -> GateDecision:
        reference = state.first_heading_baseline
        if not self.within(reference, line.x_baseline):
            return GateDecision(accepted=False, emitted=(), state=state)
        if reference is None:
            state = replace(state, first_heading_baseline=line.x_baseline)
        separator = ParsedLine(text="", x_baseline=line.x_baseline, role=Role.BODY_CONTENT)
        heading = ParsedLine(text=line.text, x_baseline=line.x_baseline, role=Role.SECTION_HEADING)
        return GateDecision(accepted=True, emitted=(separator, heading), state=state)

    def admit(self, line: ParsedLine, state: AlignmentState) -> GateDecision:
        """Gate ``line`` according to its role.

        Date and turn lines are never rejected on alignment grounds; they
        emit nothing because they feed the identifier rather than the body.
        """

        if line.role in (Role.DATE, Role.TURN_LABEL):
            return GateDecision(accepted=True, emitted=(), state=state)
        if line.role == Role.SECTION_HEADING:
            return self.admit_heading(line, state)
        if line.role == Role.BODY_CONTENT:
            return self.admit_bullet(line, state)
        raise ValueError(f"Cannot gate a line with role {line.role.value!r}")
