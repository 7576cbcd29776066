# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2024 Tandeo contributors

"""Pattern rules that assign a structural role to a recognized line.

Rules are evaluated in order and the first match wins:

* a "15 de marzo de 2024" style date anywhere in the text is a date line
* text made only of capitals, hyphens and spaces is a section heading
* a section heading carrying the turn marker (``TURNO``) is a turn label
* everything else is body content
"""
from __future__ import annotations

import re
from typing import Optional

from ..config import ReconstructionConfig
from .models import Role

__all__ = ["LineClassifier"]

_HEADING_PATTERN = re.compile(r"[A-ZÁÉÍÓÚÜÑ\s-]+")


class LineClassifier:
    """Classify trimmed line text; baseline position plays no part here."""

    def __init__(self, config: Optional[ReconstructionConfig] = None) -> None:
        self.config = config or ReconstructionConfig()
        months = "|".join(re.escape(month) for month in self.config.month_names)
        connective = re.escape(self.config.connective)
        self._date_pattern = re.compile(
            rf"\b\d{{1,2}}\s+{connective}\s+(?:{months})\s+{connective}\s+\d{{4}}\b",
            re.IGNORECASE,
        )

    def match_date(self, text: str) -> Optional[str]:
        """Return the date substring of ``text`` or ``None``."""

        match = self._date_pattern.search(text)
        return match.group(0) if match else None

    def is_heading(self, text: str) -> bool:
        return _HEADING_PATTERN.fullmatch(text) is not None

    def classify(self, text: str) -> Role:
        if self.match_date(text) is not None:
            return Role.DATE
        if self.is_heading(text):
            if self.config.turn_marker in text:
                return Role.TURN_LABEL
            return Role.SECTION_HEADING
        return Role.BODY_CONTENT
