# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2024 Tandeo contributors

"""Confidence and blank-line filtering of recognizer output."""
from __future__ import annotations

from typing import Iterable, List

from .models import ParsedLine, RawLine, RawParagraph

__all__ = ["filter_lines", "flatten_paragraphs"]


def flatten_paragraphs(paragraphs: Iterable[RawParagraph]) -> List[RawLine]:
    return [line for paragraph in paragraphs for line in paragraph.lines]


def filter_lines(lines: Iterable[RawLine], threshold: float = 30.0) -> List[ParsedLine]:
    """Keep lines scoring strictly above ``threshold`` whose trimmed text is non-empty.

    Only leading/trailing whitespace is removed; interior spacing is kept as
    recognized. Input order is preserved.
    """

    kept: List[ParsedLine] = []
    for line in lines:
        if line.confidence <= threshold:
            continue
        text = line.text.strip()
        if not text:
            continue
        kept.append(ParsedLine(text=text, x_baseline=line.baseline_x))
    return kept
