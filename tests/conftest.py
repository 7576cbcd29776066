# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2024 Tandeo contributors

"""Pytest configuration shared across the suite."""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from tandeo.reconstruct import Baseline, RawLine, RawParagraph  # noqa: E402


def make_line(text: str, x: float = 10, confidence: float = 90) -> RawLine:
    return RawLine(text=text, confidence=confidence, baseline=Baseline(x0=x))


@pytest.fixture
def line():
    return make_line


@pytest.fixture
def notice_paragraphs():
    return [
        RawParagraph(
            lines=[
                make_line("15 de marzo de 2024", x=10),
                make_line("TURNO MATUTINO", x=12),
            ]
        ),
        RawParagraph(
            lines=[
                make_line("- Colonia Centro", x=15),
                make_line("anuncio publicitario", x=400),
            ]
        ),
    ]


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch):
    for name in list(os.environ):
        if name.startswith("TANDEO_"):
            monkeypatch.delenv(name, raising=False)
