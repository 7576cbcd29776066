# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2024 Tandeo contributors

"""Line recognizer backed by pytesseract.

Tesseract reports words with their block, paragraph and line numbers. Words
are regrouped here into paragraphs of lines carrying a mean confidence on the
engine's native 0-100 scale and a baseline whose ``x0`` is the left edge of
the line's first word, which is the shape the reconstruction stage expects.
"""
from __future__ import annotations

from pathlib import Path
from statistics import mean
from typing import Any, Dict, List, Tuple

import pytesseract
from PIL import Image, UnidentifiedImageError
from pytesseract import Output

from ..errors import RecognitionError
from ..reconstruct.models import Baseline, RawLine, RawParagraph
from .interfaces import Recognizer

_Word = Tuple[str, float, int, int]


def _as_confidence(raw: Any) -> float:
    if raw is None:
        return -1.0
    try:
        return float(raw)
    except (TypeError, ValueError):
        return -1.0


class TesseractRecognizer(Recognizer):
    """Recognize notice lines with Tesseract.

    Args:
        lang: Language pack passed to Tesseract; notices are in Spanish.
        oem: OCR Engine Mode, ``3`` selects the default LSTM engine.
        psm: Page segmentation mode. ``3`` (fully automatic) keeps the
            block/paragraph structure of a poster-like image.
        extra_config: Additional flags forwarded to pytesseract.
    """

    def __init__(self, lang: str = "spa", oem: int = 3, psm: int = 3, extra_config: str = "") -> None:
        self.lang = lang
        base_config = f"--oem {oem} --psm {psm}"
        self.config = f"{base_config} {extra_config}".strip()

    def _image_to_data(self, image_path: Path) -> Dict[str, List[Any]]:
        try:
            with Image.open(image_path) as image:
                return pytesseract.image_to_data(
                    image,
                    lang=self.lang,
                    config=self.config,
                    output_type=Output.DICT,
                )
        except (pytesseract.TesseractError, pytesseract.TesseractNotFoundError) as exc:
            raise RecognitionError(f"Tesseract failed on {image_path}: {exc}") from exc
        except (OSError, UnidentifiedImageError) as exc:
            raise RecognitionError(f"Cannot open image {image_path}: {exc}") from exc

    def recognize(self, image_path: Path) -> List[RawParagraph]:
        data = self._image_to_data(Path(image_path))

        grouped: Dict[Tuple[int, int], Dict[int, List[_Word]]] = {}
        for text, conf, block, par, line, left, top, height in zip(
            data.get("text", []),
            data.get("conf", []),
            data.get("block_num", []),
            data.get("par_num", []),
            data.get("line_num", []),
            data.get("left", []),
            data.get("top", []),
            data.get("height", []),
        ):
            confidence = _as_confidence(conf)
            if not text or not str(text).strip() or confidence < 0:
                continue
            lines = grouped.setdefault((int(block), int(par)), {})
            lines.setdefault(int(line), []).append(
                (str(text), confidence, int(left), int(top) + int(height))
            )

        paragraphs: List[RawParagraph] = []
        for lines in grouped.values():
            raw_lines = [
                RawLine(
                    text=" ".join(word[0] for word in words),
                    confidence=mean(word[1] for word in words),
                    baseline=Baseline(
                        x0=min(word[2] for word in words),
                        y0=max(word[3] for word in words),
                    ),
                )
                for words in lines.values()
            ]
            paragraphs.append(RawParagraph(lines=raw_lines))
        return paragraphs
