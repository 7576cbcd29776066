# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2024 Tandeo contributors

"""In-memory collaborators for tests and offline runs."""
from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional

from ..reconstruct.models import RawParagraph
from .interfaces import HistoryStore, ImageFetcher, ImageSource, Publisher, Recognizer


class MockImageSource(ImageSource):
    def __init__(self, reference: str = "https://example.org/notice.jpg") -> None:
        self.reference = reference
        self.calls = 0

    def locate(self) -> str:
        self.calls += 1
        return self.reference


class MockImageFetcher(ImageFetcher):
    def __init__(self, path: Path = Path("notice.jpg")) -> None:
        self.path = path
        self.calls: List[str] = []

    def fetch(self, reference: str) -> Path:
        self.calls.append(reference)
        return self.path


class MockRecognizer(Recognizer):
    def __init__(self, paragraphs: Iterable[RawParagraph]) -> None:
        self.paragraphs = list(paragraphs)
        self.calls: List[Path] = []

    def recognize(self, image_path: Path) -> List[RawParagraph]:
        self.calls.append(image_path)
        return list(self.paragraphs)


class MockPublisher(Publisher):
    def __init__(self) -> None:
        self.messages: List[str] = []

    def publish(self, text: str) -> None:
        self.messages.append(text)


class MemoryHistoryStore(HistoryStore):
    def __init__(self, ids: Optional[Iterable[str]] = None, window: int = 10) -> None:
        self.window = window
        self._ids: List[str] = list(ids or [])[:window]

    def ids(self) -> List[str]:
        return list(self._ids)

    def seen(self, notice_id: str) -> bool:
        return notice_id in self._ids

    def record(self, notice_id: str) -> None:
        self._ids = ([notice_id] + [item for item in self._ids if item != notice_id])[: self.window]
