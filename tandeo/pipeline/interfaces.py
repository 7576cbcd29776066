# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2024 Tandeo contributors

"""Interfaces for the collaborators around the reconstruction stage."""
from __future__ import annotations

from pathlib import Path
from typing import List, Protocol

from ..reconstruct.models import RawParagraph


class ImageSource(Protocol):
    def locate(self) -> str:
        ...


class ImageFetcher(Protocol):
    def fetch(self, reference: str) -> Path:
        ...


class Recognizer(Protocol):
    def recognize(self, image_path: Path) -> List[RawParagraph]:
        ...


class Publisher(Protocol):
    def publish(self, text: str) -> None:
        ...


class HistoryStore(Protocol):
    def seen(self, notice_id: str) -> bool:
        ...

    def record(self, notice_id: str) -> None:
        ...

    def ids(self) -> List[str]:
        ...
