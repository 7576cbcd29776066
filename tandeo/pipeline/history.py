# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2024 Tandeo contributors

"""Bounded history of published notice identifiers."""
from __future__ import annotations

import json
from pathlib import Path
from typing import List

from ..errors import HistoryPersistenceError
from .interfaces import HistoryStore

__all__ = ["JsonHistoryStore"]


class JsonHistoryStore(HistoryStore):
    """Keep the ``window`` most recent identifiers in a JSON list, newest first.

    A missing file is an empty history. An unreadable or malformed file is an
    error rather than an empty history, so a corrupted store never causes a
    notice to be republished.
    """

    def __init__(self, path: Path, window: int = 10) -> None:
        if window < 1:
            raise ValueError("History window must hold at least one identifier")
        self.path = Path(path)
        self.window = window

    def ids(self) -> List[str]:
        if not self.path.exists():
            return []
        try:
            loaded = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise HistoryPersistenceError(f"Cannot read history {self.path}: {exc}") from exc
        if not isinstance(loaded, list) or not all(isinstance(item, str) for item in loaded):
            raise HistoryPersistenceError(f"History {self.path} is not a list of identifiers")
        return loaded

    def seen(self, notice_id: str) -> bool:
        return notice_id in self.ids()

    def record(self, notice_id: str) -> None:
        recent = [notice_id] + [item for item in self.ids() if item != notice_id]
        self._atomic_write(recent[: self.window])

    def _atomic_write(self, ids: List[str]) -> None:
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(json.dumps(ids, ensure_ascii=False, indent=2) + "\n", encoding="utf-8")
            tmp.replace(self.path)
        except OSError as exc:
            raise HistoryPersistenceError(f"Cannot write history {self.path}: {exc}") from exc
