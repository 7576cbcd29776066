# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2024 Tandeo contributors

"""Failure kinds raised by the notice pipeline."""
from __future__ import annotations

__all__ = [
    "DuplicateNoticeError",
    "FeedAccessError",
    "HistoryPersistenceError",
    "ImageTransferError",
    "PublishError",
    "RecognitionError",
    "TandeoError",
    "UndatedNoticeError",
]


class TandeoError(RuntimeError):
    """Base class for pipeline failures."""


class FeedAccessError(TandeoError):
    """Raised when the feed cannot be read or carries no notice image."""


class ImageTransferError(TandeoError):
    """Raised when the notice image cannot be stored locally."""


class RecognitionError(TandeoError):
    """Raised when the OCR engine fails on the notice image."""


class PublishError(TandeoError):
    """Raised when the messaging channel rejects the notice."""


class HistoryPersistenceError(TandeoError):
    """Raised when the history of published notices cannot be read or written."""


class DuplicateNoticeError(TandeoError):
    """Raised when a notice identifier was already published."""

    def __init__(self, notice_id: str) -> None:
        self.notice_id = notice_id
        super().__init__(f"Notice {notice_id!r} was already published")


class UndatedNoticeError(TandeoError):
    """Raised when the reconstructed notice carries no date line."""

    def __init__(self, notice_id: str) -> None:
        self.notice_id = notice_id
        super().__init__(
            f"No date line found in the notice (id {notice_id!r}); refusing to publish"
        )
