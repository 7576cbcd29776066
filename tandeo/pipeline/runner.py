# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2024 Tandeo contributors

"""End-to-end notice pipeline: feed → image → OCR → notice → channel."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from pydantic import BaseModel

from ..config import Settings
from ..errors import DuplicateNoticeError, UndatedNoticeError
from ..reconstruct import DocumentReconstructor, ReconstructedNotice
from ..utils.log import get_logger, log_event
from .fetcher import HttpImageFetcher
from .history import JsonHistoryStore
from .interfaces import HistoryStore, ImageFetcher, ImageSource, Publisher, Recognizer
from .publisher import ConsolePublisher, TelegramPublisher
from .source import HtmlFeedImageSource, StaticImageSource
from .tesseract import TesseractRecognizer

__all__ = ["NoticePipeline", "RunResult", "build_pipeline"]

logger = get_logger(__name__)


class RunResult(BaseModel):
    notice: ReconstructedNotice
    image_ref: str
    image_path: Path
    published: bool


@dataclass
class NoticePipeline:
    source: ImageSource
    fetcher: ImageFetcher
    recognizer: Recognizer
    reconstructor: DocumentReconstructor
    publisher: Publisher
    history: HistoryStore
    require_date: bool = True

    def run(self, *, dry_run: bool = False) -> RunResult:
        """Run one pass.

        Raises :class:`DuplicateNoticeError` when the notice was already
        published and :class:`UndatedNoticeError` when no date was found and
        ``require_date`` is set. With ``dry_run`` nothing is published and the
        history is left untouched.
        """

        image_ref = self.source.locate()
        log_event("feed.located", {"image_ref": image_ref}, logger=logger)

        image_path = self.fetcher.fetch(image_ref)
        log_event("image.fetched", {"path": str(image_path)}, logger=logger)

        paragraphs = self.recognizer.recognize(image_path)
        log_event(
            "ocr.recognized",
            {
                "paragraphs": len(paragraphs),
                "lines": sum(len(paragraph.lines) for paragraph in paragraphs),
            },
            logger=logger,
        )

        notice = self.reconstructor.reconstruct_paragraphs(paragraphs)
        log_event(
            "notice.reconstructed",
            {"id": notice.id, "date": notice.date, "turn": notice.turn, "lines": len(notice.lines)},
            logger=logger,
        )

        if notice.date is None and self.require_date:
            raise UndatedNoticeError(notice.id)

        if self.history.seen(notice.id):
            log_event("notice.duplicate", {"id": notice.id}, logger=logger)
            raise DuplicateNoticeError(notice.id)

        if dry_run:
            return RunResult(notice=notice, image_ref=image_ref, image_path=image_path, published=False)

        self.publisher.publish(notice.text)
        self.history.record(notice.id)
        log_event("notice.published", {"id": notice.id}, logger=logger)
        return RunResult(notice=notice, image_ref=image_ref, image_path=image_path, published=True)

    def close(self) -> None:
        for component in (self.source, self.fetcher, self.publisher):
            close = getattr(component, "close", None)
            if callable(close):
                close()

    def __enter__(self) -> "NoticePipeline":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def build_pipeline(
    settings: Settings,
    *,
    dry_run: bool = False,
    image_url: Optional[str] = None,
) -> NoticePipeline:
    """Wire the concrete collaborators described by ``settings``."""

    if image_url:
        source: ImageSource = StaticImageSource(image_url)
    elif settings.feed_url:
        source = HtmlFeedImageSource(
            settings.feed_url,
            selector=settings.feed_selector,
            timeout_sec=settings.http_timeout_sec,
        )
    else:
        raise ValueError("Set TANDEO_FEED_URL or pass an image URL")

    if dry_run:
        publisher: Publisher = ConsolePublisher()
    elif settings.telegram_token and settings.telegram_chat_id:
        publisher = TelegramPublisher(
            settings.telegram_token,
            settings.telegram_chat_id,
            timeout_sec=settings.http_timeout_sec,
        )
    else:
        raise ValueError("Set TANDEO_TELEGRAM_TOKEN and TANDEO_TELEGRAM_CHAT_ID to publish")

    return NoticePipeline(
        source=source,
        fetcher=HttpImageFetcher(settings.download_dir, timeout_sec=settings.http_timeout_sec),
        recognizer=TesseractRecognizer(lang=settings.ocr_lang),
        reconstructor=DocumentReconstructor(settings.reconstruction),
        publisher=publisher,
        history=JsonHistoryStore(settings.history_path, window=settings.history_window),
        require_date=settings.require_date,
    )
