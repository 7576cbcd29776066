"""Collaborators that feed the reconstruction stage and publish its output."""

from .fetcher import HttpImageFetcher
from .history import JsonHistoryStore
from .interfaces import HistoryStore, ImageFetcher, ImageSource, Publisher, Recognizer
from .mocks import (
    MemoryHistoryStore,
    MockImageFetcher,
    MockImageSource,
    MockPublisher,
    MockRecognizer,
)
from .publisher import ConsolePublisher, TelegramPublisher
from .runner import NoticePipeline, RunResult, build_pipeline
from .source import HtmlFeedImageSource, StaticImageSource
from .tesseract import TesseractRecognizer

__all__ = [
    "ConsolePublisher",
    "HistoryStore",
    "HtmlFeedImageSource",
    "HttpImageFetcher",
    "ImageFetcher",
    "ImageSource",
    "JsonHistoryStore",
    "MemoryHistoryStore",
    "MockImageFetcher",
    "MockImageSource",
    "MockPublisher",
    "MockRecognizer",
    "NoticePipeline",
    "Publisher",
    "Recognizer",
    "RunResult",
    "StaticImageSource",
    "TelegramPublisher",
    "TesseractRecognizer",
    "build_pipeline",
]
