"""Tandeo: republish water-outage notices recognized from a public feed."""

from __future__ import annotations

from ._version import __version__
from .config import ReconstructionConfig, Settings
from .reconstruct import DocumentReconstructor, ReconstructedNotice

__all__ = [
    "DocumentReconstructor",
    "ReconstructedNotice",
    "ReconstructionConfig",
    "Settings",
    "__version__",
]
