"""Reconstruction of water-outage notices from per-line OCR output."""

from .alignment import AlignmentGate, AlignmentState, GateDecision
from .classifier import LineClassifier
from .line_filter import filter_lines, flatten_paragraphs
from .models import (
    Baseline,
    ParsedLine,
    RawLine,
    RawParagraph,
    ReconstructedNotice,
    Role,
)
from .reconstructor import (
    UNDATED_PLACEHOLDER,
    UNKNOWN_TURN,
    DocumentReconstructor,
    build_notice_id,
    normalize_token,
)

__all__ = [
    "AlignmentGate",
    "AlignmentState",
    "Baseline",
    "DocumentReconstructor",
    "GateDecision",
    "LineClassifier",
    "ParsedLine",
    "RawLine",
    "RawParagraph",
    "ReconstructedNotice",
    "Role",
    "UNDATED_PLACEHOLDER",
    "UNKNOWN_TURN",
    "build_notice_id",
    "filter_lines",
    "flatten_paragraphs",
    "normalize_token",
]
