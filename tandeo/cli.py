# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2024 Tandeo contributors

"""Command-line entry for the notice republisher.

Subcommands print JSON to stdout so runs can be chained from cron or shell
scripts:

* ``run`` executes the full pipeline against the configured feed
* ``reconstruct`` rebuilds a notice from a local image or a JSON dump of
  recognizer paragraphs, without touching the feed or the channel
* ``history`` lists the most recently published notice identifiers
"""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from .config import Settings
from .errors import DuplicateNoticeError, TandeoError
from .pipeline import JsonHistoryStore, TesseractRecognizer, build_pipeline
from .reconstruct import DocumentReconstructor, RawParagraph
from .utils.log import log_event


def _print_json(payload: Any) -> None:
    json.dump(payload, sys.stdout, ensure_ascii=False, indent=2)
    sys.stdout.write("\n")


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="tandeo", description=__doc__.splitlines()[0])
    sub = parser.add_subparsers(dest="command", required=True)

    run = sub.add_parser("run", help="Fetch, reconstruct and publish the newest notice")
    run.add_argument("--dry-run", action="store_true", help="Reconstruct only; do not publish or record")
    run.add_argument("--image-url", help="Skip the feed and process this image reference")

    reconstruct = sub.add_parser("reconstruct", help="Reconstruct a notice offline")
    source = reconstruct.add_mutually_exclusive_group(required=True)
    source.add_argument("--image", help="Local image to OCR")
    source.add_argument("--lines", help="JSON file with recognizer paragraphs (or a flat list of lines)")

    history = sub.add_parser("history", help="List recently published notice ids")
    history.add_argument("--limit", type=int, default=None)

    return parser


def load_paragraphs(path: Path) -> List[RawParagraph]:
    """Load recognizer output dumped as JSON.

    Accepts ``[{"lines": [...]}, ...]`` or a flat ``[{"text": ..., ...}, ...]``
    list, which is treated as a single paragraph.
    """

    payload = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(payload, list):
        raise ValueError(f"{path} must contain a JSON list")
    if payload and all(isinstance(item, dict) and "lines" in item for item in payload):
        return [RawParagraph.model_validate(item) for item in payload]
    return [RawParagraph.model_validate({"lines": payload})]


def _handle_run(args: argparse.Namespace, settings: Settings) -> None:
    pipeline = build_pipeline(settings, dry_run=args.dry_run, image_url=args.image_url)
    with pipeline:
        try:
            result = pipeline.run(dry_run=args.dry_run)
        except DuplicateNoticeError as exc:
            _print_json({"status": "duplicate", "id": exc.notice_id})
            return
        except TandeoError as exc:
            log_event("run.failed", {"error": type(exc).__name__, "detail": str(exc)}, level="error")
            raise SystemExit(str(exc)) from exc
    payload: Dict[str, Any] = {
        "status": "published" if result.published else "dry-run",
        "id": result.notice.id,
        "text": result.notice.text,
        "image_ref": result.image_ref,
    }
    _print_json(payload)


def _handle_reconstruct(args: argparse.Namespace, settings: Settings) -> None:
    if args.image:
        paragraphs = TesseractRecognizer(lang=settings.ocr_lang).recognize(Path(args.image))
    else:
        paragraphs = load_paragraphs(Path(args.lines))
    notice = DocumentReconstructor(settings.reconstruction).reconstruct_paragraphs(paragraphs)
    _print_json({"id": notice.id, "text": notice.text})


def _handle_history(args: argparse.Namespace, settings: Settings) -> None:
    ids = JsonHistoryStore(settings.history_path, window=settings.history_window).ids()
    if args.limit is not None and args.limit > 0:
        ids = ids[: args.limit]
    _print_json(ids)


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = _parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    settings = Settings.from_env()
    if args.command == "run":
        _handle_run(args, settings)
    elif args.command == "reconstruct":
        _handle_reconstruct(args, settings)
    elif args.command == "history":
        _handle_history(args, settings)
    else:  # pragma: no cover - argparse enforces choices
        parser.error(f"Unknown command {args.command}")


if __name__ == "__main__":  # pragma: no cover
    main()
