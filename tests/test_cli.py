# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2024 Tandeo contributors

import json
from pathlib import Path

import pytest

from tandeo import cli
from tandeo.pipeline import (
    MemoryHistoryStore,
    MockImageFetcher,
    MockImageSource,
    MockPublisher,
    MockRecognizer,
    NoticePipeline,
)
from tandeo.reconstruct import DocumentReconstructor


def _write_lines(path, payload):
    path.write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")
    return path


def test_reconstruct_from_paragraph_dump(tmp_path, capsys):
    dump = _write_lines(
        tmp_path / "lines.json",
        [
            {
                "lines": [
                    {"text": "15 de marzo de 2024", "confidence": 91, "baseline": {"x0": 10}},
                    {"text": "TURNO MATUTINO", "confidence": 88, "baseline": {"x0": 12}},
                ]
            },
            {
                "lines": [
                    {"text": "- Colonia Centro", "confidence": 77, "baseline": {"x0": 15}},
                    {"text": "anuncio publicitario", "confidence": 80, "baseline": {"x0": 400}},
                ]
            },
        ],
    )

    cli.main(["reconstruct", "--lines", str(dump)])

    payload = json.loads(capsys.readouterr().out)
    assert payload == {"id": "15-de-marzo-de-2024-matutino", "text": "- Colonia Centro"}


def test_load_paragraphs_accepts_flat_line_list(tmp_path):
    dump = _write_lines(
        tmp_path / "flat.json",
        [{"text": "15 de marzo de 2024", "confidence": 91, "baseline": {"x0": 10}}],
    )

    paragraphs = cli.load_paragraphs(dump)

    assert len(paragraphs) == 1
    assert paragraphs[0].lines[0].text == "15 de marzo de 2024"


def test_history_lists_recent_ids(tmp_path, monkeypatch, capsys):
    path = tmp_path / "history.json"
    path.write_text(json.dumps(["c", "b", "a"]), encoding="utf-8")
    monkeypatch.setenv("TANDEO_HISTORY_PATH", str(path))

    cli.main(["history", "--limit", "2"])

    assert json.loads(capsys.readouterr().out) == ["c", "b"]


@pytest.fixture
def mock_pipeline(monkeypatch, notice_paragraphs):
    built = {}

    def fake_build_pipeline(settings, *, dry_run=False, image_url=None):
        built["dry_run"] = dry_run
        built["image_url"] = image_url
        pipeline = NoticePipeline(
            source=MockImageSource(image_url or "https://cdn.example/aviso.jpg"),
            fetcher=MockImageFetcher(Path("/tmp/notice.jpg")),
            recognizer=MockRecognizer(notice_paragraphs),
            reconstructor=DocumentReconstructor(settings.reconstruction),
            publisher=MockPublisher(),
            history=built.setdefault("history", MemoryHistoryStore()),
        )
        built["pipeline"] = pipeline
        return pipeline

    monkeypatch.setattr(cli, "build_pipeline", fake_build_pipeline)
    return built


def test_run_publishes_notice(mock_pipeline, capsys):
    cli.main(["run", "--image-url", "https://cdn.example/b.jpg"])

    payload = json.loads(capsys.readouterr().out)
    assert payload["status"] == "published"
    assert payload["id"] == "15-de-marzo-de-2024-matutino"
    assert payload["image_ref"] == "https://cdn.example/b.jpg"
    assert mock_pipeline["pipeline"].publisher.messages == ["- Colonia Centro"]


def test_run_reports_duplicates(mock_pipeline, capsys):
    cli.main(["run"])
    capsys.readouterr()

    cli.main(["run"])

    payload = json.loads(capsys.readouterr().out)
    assert payload == {"status": "duplicate", "id": "15-de-marzo-de-2024-matutino"}


def test_run_dry_run(mock_pipeline, capsys):
    cli.main(["run", "--dry-run"])

    payload = json.loads(capsys.readouterr().out)
    assert payload["status"] == "dry-run"
    assert mock_pipeline["dry_run"] is True
    assert mock_pipeline["history"].ids() == []
