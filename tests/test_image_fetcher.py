# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2024 Tandeo contributors

import io

import httpx
import pytest
from PIL import Image

from tandeo.errors import ImageTransferError
from tandeo.pipeline import HttpImageFetcher


def _png_bytes():
    buffer = io.BytesIO()
    Image.new("RGB", (20, 10), color="white").save(buffer, format="PNG")
    return buffer.getvalue()


def _client(status=200, content=b""):
    def handler(request):
        return httpx.Response(status, content=content)

    return httpx.Client(transport=httpx.MockTransport(handler))


def test_remote_image_is_downloaded_into_download_dir(tmp_path):
    payload = _png_bytes()
    fetcher = HttpImageFetcher(tmp_path / "downloads", client=_client(content=payload))

    path = fetcher.fetch("https://cdn.example/media/aviso.png?size=large")

    assert path == tmp_path / "downloads" / "notice.png"
    assert path.read_bytes() == payload
    assert not (tmp_path / "downloads" / "notice.png.part").exists()


def test_unknown_suffix_gets_generic_name(tmp_path):
    fetcher = HttpImageFetcher(tmp_path, client=_client(content=_png_bytes()))

    assert fetcher.fetch("https://cdn.example/photo?id=42").name == "notice.img"


def test_http_error_raises_image_transfer_error(tmp_path):
    fetcher = HttpImageFetcher(tmp_path, client=_client(status=404))

    with pytest.raises(ImageTransferError):
        fetcher.fetch("https://cdn.example/aviso.jpg")
    assert not (tmp_path / "notice.jpg").exists()


def test_non_image_payload_is_rejected(tmp_path):
    fetcher = HttpImageFetcher(tmp_path, client=_client(content=b"<html>login required</html>"))

    with pytest.raises(ImageTransferError):
        fetcher.fetch("https://cdn.example/aviso.jpg")


def test_local_image_is_returned_unchanged(tmp_path):
    local = tmp_path / "aviso.png"
    local.write_bytes(_png_bytes())
    fetcher = HttpImageFetcher(tmp_path / "downloads", client=_client())

    assert fetcher.fetch(str(local)) == local
    assert fetcher.fetch(local.as_uri()) == local


def test_missing_local_image_raises(tmp_path):
    fetcher = HttpImageFetcher(tmp_path, client=_client())

    with pytest.raises(ImageTransferError):
        fetcher.fetch(str(tmp_path / "missing.png"))
