# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2024 Tandeo contributors

"""Transfer the notice image to local storage."""
from __future__ import annotations

from pathlib import Path
from typing import Optional
from urllib.parse import urlparse
from urllib.request import url2pathname

import httpx
from PIL import Image, UnidentifiedImageError

from ..errors import ImageTransferError
from .http import HttpCollaborator
from .interfaces import ImageFetcher

_DOWNLOAD_CHUNK_BYTES = 64 * 1024
_KNOWN_SUFFIXES = {".png", ".jpg", ".jpeg", ".gif", ".webp", ".bmp", ".tif", ".tiff"}


def _verify_image(path: Path) -> None:
    try:
        with Image.open(path) as image:
            image.verify()
    except (OSError, UnidentifiedImageError) as exc:
        raise ImageTransferError(f"{path} is not a readable image: {exc}") from exc


class HttpImageFetcher(HttpCollaborator, ImageFetcher):
    """Download images into ``download_dir``.

    Remote images are streamed to ``notice<suffix>`` (overwriting the previous
    run's file). Local paths and ``file://`` references are verified and
    returned unchanged.
    """

    def __init__(
        self,
        download_dir: Path,
        client: Optional[httpx.Client] = None,
        timeout_sec: float = 30.0,
    ) -> None:
        super().__init__(client=client, timeout_sec=timeout_sec)
        self.download_dir = Path(download_dir)

    def _target_path(self, reference: str) -> Path:
        suffix = Path(urlparse(reference).path).suffix.lower()
        if suffix not in _KNOWN_SUFFIXES:
            suffix = ".img"
        return self.download_dir / f"notice{suffix}"

    def _download(self, reference: str) -> Path:
        target = self._target_path(reference)
        tmp = target.with_suffix(target.suffix + ".part")
        try:
            self.download_dir.mkdir(parents=True, exist_ok=True)
            with self.client.stream("GET", reference) as response:
                response.raise_for_status()
                with open(tmp, "wb") as fw:
                    for chunk in response.iter_bytes(_DOWNLOAD_CHUNK_BYTES):
                        fw.write(chunk)
            tmp.replace(target)
        except httpx.HTTPError as exc:
            tmp.unlink(missing_ok=True)
            raise ImageTransferError(f"Cannot download {reference}: {exc}") from exc
        except OSError as exc:
            tmp.unlink(missing_ok=True)
            raise ImageTransferError(f"Cannot store {reference} in {self.download_dir}: {exc}") from exc
        return target

    def fetch(self, reference: str) -> Path:
        parsed = urlparse(reference)
        if parsed.scheme in {"http", "https"}:
            path = self._download(reference)
        elif parsed.scheme == "file":
            path = Path(url2pathname(parsed.path))
        else:
            path = Path(reference)

        if not path.is_file():
            raise ImageTransferError(f"Image {reference} is not available locally")
        _verify_image(path)
        return path
