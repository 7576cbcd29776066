# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2024 Tandeo contributors

"""Locate the newest notice image on the public feed."""
from __future__ import annotations

from typing import Optional
from urllib.parse import urljoin

import httpx
from bs4 import BeautifulSoup

from ..errors import FeedAccessError
from .http import HttpCollaborator
from .interfaces import ImageSource


class StaticImageSource(ImageSource):
    """Return a fixed image reference, for manual runs."""

    def __init__(self, reference: str) -> None:
        self.reference = reference

    def locate(self) -> str:
        return self.reference


class HtmlFeedImageSource(HttpCollaborator, ImageSource):
    """Pick the first image of a feed page.

    The first element matching ``selector`` wins (its ``src`` or ``href``);
    when nothing matches, the page's ``og:image`` meta tag is used. Relative
    references are resolved against the final feed URL.
    """

    def __init__(
        self,
        feed_url: str,
        selector: str = "img",
        client: Optional[httpx.Client] = None,
        timeout_sec: float = 30.0,
    ) -> None:
        super().__init__(client=client, timeout_sec=timeout_sec)
        self.feed_url = feed_url
        self.selector = selector

    def _read_feed(self) -> httpx.Response:
        try:
            response = self.client.get(self.feed_url)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise FeedAccessError(f"Cannot read feed {self.feed_url}: {exc}") from exc
        return response

    def locate(self) -> str:
        response = self._read_feed()
        soup = BeautifulSoup(response.text, "lxml")

        reference: Optional[str] = None
        element = soup.select_one(self.selector)
        if element is not None:
            reference = element.get("src") or element.get("href")
        if not reference:
            meta = soup.find("meta", attrs={"property": "og:image"})
            if meta is not None:
                reference = meta.get("content")
        if not reference:
            raise FeedAccessError(
                f"No notice image found on {self.feed_url} (selector {self.selector!r})"
            )
        return urljoin(str(response.url), str(reference).strip())
