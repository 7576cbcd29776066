# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2024 Tandeo contributors

"""Shared httpx client ownership for HTTP-backed collaborators."""
from __future__ import annotations

from typing import Optional

import httpx

DEFAULT_USER_AGENT = "tandeo/0.1 (+water outage notice republisher)"


class HttpCollaborator:
    """Hold an ``httpx.Client``; close it only when it was created here."""

    def __init__(self, client: Optional[httpx.Client] = None, timeout_sec: float = 30.0) -> None:
        self._owns_client = client is None
        self.client = client or httpx.Client(
            timeout=httpx.Timeout(timeout_sec),
            follow_redirects=True,
            headers={"User-Agent": DEFAULT_USER_AGENT},
        )

    def close(self) -> None:
        if self._owns_client:
            self.client.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
