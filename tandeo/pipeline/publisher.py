# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2024 Tandeo contributors

"""Deliver reconstructed notices to the messaging channel."""
from __future__ import annotations

import sys
from typing import Optional, TextIO

import httpx

from ..errors import PublishError
from .http import HttpCollaborator
from .interfaces import Publisher

TELEGRAM_API_BASE = "https://api.telegram.org"


class TelegramPublisher(HttpCollaborator, Publisher):
    """Post the notice text to a Telegram chat through the Bot API."""

    def __init__(
        self,
        token: str,
        chat_id: str,
        client: Optional[httpx.Client] = None,
        timeout_sec: float = 30.0,
        api_base: str = TELEGRAM_API_BASE,
    ) -> None:
        if not token or not chat_id:
            raise ValueError("TelegramPublisher requires a bot token and a chat id")
        super().__init__(client=client, timeout_sec=timeout_sec)
        self.chat_id = chat_id
        self.endpoint = f"{api_base.rstrip('/')}/bot{token}/sendMessage"

    def publish(self, text: str) -> None:
        try:
            response = self.client.post(self.endpoint, json={"chat_id": self.chat_id, "text": text})
        except httpx.HTTPError as exc:
            raise PublishError(f"Cannot reach the messaging channel: {exc}") from exc

        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}
        if response.is_error or not body.get("ok", False):
            description = body.get("description") or response.reason_phrase
            raise PublishError(f"Messaging channel rejected the notice ({response.status_code}): {description}")


class ConsolePublisher(Publisher):
    """Write notices to a stream instead of a channel."""

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self.stream = stream or sys.stdout

    def publish(self, text: str) -> None:
        self.stream.write(text)
        self.stream.write("\n")
        self.stream.flush()
