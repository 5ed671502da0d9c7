"""Plain HTTP webhook delivery."""

from __future__ import annotations

import urllib.error
import urllib.request
from dataclasses import dataclass
from http import HTTPStatus
from typing import BinaryIO, Union

Payload = Union[bytes, str, BinaryIO, None]


@dataclass
class WebhookConfig:
    """Where and how a webhook request is sent."""

    url: str = ""
    method: str = ""
    type: str = ""


class WebhookError(Exception):
    """The webhook endpoint answered with a status other than 200."""

    def __init__(self, status: int) -> None:
        self.status = status
        super().__init__(f"http request failed status code {status}")


def _body(data: Payload) -> bytes | None:
    if data is None:
        return None
    if isinstance(data, bytes):
        return data
    if isinstance(data, str):
        return data.encode("utf-8")
    return data.read()


def send(config: WebhookConfig, data: Payload) -> None:
    """Send ``data`` to the configured URL; raise unless the reply is 200 OK."""
    request = urllib.request.Request(
        config.url, data=_body(data), method=config.method or "POST"
    )
    if config.type:
        request.add_header("Content-Type", config.type)
    try:
        with urllib.request.urlopen(request) as response:
            status = response.status
    except urllib.error.HTTPError as exc:
        status = exc.code
        exc.close()
    if status != HTTPStatus.OK:
        raise WebhookError(status)