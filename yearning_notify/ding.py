"""DingTalk custom-robot notifications."""

from __future__ import annotations

import base64
import hashlib
import hmac
import json
import time
from dataclasses import dataclass
from typing import Any

from . import webhook
from .messagex import Message, MessageType, Target

TYPE_MARKDOWN = "markdown"
TYPE_TEXT = "text"
TYPE_LINK = "link"
TYPE_ACTION_CARD = "actionCard"
TYPE_FEED_CARD = "FeedCard"

DEFAULT_URL = "https://oapi.dingtalk.com/robot/send?access_token="

_TYPE_MAPPING = {
    MessageType.TEXT: TYPE_TEXT,
    MessageType.MARKDOWN: TYPE_MARKDOWN,
    MessageType.LINK: TYPE_LINK,
    MessageType.ACTION_CARD: TYPE_ACTION_CARD,
    MessageType.FEED_CARD: TYPE_FEED_CARD,
}


@dataclass
class DingConfig:
    """Robot endpoint and credentials.

    An empty ``url`` or the word ``"ding"`` selects the public robot
    endpoint with ``token`` as its access token.
    """

    url: str = ""
    secret: str = ""
    token: str = ""


def is_ding_url(url: str) -> bool:
    """Whether ``url`` points at the DingTalk open API."""
    return url.startswith("https://oapi.dingtalk.com")


def hmac_sha256(string_to_sign: str, secret: str) -> str:
    """Base64 of the HMAC-SHA256 of ``string_to_sign`` keyed by ``secret``."""
    digest = hmac.new(
        secret.encode("utf-8"), string_to_sign.encode("utf-8"), hashlib.sha256
    ).digest()
    return base64.b64encode(digest).decode("ascii")


def sign(secret: str, raw_url: str, timestamp: int | None = None) -> str:
    """Append the signed timestamp parameters to ``raw_url``.

    ``timestamp`` is in milliseconds; the current time is used when omitted.
    """
    if timestamp is None:
        timestamp = time.time_ns() // 1_000_000
    signature = hmac_sha256(f"{timestamp}\n{secret}", secret)
    return f"{raw_url}&timestamp={timestamp}&sign={signature}"


def build_at(target: Target) -> dict[str, Any] | None:
    """The ``at`` block for ``target``, or None when nobody is mentioned."""
    if not target.mobiles and not target.open_ids and not target.all:
        return None
    if target.all:
        return {"isAtAll": True}
    at: dict[str, Any] = {}
    if target.mobiles:
        at["atMobiles"] = list(target.mobiles)
    if target.open_ids:
        at["atUserIds"] = list(target.open_ids)
    at["isAtAll"] = False
    return at


def _msgtype(kind: MessageType | str) -> str:
    try:
        return _TYPE_MAPPING.get(MessageType(kind), TYPE_TEXT)
    except ValueError:
        return TYPE_TEXT


def build_payload(msg: Message) -> dict[str, Any]:
    """The JSON body the robot endpoint expects for ``msg``."""
    msgtype = _msgtype(msg.type)
    is_text = msgtype == TYPE_TEXT
    fields = {
        "content": msg.body if is_text else "",
        "title": msg.subject,
        "text": "" if is_text else msg.body,
        "messageUrl": msg.link,
        "picUrl": msg.image_url,
    }
    payload: dict[str, Any] = {
        "msgtype": msgtype,
        msgtype: {key: value for key, value in fields.items() if value},
    }
    at = build_at(msg.target)
    if at is not None:
        payload["at"] = at
    return payload


def send(config: DingConfig, msg: Message) -> None:
    """Deliver ``msg`` through the robot; raise on any failure."""
    url = config.url
    if url in ("", "ding"):
        url = DEFAULT_URL + config.token
    if config.secret:
        url = sign(config.secret, url)
    hook = webhook.WebhookConfig(
        url=url, method="POST", type="application/json; charset=utf-8"
    )
    body = json.dumps(build_payload(msg), ensure_ascii=False).encode("utf-8")
    webhook.send(hook, body)