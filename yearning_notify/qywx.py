"""WeCom (enterprise WeChat) group-robot notifications."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from . import webhook
from .messagex import Message, MessageType

TYPE_MARKDOWN = "markdown"
TYPE_TEXT = "text"
TYPE_IMAGE = "image"
TYPE_NEWS = "news"
TYPE_FILE = "file"
TYPE_TEMPLATE_CARD = "template_card"

DEFAULT_URL = "https://qyapi.weixin.qq.com/cgi-bin/webhook/send?key="

_TYPE_MAPPING = {
    MessageType.TEXT: TYPE_TEXT,
    MessageType.MARKDOWN: TYPE_MARKDOWN,
    MessageType.IMAGE: TYPE_IMAGE,
    MessageType.LINK: TYPE_NEWS,
    MessageType.FILE: TYPE_FILE,
    MessageType.ACTION_CARD: TYPE_TEMPLATE_CARD,
}


@dataclass
class QywxConfig:
    """Robot endpoint and credentials.

    An empty ``url`` or the word ``"qywx"`` selects the public robot
    endpoint with ``token`` as its key.
    """

    url: str = ""
    secret: str = ""
    token: str = ""


def is_qywx_url(url: str) -> bool:
    """Whether ``url`` points at the WeCom API."""
    return url.startswith("https://qyapi.weixin.qq.com")


def _msgtype(kind: MessageType | str) -> str:
    try:
        return _TYPE_MAPPING.get(MessageType(kind), TYPE_TEXT)
    except ValueError:
        return TYPE_TEXT


def _text(msg: Message) -> dict[str, Any]:
    if msg.target.all:
        user_ids, mobiles = ["@all"], []
    else:
        user_ids, mobiles = list(msg.target.open_ids), list(msg.target.mobiles)
    block: dict[str, Any] = {}
    if msg.body:
        block["content"] = msg.body
    if user_ids:
        block["mentioned_list"] = user_ids
    if mobiles:
        block["mentioned_mobile_list"] = mobiles
    return block


def _template_card(msg: Message) -> dict[str, Any]:
    card: dict[str, Any] = {"card_type": "text_notice"}
    if msg.app is not None:
        source: dict[str, Any] = {}
        if msg.app.icon_url:
            source["icon_url"] = msg.app.icon_url
        if msg.app.name:
            source["desc"] = msg.app.name
        source["desc_color"] = 1
        card["source"] = source
    if msg.subject:
        card["main_title"] = {"title": msg.subject}
    horizontal = []
    for item in msg.sources:
        if item.kind and item.name:
            horizontal.append({"keyname": item.kind, "value": item.name})
        if item.title and item.phrase:
            horizontal.append({"keyname": item.title, "value": item.phrase})
    if horizontal:
        card["horizontal_content_list"] = horizontal
    card["jump_list"] = None
    card["card_action"] = None
    return card


def build_payload(msg: Message) -> dict[str, Any]:
    """The JSON body the robot endpoint expects for ``msg``."""
    msgtype = _msgtype(msg.type)
    payload: dict[str, Any] = {"msgtype": msgtype}
    if msgtype == TYPE_TEXT:
        payload["text"] = _text(msg)
    elif msgtype == TYPE_MARKDOWN:
        payload["markdown"] = _text(msg)
    elif msgtype == TYPE_TEMPLATE_CARD:
        payload["template_card"] = _template_card(msg)
    return payload


def send(config: QywxConfig, msg: Message) -> None:
    """Deliver ``msg`` through the robot; raise on any failure."""
    url = config.url
    if url in ("", "qywx"):
        url = DEFAULT_URL + config.token
    hook = webhook.WebhookConfig(
        url=url, method="POST", type="application/json; charset=utf-8"
    )
    body = json.dumps(build_payload(msg), ensure_ascii=False).encode("utf-8")
    webhook.send(hook, body)