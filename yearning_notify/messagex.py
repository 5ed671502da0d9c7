"""Channel-independent notification message model."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class MessageType(str, Enum):
    """Kinds of message a notification channel may render."""

    MARKDOWN = "markdown"
    TEXT = "text"
    HTML = "html"
    IMAGE = "image"
    FILE = "file"
    LINK = "link"
    ACTION_CARD = "actionCard"
    FEED_CARD = "FeedCard"


@dataclass
class Target:
    """Who a message is addressed to."""

    all: bool = False
    users: list[str] = field(default_factory=list)
    emails: list[str] = field(default_factory=list)
    open_ids: list[str] = field(default_factory=list)
    mobiles: list[str] = field(default_factory=list)


@dataclass
class Param:
    """A named, optionally coloured value shown in a message."""

    name: str = ""
    value: str = ""
    color: str = ""


@dataclass
class File:
    """A file carried along with a message."""

    name: str = ""
    data: bytes = b""
    inline: bool = False


@dataclass
class AppInfo:
    """The application a message is sent on behalf of."""

    name: str = ""
    url: str = ""
    icon_url: str = ""


@dataclass
class Source:
    """A person or object a message refers to."""

    name: str = ""
    email: str = ""
    open_id: str = ""
    mobile: str = ""
    kind: str = ""
    title: str = ""
    phrase: str = ""


@dataclass
class Message:
    """A notification, independent of the channel that delivers it.

    ``type`` is normally a :class:`MessageType`; an empty string means
    the channel's default kind.
    """

    type: MessageType | str = ""
    subject: str = ""
    body: str = ""
    link: str = ""
    image_url: str = ""
    target: Target = field(default_factory=Target)
    files: list[File] = field(default_factory=list)
    params: list[Param] = field(default_factory=list)
    app: AppInfo | None = None
    sources: list[Source] = field(default_factory=list)