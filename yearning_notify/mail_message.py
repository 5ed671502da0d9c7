"""Composition of plain-text and HTML e-mail with attachments."""

from __future__ import annotations

import base64
import mimetypes
import os
from dataclasses import dataclass, field
from datetime import datetime
from email.utils import format_datetime, getaddresses
from pathlib import Path

TEXT = "text/plain"
HTML = "text/html"
BOUNDARY = "f46d043c813270fc6b04c2d223da"

_CRLF = "\r\n"
_LINE_LENGTH = 76


@dataclass
class Attachment:
    """A file carried by a message, either attached or inline."""

    filename: str
    data: bytes
    inline: bool = False


@dataclass
class Header:
    """An additional message header."""

    key: str
    value: str


def _encoded_word(text: str) -> str:
    return "=?UTF-8?B?" + base64.b64encode(text.encode("utf-8")).decode("ascii") + "?="


def _format_address(name: str, address: str) -> str:
    angle = f"<{address}>"
    if not name:
        return angle
    if all(" " <= ch <= "~" or ch == "\t" for ch in name):
        quoted = name.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{quoted}" {angle}'
    return f"{_encoded_word(name)} {angle}"


def _addresses(entries: list[str]) -> list[str]:
    joined = ",".join(entries)
    if not joined.strip():
        return []
    parsed = getaddresses([joined])
    if any("@" not in address for _, address in parsed):
        return []
    return [address for _, address in parsed]


def _mime_type(filename: str) -> str:
    ext = os.path.splitext(filename)[1]
    if not ext:
        return "application/octet-stream"
    guessed, _ = mimetypes.guess_type("attachment" + ext)
    return guessed or "application/octet-stream"


def _wrapped_base64(data: bytes) -> bytes:
    encoded = base64.b64encode(data)
    out = bytearray()
    for start in range(0, len(encoded), _LINE_LENGTH):
        chunk = encoded[start : start + _LINE_LENGTH]
        out += chunk
        if len(chunk) == _LINE_LENGTH:
            out += b"\r\n"
    return bytes(out)


@dataclass
class MailMessage:
    """An outgoing e-mail message."""

    from_name: str = ""
    from_address: str = ""
    to: list[str] = field(default_factory=list)
    cc: list[str] = field(default_factory=list)
    bcc: list[str] = field(default_factory=list)
    reply_to: str = ""
    subject: str = ""
    body: str = ""
    type: str = ""
    headers: list[Header] = field(default_factory=list)
    attachments: dict[str, Attachment] = field(default_factory=dict)

    def add_to(self, name: str, address: str) -> list[str]:
        """Add a primary recipient and return all of them."""
        self.to.append(_format_address(name, address))
        return self.to

    def add_cc(self, name: str, address: str) -> list[str]:
        """Add a copy recipient and return all of them."""
        self.cc.append(_format_address(name, address))
        return self.cc

    def add_bcc(self, name: str, address: str) -> list[str]:
        """Add a blind-copy recipient and return all of them."""
        self.bcc.append(_format_address(name, address))
        return self.bcc

    def attach_buffer(self, filename: str, data: bytes, inline: bool = False) -> None:
        """Attach in-memory data under ``filename``."""
        self.attachments[filename] = Attachment(filename, bytes(data), inline)

    def _attach_file(self, path: str | os.PathLike[str], inline: bool) -> None:
        file = Path(path)
        self.attach_buffer(file.name, file.read_bytes(), inline)

    def attach(self, path: str | os.PathLike[str]) -> None:
        """Attach the file at ``path``."""
        self._attach_file(path, False)

    def inline(self, path: str | os.PathLike[str]) -> None:
        """Include the file at ``path`` as an inline attachment."""
        self._attach_file(path, True)

    def add_header(self, key: str, value: str) -> Header:
        """Add a custom header and return it."""
        header = Header(key, value)
        self.headers.append(header)
        return header

    def recipients(self) -> list[str]:
        """Bare addresses of every To, Cc and Bcc recipient.

        A group whose addresses cannot all be parsed contributes nothing.
        """
        return [
            address
            for group in (self.to, self.cc, self.bcc)
            for address in _addresses(group)
        ]

    def to_bytes(self, now: datetime | None = None) -> bytes:
        """The message as it is handed to the mail server."""
        when = datetime.now().astimezone() if now is None else now
        if when.tzinfo is None:
            when = when.astimezone()
        out = bytearray()

        def write(text: str) -> None:
            out.extend(text.encode("utf-8"))

        write("From: " + _format_address(self.from_name, self.from_address) + _CRLF)
        write("Date: " + format_datetime(when) + _CRLF)
        write("To: " + ",".join(self.to) + _CRLF)
        if self.cc:
            write("Cc: " + ",".join(self.cc) + _CRLF)
        write("Subject: " + _encoded_word(self.subject) + _CRLF)
        if self.reply_to:
            write("Reply-To: " + self.reply_to + _CRLF)
        write("MIME-Version: 1.0" + _CRLF)
        for header in self.headers:
            write(f"{header.key}: {header.value}{_CRLF}")

        if self.attachments:
            write(f"Content-Type: multipart/mixed; boundary={BOUNDARY}{_CRLF}")
            write(f"{_CRLF}--{BOUNDARY}{_CRLF}")

        write(f"Content-Type: {self.type}; charset=utf-8{_CRLF}{_CRLF}")
        write(self.body)
        write(_CRLF)

        if self.attachments:
            for attachment in self.attachments.values():
                write(f"{_CRLF}{_CRLF}--{BOUNDARY}{_CRLF}")
                if attachment.inline:
                    write("Content-Type: message/rfc822" + _CRLF)
                    write(
                        'Content-Disposition: inline; filename="'
                        + attachment.filename
                        + '"'
                        + _CRLF
                        + _CRLF
                    )
                    out.extend(attachment.data)
                else:
                    write(f"Content-Type: {_mime_type(attachment.filename)}{_CRLF}")
                    write("Content-Transfer-Encoding: base64" + _CRLF)
                    write(
                        'Content-Disposition: attachment; filename="'
                        + _encoded_word(attachment.filename)
                        + '"'
                        + _CRLF
                        + _CRLF
                    )
                    out.extend(_wrapped_base64(attachment.data))
                write(f"{_CRLF}--{BOUNDARY}")
            write("--")

        return bytes(out)


def new_message(subject: str, body: str) -> MailMessage:
    """A plain-text message."""
    return MailMessage(subject=subject, body=body, type=TEXT)


def new_html_message(subject: str, body: str) -> MailMessage:
    """An HTML message."""
    return MailMessage(subject=subject, body=body, type=HTML)