"""Delivery of e-mail over SMTP."""

from __future__ import annotations

import smtplib
import ssl
from dataclasses import dataclass, replace

from .mail_message import HTML, TEXT, Attachment, MailMessage
from .messagex import Message, MessageType


@dataclass
class MailerConfig:
    """SMTP server address and account.

    ``addr`` is ``host:port``; port 465 or ``ssl`` selects implicit TLS.
    ``timeout`` is in seconds, 0 meaning no limit.
    """

    addr: str = ""
    name: str = ""
    user: str = ""
    password: str = ""
    ssl: bool = False
    insecure: bool = False
    timeout: int = 0


def _split_host_port(addr: str) -> tuple[str, str]:
    if addr.startswith("["):
        end = addr.find("]")
        if end < 0 or not addr[end + 1 :].startswith(":"):
            raise ValueError(f"missing port in address {addr!r}")
        return addr[1:end], addr[end + 2 :]
    host, sep, port = addr.rpartition(":")
    if not sep:
        raise ValueError(f"missing port in address {addr!r}")
    if ":" in host:
        raise ValueError(f"too many colons in address {addr!r}")
    return host, port


def _tls_context(insecure: bool) -> ssl.SSLContext:
    context = ssl.create_default_context()
    if insecure:
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE
    return context


def send_mail(config: MailerConfig, message: MailMessage) -> None:
    """Send ``message`` through the configured server; raise on any failure."""
    host, port = _split_host_port(config.addr)
    port_number = int(port)
    timeout = config.timeout if config.timeout > 0 else None
    context = _tls_context(config.insecure)

    outgoing = message
    if not outgoing.from_address:
        outgoing = replace(outgoing, from_name=config.name, from_address=config.user)
    if not outgoing.type:
        outgoing = replace(outgoing, type=TEXT)

    if port == "465" or config.ssl:
        client = smtplib.SMTP_SSL(host, port_number, timeout=timeout, context=context)
    else:
        client = smtplib.SMTP(host, port_number, timeout=timeout)

    with client as smtp:
        smtp.ehlo_or_helo_if_needed()
        if smtp.has_extn("starttls"):
            smtp.starttls(context=context)
            smtp.ehlo()
        if smtp.has_extn("auth"):
            smtp.login(config.user, config.password)
        code, reply = smtp.mail(config.user)
        if code != 250:
            raise smtplib.SMTPSenderRefused(code, reply, config.user)
        for address in outgoing.recipients():
            code, reply = smtp.rcpt(address)
            if code not in (250, 251):
                raise smtplib.SMTPRecipientsRefused({address: (code, reply)})
        smtp.data(outgoing.to_bytes())


def send(config: MailerConfig, msg: Message) -> None:
    """Send a channel-independent message to its e-mail targets."""
    message = MailMessage(
        to=list(msg.target.emails),
        subject=msg.subject,
        body=msg.body,
        type=HTML if msg.type == MessageType.HTML else TEXT,
        attachments={
            file.name: Attachment(file.name, file.data, file.inline)
            for file in msg.files
        },
    )
    send_mail(config, message)