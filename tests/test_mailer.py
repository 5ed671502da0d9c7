import email
import smtplib
from dataclasses import dataclass, field
from unittest.mock import patch

import pytest

from yearning_notify.mail_message import MailMessage
from yearning_notify.mailer import MailerConfig, send, send_mail
from yearning_notify.messagex import File, Message, MessageType, Target


@dataclass
class Server:
    features: set = field(default_factory=set)
    rcpt_code: int = 250
    sessions: list = field(default_factory=list)


class FakeSMTP:
    def __init__(self, server, kind, host, port, timeout=None, context=None):
        self.server = server
        self.kind = kind
        self.host = host
        self.port = port
        self.timeout = timeout
        self.calls = []
        self.data_bytes = None
        self.closed = False

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.closed = True
        return False

    def ehlo_or_helo_if_needed(self):
        self.calls.append(("ehlo",))

    def ehlo(self):
        self.calls.append(("ehlo",))

    def has_extn(self, name):
        return name.lower() in self.server.features

    def starttls(self, context=None):
        self.calls.append(("starttls",))

    def login(self, user, password):
        self.calls.append(("login", user, password))

    def mail(self, sender):
        self.calls.append(("mail", sender))
        return 250, b"ok"

    def rcpt(self, address):
        self.calls.append(("rcpt", address))
        return self.server.rcpt_code, b"reply"

    def data(self, msg):
        self.calls.append(("data",))
        self.data_bytes = msg
        return 250, b"ok"


@pytest.fixture
def server():
    srv = Server()

    def factory(kind):
        def make(host, port, **kwargs):
            session = FakeSMTP(srv, kind, host, port, **kwargs)
            srv.sessions.append(session)
            return session

        return make

    with patch("smtplib.SMTP", factory("plain")), patch(
        "smtplib.SMTP_SSL", factory("ssl")
    ):
        yield srv


def test_send_over_implicit_tls(server):
    config = MailerConfig(addr="smtp.example.com:465", user="sender@example.com")
    message = MailMessage(
        to=["rcpt@example.com"], subject="Subject", body="<p>hello</p>", type="text/html"
    )
    result = send_mail(config, message)
    assert result is None
    (session,) = server.sessions
    assert session.kind == "ssl"
    assert (session.host, session.port) == ("smtp.example.com", 465)
    assert session.timeout is None
    assert ("mail", "sender@example.com") in session.calls
    assert ("rcpt", "rcpt@example.com") in session.calls
    assert session.closed
    parsed = email.message_from_bytes(session.data_bytes)
    assert parsed["From"] == "<sender@example.com>"
    assert parsed.get_content_type() == "text/html"


def test_starttls_and_login_when_advertised(server):
    server.features = {"starttls", "auth"}
    password = "password"
    config = MailerConfig(
        addr="mail.example.com:587",
        name="Robot",
        user="robot@example.com",
        password=password,
        timeout=5,
    )
    result = send_mail(config, MailMessage(to=["a@example.com"], body="hi"))
    assert result is None
    (session,) = server.sessions
    assert session.kind == "plain"
    assert session.timeout == 5
    assert session.calls.index(("starttls",)) < session.calls.index(
        ("login", "robot@example.com", "password")
    )
    parsed = email.message_from_bytes(session.data_bytes)
    assert parsed["From"] == '"Robot" <robot@example.com>'
    assert parsed.get_content_type() == "text/plain"


def test_ssl_flag_forces_tls(server):
    result = send_mail(
        MailerConfig(addr="mail.example.com:25", ssl=True, user="s@example.com"),
        MailMessage(to=["a@example.com"]),
    )
    assert result is None
    assert server.sessions[0].kind == "ssl"
    assert ("login", "s@example.com", "") not in server.sessions[0].calls


def test_refused_recipient_raises(server):
    server.rcpt_code = 550
    with pytest.raises(smtplib.SMTPRecipientsRefused):
        send_mail(
            MailerConfig(addr="mail.example.com:25", user="s@example.com"),
            MailMessage(to=["nobody@example.com"]),
        )
    assert server.sessions[0].data_bytes is None


def test_missing_port_raises():
    with pytest.raises(ValueError):
        send_mail(MailerConfig(addr="mail.example.com"), MailMessage())


def test_caller_message_is_not_changed(server):
    message = MailMessage(to=["a@example.com"])
    send_mail(MailerConfig(addr="mail.example.com:25", user="s@example.com"), message)
    assert message.from_address == ""
    assert message.type == ""
    assert b"charset=utf-8" in server.sessions[0].data_bytes


def test_send_converts_channel_message(server):
    msg = Message(
        type=MessageType.HTML,
        subject="Order",
        body="<b>done</b>",
        target=Target(emails=["ops@example.com", "dba@example.com"]),
        files=[File(name="log.txt", data=b"line one\n")],
    )
    result = send(MailerConfig(addr="mail.example.com:25", user="s@example.com"), msg)
    assert result is None
    session = server.sessions[0]
    assert [c[1] for c in session.calls if c[0] == "rcpt"] == [
        "ops@example.com",
        "dba@example.com",
    ]
    parsed = email.message_from_bytes(session.data_bytes)
    body, attachment = parsed.get_payload()
    assert body.get_content_type() == "text/html"
    assert attachment.get_payload(decode=True) == b"line one\n"


def test_send_defaults_to_plain_text(server):
    result = send(
        MailerConfig(addr="mail.example.com:25", user="s@example.com"),
        Message(body="hi", target=Target(emails=["a@example.com"])),
    )
    assert result is None
    parsed = email.message_from_bytes(server.sessions[0].data_bytes)
    assert parsed.get_content_type() == "text/plain"
    assert not parsed.is_multipart()