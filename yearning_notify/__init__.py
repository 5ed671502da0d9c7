"""Notification channels (DingTalk, WeCom, SMTP, webhooks) and approval-workflow helpers."""

__version__ = "0.1.0"

__all__ = [
    "dashboard",
    "ding",
    "filters",
    "forms",
    "mail_message",
    "mailer",
    "messagex",
    "qywx",
    "response",
    "stringx",
    "webhook",
    "workflow",
]