from __future__ import annotations

import logging
import smtplib
from dataclasses import dataclass
from email.message import EmailMessage
from typing import Optional, Protocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MailConfig:
    server: Optional[str] = None
    port: int = 587
    username: Optional[str] = None
    password: Optional[str] = None
    use_tls: bool = True
    sender: str = "HR Assistant <no-reply@localhost>"

    @classmethod
    def from_settings(cls, raw: Optional[dict]) -> "MailConfig":
        raw = raw or {}
        return cls(
            server=raw.get("server") or None,
            port=int(raw.get("port", 587)),
            username=raw.get("username") or None,
            password=raw.get("password") or None,
            use_tls=bool(raw.get("use_tls", True)),
            sender=raw.get("sender") or cls.sender,
        )


class Mailer(Protocol):
    def send(self, *, to: str, subject: str, html: str, text: Optional[str] = None) -> None:
        raise NotImplementedError


class SmtpMailer(Mailer):
    def __init__(self, config: MailConfig):
        self._config = config

    def send(self, *, to: str, subject: str, html: str, text: Optional[str] = None) -> None:
        msg = EmailMessage()
        msg["From"] = self._config.sender
        msg["To"] = to
        msg["Subject"] = subject
        msg.set_content(text or "This message requires an HTML-capable mail client.")
        msg.add_alternative(html, subtype="html")

        with smtplib.SMTP(self._config.server, self._config.port, timeout=30) as smtp:
            if self._config.use_tls:
                smtp.starttls()
            if self._config.username:
                smtp.login(self._config.username, self._config.password or "")
            smtp.send_message(msg)
        logger.info("Sent mail %r to %s", subject, to)


class LoggingMailer(Mailer):
    """Used when no mail server is configured: the message is only logged."""

    def send(self, *, to: str, subject: str, html: str, text: Optional[str] = None) -> None:
        logger.info("Mail server not configured; would send %r to %s", subject, to)


def build_mailer(config: MailConfig) -> Mailer:
    return SmtpMailer(config) if config.server else LoggingMailer()
