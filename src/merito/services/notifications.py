"""Best-effort email notifications."""

from __future__ import annotations

import logging
import smtplib
from dataclasses import dataclass
from email.message import EmailMessage
from typing import Optional, Protocol

from ..core.config import Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Notification:
    to: str
    subject: str
    body: str


class Notifier(Protocol):
    def send(self, to: str, subject: str, body: str) -> None:
        ...


class SmtpNotifier:
    """Deliver plain-text mail through an SMTP relay."""

    def __init__(
        self,
        host: str,
        port: int,
        sender: str,
        *,
        username: Optional[str] = None,
        password: Optional[str] = None,
        use_tls: bool = True,
        timeout: float = 10.0,
    ) -> None:
        self.host = host
        self.port = port
        self.sender = sender
        self.username = username
        self.password = password
        self.use_tls = use_tls
        self.timeout = timeout

    def send(self, to: str, subject: str, body: str) -> None:
        message = EmailMessage()
        message["From"] = self.sender
        message["To"] = to
        message["Subject"] = subject
        message.set_content(body)

        with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as smtp:
            if self.use_tls:
                smtp.starttls()
            if self.username:
                smtp.login(self.username, self.password or "")
            smtp.send_message(message)


class LogNotifier:
    """Fallback used when no SMTP relay is configured."""

    def send(self, to: str, subject: str, body: str) -> None:
        logger.info("email to %s not sent (no SMTP host configured): %s", to, subject)


def build_notifier(settings: Settings) -> Notifier:
    if not settings.smtp_host:
        return LogNotifier()
    return SmtpNotifier(
        settings.smtp_host,
        settings.smtp_port,
        settings.mail_sender,
        username=settings.smtp_username,
        password=settings.smtp_password,
        use_tls=settings.smtp_use_tls,
    )


def deliver(notifier: Notifier, notification: Notification) -> None:
    """Send a notification, logging instead of raising on failure."""

    try:
        notifier.send(notification.to, notification.subject, notification.body)
    except Exception:
        logger.exception("failed to send notification to %s", notification.to)
