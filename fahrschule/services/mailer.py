"""SMTP transport for outgoing notification emails.

Port 465 uses implicit TLS (``SMTP_SSL``). Any other port connects in
plaintext and upgrades with STARTTLS when the server offers it.

``send()`` blocks; async callers run it with ``asyncio.to_thread``.
"""

from __future__ import annotations

import smtplib
import ssl
from dataclasses import dataclass
from email.message import EmailMessage
from email.utils import formataddr

import structlog

from fahrschule.config import settings

logger = structlog.get_logger()

IMPLICIT_TLS_PORT = 465


@dataclass(frozen=True)
class OutgoingEmail:
    to: str
    subject: str
    text: str
    html: str


class SMTPTransport:
    """Connection settings for the SMTP relay. Holds no connection state,
    so one instance is shared across requests."""

    def __init__(
        self,
        host: str,
        port: int,
        username: str = "",
        password: str = "",
        sender_name: str = "",
        timeout: float = 30.0,
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.sender_name = sender_name
        self.timeout = timeout

    @classmethod
    def from_settings(cls) -> SMTPTransport:
        return cls(
            host=settings.EMAIL_HOST,
            port=settings.EMAIL_PORT,
            username=settings.EMAIL_USER,
            password=settings.EMAIL_PASS,
            sender_name=settings.SENDER_NAME,
            timeout=settings.EMAIL_TIMEOUT,
        )

    @property
    def implicit_tls(self) -> bool:
        return self.port == IMPLICIT_TLS_PORT

    @property
    def sender(self) -> str:
        return formataddr((self.sender_name, self.username)) if self.sender_name else self.username

    def build_message(self, email: OutgoingEmail) -> EmailMessage:
        """Build a multipart/alternative message (plain text + HTML)."""
        msg = EmailMessage()
        msg["Subject"] = email.subject
        msg["From"] = self.sender
        msg["To"] = email.to
        msg.set_content(email.text)
        msg.add_alternative(email.html, subtype="html")
        return msg

    def _connect(self) -> smtplib.SMTP:
        if self.implicit_tls:
            return smtplib.SMTP_SSL(
                self.host, self.port, context=ssl.create_default_context(), timeout=self.timeout
            )
        return smtplib.SMTP(self.host, self.port, timeout=self.timeout)

    def _upgrade(self, server: smtplib.SMTP) -> None:
        """Switch a plaintext connection to TLS when the server offers STARTTLS."""
        if self.implicit_tls:
            return
        server.ehlo()
        if server.has_extn("starttls"):
            server.starttls(context=ssl.create_default_context())
            server.ehlo()

    def send(self, email: OutgoingEmail) -> None:
        """Deliver one email. Raises ``smtplib.SMTPException`` or ``OSError`` on failure."""
        msg = self.build_message(email)
        with self._connect() as server:
            self._upgrade(server)
            if self.username and self.password:
                server.login(self.username, self.password)
            server.send_message(msg)
        logger.info("email_sent", to=email.to, host=self.host)
