from __future__ import annotations

import logging
import re
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Optional

log = logging.getLogger(__name__)

_TAG_RE = re.compile(r"<[^>]*>")


def html_to_text(html: str) -> str:
    return _TAG_RE.sub("", html)


class Mailer:
    """Outbound email transport. `send` returns True when the message was accepted."""

    def send(self, to: str, subject: str, html: str, text: Optional[str] = None) -> bool:
        raise NotImplementedError


class SmtpMailer(Mailer):
    def __init__(self, host: str, port: int, username: str, password: str,
                 sender: Optional[str] = None, timeout: float = 15.0):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.sender = sender or username
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings) -> "SmtpMailer":
        return cls(
            host=settings.SMTP_HOST,
            port=settings.SMTP_PORT,
            username=settings.SMTP_USER,
            password=settings.SMTP_PASSWORD,
            sender=settings.EMAIL_FROM or None,
            timeout=settings.SMTP_TIMEOUT,
        )

    def build_message(self, to: str, subject: str, html: str, text: Optional[str] = None) -> MIMEMultipart:
        msg = MIMEMultipart("alternative")
        msg["From"] = self.sender
        msg["To"] = to
        msg["Subject"] = subject
        msg.attach(MIMEText(text or html_to_text(html), "plain"))
        msg.attach(MIMEText(html, "html"))
        return msg

    def send(self, to: str, subject: str, html: str, text: Optional[str] = None) -> bool:
        msg = self.build_message(to, subject, html, text)
        try:
            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
                server.starttls()
                server.login(self.username, self.password)
                server.send_message(msg)
        except (smtplib.SMTPException, OSError) as e:
            log.warning("Failed to send email to %s: %s", to, e)
            return False
        return True


class LogMailer(Mailer):
    """Used when SMTP is not configured: records the email in the log instead of sending it."""

    def send(self, to: str, subject: str, html: str, text: Optional[str] = None) -> bool:
        log.info("Email simulation: To=%s, Subject=%s", to, subject)
        return True
