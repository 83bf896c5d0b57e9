"""Outbound vendor / reviewer notifications over SMTP.

``send`` never raises: every failure is logged and reported as ``False`` so
callers can count it and carry on.
"""

from __future__ import annotations

import asyncio
import logging
import smtplib
from email.message import EmailMessage
from typing import Protocol

from compliance_engine.core.config import Settings, settings

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    async def send(self, recipient: str | None, subject: str, body: str) -> bool:
        ...


class SmtpNotifier:
    """Plain-text mail over SMTP with STARTTLS, run in a worker thread."""

    def __init__(self, config: Settings = settings):
        self._config = config

    async def send(self, recipient: str | None, subject: str, body: str) -> bool:
        if not recipient or not self._config.mail_enabled:
            logger.error(
                "Mail not sent (%s): configuration missing or recipient is empty",
                subject,
            )
            return False

        message = EmailMessage()
        message["From"] = self._config.mail_sender
        message["To"] = recipient
        message["Subject"] = subject
        message.set_content(body)

        try:
            await asyncio.to_thread(self._deliver, message)
        except smtplib.SMTPAuthenticationError as exc:
            logger.error("Mail to %s failed: SMTP authentication rejected (%s)", recipient, exc)
            return False
        except (smtplib.SMTPException, OSError) as exc:
            logger.error("Mail to %s failed: %s", recipient, exc)
            return False

        logger.info("Mail sent to %s: %s", recipient, subject)
        return True

    def _deliver(self, message: EmailMessage) -> None:
        cfg = self._config
        with smtplib.SMTP(cfg.smtp_host, cfg.smtp_port, timeout=cfg.smtp_timeout) as smtp:
            if cfg.smtp_starttls:
                smtp.starttls()
            smtp.login(cfg.smtp_user, cfg.smtp_password)
            smtp.send_message(message)


async def safe_send(notifier: Notifier, recipient: str | None, subject: str, body: str) -> bool:
    """Call ``notifier.send`` and turn any unexpected exception into ``False``."""
    try:
        return bool(await notifier.send(recipient, subject, body))
    except Exception:
        logger.exception("Notifier raised while sending %r to %s", subject, recipient)
        return False
