"""SMTP notifier: never raises, reports delivery as a boolean."""

import smtplib
from unittest.mock import MagicMock

import pytest

from compliance_engine.core.config import Settings
from compliance_engine.services import notifier as notifier_module
from compliance_engine.services.notifier import SmtpNotifier, safe_send


@pytest.fixture
def mail_settings():
    return Settings(
        SMTP_HOST="smtp.example.com",
        SMTP_PORT=2525,
        SMTP_USER="robot@example.com",
        SMTP_PASSWORD="secret",
        SMTP_FROM="Compliance <compliance@example.com>",
    )


@pytest.fixture
def smtp_class(monkeypatch):
    smtp = MagicMock()
    monkeypatch.setattr(notifier_module.smtplib, "SMTP", smtp)
    return smtp


class TestSmtpNotifier:
    @pytest.mark.asyncio
    async def test_sends_plain_text_message(self, mail_settings, smtp_class):
        ok = await SmtpNotifier(mail_settings).send("vendor@acme.test", "Subject line", "Body text")

        assert ok is True
        smtp_class.assert_called_once_with("smtp.example.com", 2525, timeout=30)
        conn = smtp_class.return_value.__enter__.return_value
        conn.starttls.assert_called_once()
        conn.login.assert_called_once_with("robot@example.com", "secret")
        message = conn.send_message.call_args.args[0]
        assert message["To"] == "vendor@acme.test"
        assert message["From"] == "Compliance <compliance@example.com>"
        assert message["Subject"] == "Subject line"
        assert message.get_content().strip() == "Body text"

    @pytest.mark.asyncio
    async def test_missing_configuration_returns_false(self, smtp_class):
        ok = await SmtpNotifier(Settings(SMTP_HOST=None)).send("vendor@acme.test", "s", "b")

        assert ok is False
        smtp_class.assert_not_called()

    @pytest.mark.asyncio
    async def test_missing_recipient_returns_false(self, mail_settings, smtp_class):
        assert await SmtpNotifier(mail_settings).send(None, "s", "b") is False
        assert await SmtpNotifier(mail_settings).send("", "s", "b") is False
        smtp_class.assert_not_called()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [
            smtplib.SMTPAuthenticationError(535, b"bad credentials"),
            smtplib.SMTPRecipientsRefused({"vendor@acme.test": (550, b"no such user")}),
            ConnectionRefusedError("connection refused"),
        ],
    )
    async def test_transport_errors_return_false(self, mail_settings, smtp_class, error):
        smtp_class.return_value.__enter__.return_value.send_message.side_effect = error

        assert await SmtpNotifier(mail_settings).send("vendor@acme.test", "s", "b") is False

    def test_sender_falls_back_to_user(self):
        cfg = Settings(SMTP_HOST="h", SMTP_USER="robot@example.com", SMTP_PASSWORD="p", SMTP_FROM=None)
        assert cfg.mail_sender == "robot@example.com"


class TestSafeSend:
    @pytest.mark.asyncio
    async def test_exception_becomes_false(self):
        broken = MagicMock()
        broken.send.side_effect = RuntimeError("boom")

        assert await safe_send(broken, "a@b.test", "s", "b") is False
