"""Outbound email — console and SMTP backends behind one async ``Mailer`` protocol.

Callers decide whether a failure matters: the listing workflow treats every
send as best-effort, OTP delivery does not.
"""

from __future__ import annotations

import logging
import smtplib
import ssl
from email.message import EmailMessage
from typing import Protocol

from starlette.concurrency import run_in_threadpool

from promart.core.config import Settings, settings

logger = logging.getLogger(__name__)


class EmailSendError(RuntimeError):
    pass


class Mailer(Protocol):
    async def send(self, to_email: str, subject: str, text: str) -> None: ...


def _check_recipient(to_email: str) -> str:
    to_email = (to_email or "").strip()
    if not to_email or "@" not in to_email:
        raise EmailSendError("Invalid recipient email")
    return to_email


class ConsoleMailer:
    """Writes messages to the log instead of delivering them (local dev)."""

    async def send(self, to_email: str, subject: str, text: str) -> None:
        to_email = _check_recipient(to_email)
        logger.info("EMAIL_BACKEND=console: to=%s subject=%s\n%s", to_email, subject, text)


class SmtpMailer:
    def __init__(self, config: Settings):
        self._config = config

    async def send(self, to_email: str, subject: str, text: str) -> None:
        to_email = _check_recipient(to_email)
        try:
            # smtplib blocks; keep it off the event loop.
            await run_in_threadpool(self._send_sync, to_email, subject, text)
        except EmailSendError:
            raise
        except (smtplib.SMTPException, OSError) as exc:
            raise EmailSendError(f"SMTP send failed: {exc}") from exc
        logger.info("Email sent to %s (%s)", to_email, subject)

    def _send_sync(self, to_email: str, subject: str, text: str) -> None:
        cfg = self._config
        sender = cfg.smtp_from or cfg.smtp_user
        if not cfg.smtp_host:
            raise EmailSendError("SMTP_HOST not configured")
        if not sender:
            raise EmailSendError("SMTP_FROM (or SMTP_USER) not configured")

        msg = EmailMessage()
        msg["From"] = f"ProMart <{sender}>"
        msg["To"] = to_email
        msg["Subject"] = subject
        msg.set_content(f"{text}\n\nBest regards,\nThe ProMart Team")

        if cfg.smtp_port == 465:
            context = ssl.create_default_context()
            with smtplib.SMTP_SSL(cfg.smtp_host, cfg.smtp_port, timeout=cfg.smtp_timeout, context=context) as s:
                if cfg.smtp_user and cfg.smtp_pass:
                    s.login(cfg.smtp_user, cfg.smtp_pass)
                s.send_message(msg)
            return

        with smtplib.SMTP(cfg.smtp_host, cfg.smtp_port, timeout=cfg.smtp_timeout) as s:
            s.ehlo()
            if s.has_extn("starttls"):
                s.starttls(context=ssl.create_default_context())
                s.ehlo()
            if cfg.smtp_user and cfg.smtp_pass:
                s.login(cfg.smtp_user, cfg.smtp_pass)
            s.send_message(msg)


def build_mailer(config: Settings = settings) -> Mailer:
    backend = (config.email_backend or "console").strip().lower()
    if backend == "smtp":
        return SmtpMailer(config)
    if backend not in ("console", "log"):
        logger.warning("Unknown EMAIL_BACKEND=%r; using console output", backend)
    return ConsoleMailer()


_mailer: Mailer | None = None


def get_mailer() -> Mailer:
    """FastAPI dependency returning the process-wide mailer."""
    global _mailer
    if _mailer is None:
        _mailer = build_mailer()
    return _mailer
