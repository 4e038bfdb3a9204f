"""Email and SMS notification helpers."""

from __future__ import annotations

import logging
import smtplib
from email.message import EmailMessage
from pathlib import Path
from typing import Iterable

from fastapi import BackgroundTasks
from jinja2 import Environment, FileSystemLoader, StrictUndefined

from mama_app.core.config import get_settings
from mama_app.models.user import User
from mama_app.security.redact import mask_email, mask_phone
from mama_app.services.password_reset_service import OtpDispatch

logger = logging.getLogger(__name__)

_TEMPLATE_DIR = Path(__file__).resolve().parents[1] / "templates"
_ENV = Environment(
    loader=FileSystemLoader(_TEMPLATE_DIR),
    autoescape=False,
    undefined=StrictUndefined,
    keep_trailing_newline=True,
)


def schedule_email(
    background_tasks: BackgroundTasks,
    *,
    recipients: Iterable[str | None],
    subject: str,
    body: str,
) -> None:
    """Queue an email to be delivered after the response is sent."""
    recipients_list = [addr for addr in recipients if addr]
    if not recipients_list:
        logger.debug("No recipients provided for email; skipping")
        return
    settings = get_settings()
    if not settings.smtp_host or not settings.smtp_port:
        logger.debug(
            "SMTP disabled; skipping email to %s",
            [mask_email(addr) for addr in recipients_list],
        )
        return
    background_tasks.add_task(_send_email, recipients_list, subject, body)


def schedule_sms(
    background_tasks: BackgroundTasks,
    *,
    phone_numbers: Iterable[str | None],
    message: str,
) -> None:
    """Queue an SMS notification (stub implementation)."""
    numbers = [number for number in phone_numbers if number]
    if not numbers:
        logger.debug("No phone numbers provided for SMS; skipping")
        return
    for number in numbers:
        background_tasks.add_task(_log_sms_stub, number, message)


def _display_name(user: User) -> str:
    return user.username or user.email or "there"


def build_welcome_email(*, user: User) -> tuple[str, str]:
    app_name = get_settings().app_name
    subject = f"Welcome to {app_name}"
    body = _ENV.get_template("welcome.txt").render(
        name=_display_name(user), app_name=app_name
    )
    return subject, body


def build_password_reset_otp_email(*, user: User, code: str) -> tuple[str, str]:
    settings = get_settings()
    subject = "Password Reset OTP"
    body = _ENV.get_template("password_reset_otp.txt").render(
        name=_display_name(user),
        code=code,
        ttl_minutes=settings.otp_expire_minutes,
        app_name=settings.app_name,
    )
    return subject, body


def build_password_reset_otp_sms(*, code: str) -> str:
    settings = get_settings()
    return (
        f"{settings.app_name}: your password reset code is {code}. "
        f"It expires in {settings.otp_expire_minutes} minutes."
    )


def notify_welcome(user: User, background_tasks: BackgroundTasks) -> None:
    if user.email:
        subject, body = build_welcome_email(user=user)
        schedule_email(
            background_tasks, recipients=[user.email], subject=subject, body=body
        )
    elif user.phone_number:
        schedule_sms(
            background_tasks,
            phone_numbers=[user.phone_number],
            message=f"Thanks for registering with {get_settings().app_name}!",
        )


def notify_password_reset_otp(
    dispatch: OtpDispatch, background_tasks: BackgroundTasks
) -> None:
    """Deliver a reset code by email, falling back to SMS."""
    user = dispatch.user
    if user.email:
        subject, body = build_password_reset_otp_email(user=user, code=dispatch.code)
        schedule_email(
            background_tasks, recipients=[user.email], subject=subject, body=body
        )
    elif user.phone_number:
        schedule_sms(
            background_tasks,
            phone_numbers=[user.phone_number],
            message=build_password_reset_otp_sms(code=dispatch.code),
        )
    else:  # pragma: no cover - the credential store forbids this
        logger.warning("User %s has no contact channel for a reset code", user.id)


def _send_email(recipients: list[str], subject: str, body: str) -> None:
    settings = get_settings()
    masked = [mask_email(addr) for addr in recipients]
    if not settings.smtp_host or not settings.smtp_port:
        logger.info("SMTP settings missing; skipping email delivery to %s", masked)
        return

    message = EmailMessage()
    message["Subject"] = subject
    message["To"] = ", ".join(recipients)
    message["From"] = (
        settings.smtp_from or settings.smtp_username or "no-reply@mama-app.local"
    )
    message.set_content(body)

    try:
        with smtplib.SMTP(settings.smtp_host, settings.smtp_port, timeout=5) as smtp:
            if settings.smtp_username and settings.smtp_password:
                smtp.starttls()
                smtp.login(settings.smtp_username, settings.smtp_password)
            smtp.send_message(message)
        logger.info("Email sent to %s", masked)
    except Exception:  # pragma: no cover - network dependent
        logger.exception("Failed to send email to %s", masked)


def _log_sms_stub(phone_number: str, message: str) -> None:
    if get_settings().dev_sms_echo:
        logger.info("SMS to %s: %s", phone_number, message)
        return
    logger.info("SMS queued to %s", mask_phone(phone_number))
