import logging
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

import aiosmtplib

from marketplace.core.config import settings

logger = logging.getLogger(__name__)


def _smtp_configured() -> bool:
    return all(
        [
            settings.smtp_host,
            settings.smtp_port,
            settings.smtp_user,
            settings.smtp_password,
            settings.smtp_from_email,
        ]
    )


def build_reset_link(reset_token: str) -> str:
    base = (settings.frontend_url or "http://localhost:8000").rstrip("/")
    return f"{base}/reset-password?token={reset_token}"


async def send_email(to: str, subject: str, text: str, html: str | None = None) -> None:
    """
    Send an email through the configured SMTP server.

    Raises:
        ValueError: SMTP settings are incomplete.
        aiosmtplib.SMTPException: the server rejected the message.
    """
    if not _smtp_configured():
        logger.warning("SMTP not configured - cannot send email to %s", to)
        raise ValueError("SMTP is not configured. Please configure SMTP settings in .env file.")

    message = MIMEMultipart("alternative")
    message["Subject"] = subject
    message["From"] = settings.smtp_from_email
    message["To"] = to
    message.attach(MIMEText(text, "plain", "utf-8"))
    if html is not None:
        message.attach(MIMEText(html, "html", "utf-8"))

    send_kwargs = {
        "hostname": settings.smtp_host,
        "port": settings.smtp_port,
        "username": settings.smtp_user,
        "password": settings.smtp_password,
    }

    # Port 465 uses direct TLS, anything else STARTTLS
    if settings.smtp_use_tls:
        if settings.smtp_port == 465:
            send_kwargs["use_tls"] = True
        else:
            send_kwargs["start_tls"] = True

    logger.info("Sending email to %s", to)
    await aiosmtplib.send(message, **send_kwargs)
    logger.info("Email sent to %s", to)


async def send_password_reset_email(email: str, username: str, reset_token: str) -> None:
    reset_link = build_reset_link(reset_token)
    minutes = settings.password_reset_token_expire_minutes

    text = f"""
Hello {username},

Please click the following link to reset your password:
{reset_link}

This link will expire in {minutes} minutes.

If you did not request this, please ignore this email.
    """
    html = f"""
<html>
  <body>
    <p>Hello {username},</p>
    <p>Please click the following link to reset your password:</p>
    <p><a href="{reset_link}">{reset_link}</a></p>
    <p>This link will expire in {minutes} minutes.</p>
    <p>If you did not request this, please ignore this email.</p>
  </body>
</html>
    """
    await send_email(email, "Password Reset Request", text, html)
