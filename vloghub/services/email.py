import logging
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

import aiosmtplib

from vloghub.core.config import Settings

logger = logging.getLogger(__name__)


def smtp_configured(settings: Settings) -> bool:
    return all([
        settings.smtp_host,
        settings.smtp_port,
        settings.smtp_user,
        settings.smtp_password,
        settings.smtp_from_email,
    ])


def build_reset_url(settings: Settings, reset_token: str) -> str:
    """Link to the frontend reset page; relative when FRONTEND_URL is unset."""
    base = (settings.frontend_url or "").rstrip("/")
    return f"{base}/reset-password?token={reset_token}"


def _build_message(settings: Settings, email: str, reset_token: str) -> MIMEMultipart:
    minutes = settings.password_reset_token_expire_minutes
    reset_link = build_reset_url(settings, reset_token)

    message = MIMEMultipart("alternative")
    message["Subject"] = "Reset your vloghub password"
    message["From"] = settings.smtp_from_email
    message["To"] = email

    text = f"""
Someone asked to reset the password for your vloghub account.

Open this link to choose a new password:
{reset_link}

If the link does not open, paste this code on the reset page:
{reset_token}

The link expires in {minutes} minutes and works only once.

If you did not ask for this, you can ignore this email.
    """
    html = f"""
<html>
  <body>
    <p>Someone asked to reset the password for your vloghub account.</p>
    <p><a href="{reset_link}">Choose a new password</a></p>
    <p>If the link does not open, paste this code on the reset page:</p>
    <p><code>{reset_token}</code></p>
    <p>The link expires in {minutes} minutes and works only once.</p>
    <p>If you did not ask for this, you can ignore this email.</p>
  </body>
</html>
    """
    message.attach(MIMEText(text, "plain"))
    message.attach(MIMEText(html, "html"))
    return message


async def send_password_reset_email(settings: Settings, email: str, reset_token: str) -> None:
    """
    Send password reset email to user.

    Raises:
        ValueError: If SMTP settings are incomplete.
    """
    if not smtp_configured(settings):
        logger.warning("SMTP not configured - cannot send password reset email")
        raise ValueError("SMTP is not configured. Please configure SMTP settings in .env file.")

    message = _build_message(settings, email, reset_token)

    send_kwargs = {
        "hostname": settings.smtp_host,
        "port": settings.smtp_port,
        "username": settings.smtp_user,
        "password": settings.smtp_password,
    }

    # Port 465 uses direct TLS, everything else STARTTLS
    if settings.smtp_use_tls:
        if settings.smtp_port == 465:
            send_kwargs["use_tls"] = True
        else:
            send_kwargs["start_tls"] = True

    await aiosmtplib.send(message, **send_kwargs)
