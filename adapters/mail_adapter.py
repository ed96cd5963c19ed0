"""Transactional email through Resend.
"""

import logging

import resend

from app.config import settings

logger = logging.getLogger("nutriplan.mail")


def reset_link(token: str) -> str:
    return f"{settings.frontend_url.rstrip('/')}/reset-password?token={token}"


def _reset_email_html(name: str, link: str) -> str:
    return f"""
<!DOCTYPE html>
<html lang="en">
<body style="font-family: Arial, sans-serif; color: #1f2937;">
    <h2>Hello {name},</h2>
    <p>We received a request to reset your NutriPlan password.</p>
    <p><a href="{link}" style="color: #16a34a;">Reset your password</a></p>
    <p>This link expires in {settings.password_reset_expires_minutes} minutes.
    If you did not ask for a reset, you can ignore this email.</p>
</body>
</html>
"""


def send_password_reset(to_email: str, name: str, token: str) -> bool:
    """Send the reset link; returns False when nothing was delivered.

    Without an API key the link is logged instead.
    """
    link = reset_link(token)
    if not settings.resend_api_key:
        logger.info(f"password_reset_link email={to_email} link={link}")
        return False

    resend.api_key = settings.resend_api_key
    params = {
        "from": settings.mail_from,
        "to": [to_email],
        "subject": "NutriPlan - Reset your password",
        "html": _reset_email_html(name, link),
    }
    try:
        resend.Emails.send(params)
    except Exception as exc:
        logger.error(f"password_reset_email_failed email={to_email} error={exc}")
        return False
    logger.info(f"password_reset_email_sent email={to_email}")
    return True
