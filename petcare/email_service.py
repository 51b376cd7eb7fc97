"""
Email delivery through Resend, with MJML templates compiled to HTML
"""

import logging
from typing import Union

import resend
from mjml import mjml2html as mjml_to_html

from .config import EMAIL_FROM_ADDRESS, OTP_EXPIRY_MINUTES, RESEND_API_KEY
from .email_templates import payment_otp_template

logger = logging.getLogger(__name__)

resend.api_key = RESEND_API_KEY


class EmailDeliveryError(Exception):
    """Raised when an email could not be handed to the provider"""


def compile_mjml_to_html(mjml_content: str) -> str:
    """Compile MJML template to production-ready HTML"""
    try:
        result = mjml_to_html(mjml_content)
        if isinstance(result, dict):
            if result.get("errors"):
                logger.warning(f"MJML compilation warnings: {result['errors']}")
            return result.get("html", "")
        return getattr(result, "html", None) or str(result)
    except Exception as e:
        logger.error(f"MJML compilation error: {e}")
        raise EmailDeliveryError(f"Failed to compile MJML template: {str(e)}") from e


async def send_email(to: Union[str, list[str]], subject: str, mjml_content: str) -> dict:
    """
    Send an email via Resend

    Args:
        to: Recipient email(s)
        subject: Email subject line
        mjml_content: MJML template content (will be compiled to HTML)

    Returns:
        Provider response dict

    Raises:
        EmailDeliveryError: if Resend is not configured or rejects the message
    """
    if not RESEND_API_KEY:
        logger.error("No email service configured - RESEND_API_KEY missing")
        raise EmailDeliveryError("Email service not configured")

    html_content = compile_mjml_to_html(mjml_content)
    recipients = [to] if isinstance(to, str) else to

    try:
        logger.info(f"Sending email via Resend to: {recipients}")
        response = resend.Emails.send(
            {
                "from": EMAIL_FROM_ADDRESS,
                "to": recipients,
                "subject": subject,
                "html": html_content,
            }
        )
        logger.info(f"Email sent successfully via Resend: {response}")
        return response
    except Exception as e:
        logger.error(f"Email send error to {recipients}: {e}")
        raise EmailDeliveryError(f"Failed to send email: {str(e)}") from e


async def send_payment_otp_email(to: str, otp: str) -> dict:
    """Send the one-time code that confirms a pending payment"""
    return await send_email(
        to=to,
        subject="Your Payment Verification OTP",
        mjml_content=payment_otp_template(otp, OTP_EXPIRY_MINUTES),
    )
