# src/commonUtils/emailUtil.py - SMTP delivery for waitlist notifications

from typing import Any, Dict

from fastapi_mail import ConnectionConfig, FastMail, MessageSchema
import logging

from src.commonUtils.email_renderer import TemplateRenderer
from src.commonUtils.exceptions import NotificationError

logger = logging.getLogger(__name__)


async def send_email(fm: FastMail, email: str, subject: str, message: str):
    """
    Core email sending utility
    """
    try:
        msg = MessageSchema(
            subject=subject,
            recipients=[email],
            body=message,
            subtype="html",
        )
        await fm.send_message(msg)
        logger.info(f"Email sent successfully to {email}")
    except Exception as e:
        logger.error(f"Failed to send email to {email}: {str(e)}")
        raise


class SmtpNotifier:
    """Sends the waitlist notification straight to the admin inbox over SMTP."""

    def __init__(self, conf: ConnectionConfig, admin_email: str, renderer: TemplateRenderer,
                 platform_name: str = "MOJA"):
        self.fast_mail = FastMail(conf)
        self.admin_email = admin_email
        self.renderer = renderer
        self.platform_name = platform_name

    async def send(self, service_id: str, template_id: str, template_params: Dict[str, Any]):
        # service_id/template_id only mean something to EmailJS
        if not self.admin_email:
            raise NotificationError("ADMIN_EMAIL is not configured")

        subject = f"New {self.platform_name} waitlist signup: {template_params.get('from_name', '')}"
        body = self.renderer.waitlist_signup_email(template_params)
        try:
            await send_email(self.fast_mail, self.admin_email, subject, body)
        except Exception as e:
            raise NotificationError(f"SMTP delivery failed: {e}") from e
