from typing import Any, Dict, Protocol

import logging

from src.commonUtils.email_renderer import TemplateRenderer
from src.commonUtils.emailjsClient import EmailJSClient
from src.commonUtils.emailUtil import SmtpNotifier
from src.commonUtils.enumUtils import NotifierBackend
from src.config.settings import Settings

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    """Outbound notification collaborator. Raises NotificationError on any failure."""

    async def send(self, service_id: str, template_id: str, template_params: Dict[str, Any]) -> None:
        ...


def build_notifier(settings: Settings, renderer: TemplateRenderer) -> Notifier:
    try:
        backend = NotifierBackend(settings.NOTIFIER_BACKEND.lower())
    except ValueError:
        allowed = ", ".join(b.value for b in NotifierBackend)
        raise ValueError(f"Unknown NOTIFIER_BACKEND '{settings.NOTIFIER_BACKEND}' - expected one of: {allowed}") from None

    if backend == NotifierBackend.SMTP:
        logger.info(f"Using SMTP notifier via {settings.MAIL_SERVER}")
        return SmtpNotifier(
            settings.mail_config,
            admin_email=settings.ADMIN_EMAIL,
            renderer=renderer,
            platform_name=settings.PLATFORM_NAME,
        )

    if not settings.EMAILJS_PUBLIC_KEY:
        logger.warning("⚠️ EMAILJS_PUBLIC_KEY not set - signups will fail until it is configured")
    logger.info("Using EmailJS notifier")
    return EmailJSClient(
        public_key=settings.EMAILJS_PUBLIC_KEY,
        private_key=settings.EMAILJS_PRIVATE_KEY,
        api_url=settings.EMAILJS_API_URL,
        timeout=settings.EMAILJS_TIMEOUT_SECONDS,
    )
