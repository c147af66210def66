from typing import Any, Dict, Optional

import httpx
import logging

from src.commonUtils.exceptions import NotificationError

logger = logging.getLogger(__name__)

EMAILJS_SEND_URL = "https://api.emailjs.com/api/v1.0/email/send"


class EmailJSClient:
    """
    Thin async client for the EmailJS REST send endpoint.

    Initialised once at startup with the publishable key. Missing ids are
    rejected when sending, not when constructing, so an unconfigured
    deployment still boots.
    """

    def __init__(self, public_key: str, private_key: Optional[str] = None,
                 api_url: str = EMAILJS_SEND_URL, timeout: Optional[float] = None,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.public_key = public_key or ""
        self.private_key = private_key
        self.api_url = api_url
        self.timeout = timeout
        self._transport = transport

    def build_payload(self, service_id: str, template_id: str,
                      template_params: Dict[str, Any]) -> Dict[str, Any]:
        payload = {
            "service_id": service_id,
            "template_id": template_id,
            "user_id": self.public_key,
            "template_params": template_params,
        }
        if self.private_key:
            payload["accessToken"] = self.private_key
        return payload

    def _check_params(self, service_id: str, template_id: str):
        if not self.public_key:
            raise NotificationError("The public key is required")
        if not service_id:
            raise NotificationError("The service ID is required")
        if not template_id:
            raise NotificationError("The template ID is required")

    async def send(self, service_id: str, template_id: str, template_params: Dict[str, Any]):
        self._check_params(service_id, template_id)
        payload = self.build_payload(service_id, template_id, template_params)

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(self.api_url, json=payload)
        except httpx.HTTPError as e:
            raise NotificationError(f"EmailJS request failed: {e}") from e

        if response.status_code != 200:
            raise NotificationError(
                f"EmailJS rejected the send: {response.text}",
                status_code=response.status_code,
            )

        logger.info(f"EmailJS accepted send for template {template_id}")
