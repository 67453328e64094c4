"""
Email gateway client
Posts transactional emails to the external email service
"""

import logging
from typing import Optional

from .. import config
from .gateway_client import GatewayClient

logger = logging.getLogger(__name__)


class EmailService(GatewayClient):
    name = "Email"

    def __init__(self, **kwargs):
        kwargs.setdefault("base_url", config.EMAIL_API_URL)
        kwargs.setdefault("api_key", config.EMAIL_API_KEY)
        kwargs.setdefault("enabled", config.EMAIL_ENABLED)
        super().__init__(**kwargs)

    async def send_email(self, to: str, subject: str, html: str, text: Optional[str] = None) -> bool:
        payload = {"to": to, "subject": subject, "html": html}
        if text:
            payload["text"] = text
        return await self._post("/email/send", payload)

    async def send_appointment_confirmation(self, email: str, data: dict) -> bool:
        return await self._post("/email/appointment-confirmation", {"email": email, "data": data})

    async def send_appointment_reminder(self, email: str, data: dict) -> bool:
        return await self._post("/email/appointment-reminder", {"email": email, "data": data})

    async def send_appointment_cancellation(self, email: str, data: dict) -> bool:
        return await self._post("/email/appointment-cancellation", {"email": email, "data": data})

    async def send_password_reset(self, email: str, data: dict) -> bool:
        return await self._post("/email/password-reset", {"email": email, "data": data})

    async def send_welcome(self, email: str, data: dict) -> bool:
        return await self._post("/email/welcome", {"email": email, "data": data})

    async def get_status(self) -> Optional[dict]:
        return await self._get("/email/status")

    async def get_templates(self) -> Optional[list]:
        return await self._get("/email/templates")
