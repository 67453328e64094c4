"""
WhatsApp gateway client
Posts appointment messages to the external WhatsApp service
"""

import logging
from typing import Optional

from .. import config
from .gateway_client import GatewayClient
from .message_templates import validate_template_data

logger = logging.getLogger(__name__)


class WhatsAppService(GatewayClient):
    name = "WhatsApp"

    def __init__(self, **kwargs):
        kwargs.setdefault("base_url", config.WHATSAPP_API_URL)
        kwargs.setdefault("api_key", config.WHATSAPP_API_KEY)
        kwargs.setdefault("enabled", config.WHATSAPP_ENABLED)
        super().__init__(**kwargs)

    async def _send_template(self, path: str, template_name: str, phone_number: str, data: dict) -> bool:
        validation = validate_template_data(template_name, data)
        if not validation["valid"]:
            logger.warning(f"⚠️ WhatsApp {template_name} not sent: {validation['error']}")
            return False

        return await self._post(path, {"phoneNumber": phone_number, "data": data})

    async def send_appointment_confirmation(self, phone_number: str, data: dict) -> bool:
        return await self._send_template(
            "/whatsapp/appointment-confirmation", "confirmacion_cita", phone_number, data
        )

    async def send_appointment_reminder(self, phone_number: str, data: dict) -> bool:
        return await self._send_template(
            "/whatsapp/appointment-reminder", "recordatorio_cita", phone_number, data
        )

    async def send_appointment_cancellation(self, phone_number: str, data: dict) -> bool:
        return await self._send_template(
            "/whatsapp/appointment-cancellation", "cancelacion_cita", phone_number, data
        )

    async def send_appointment_completed(self, phone_number: str, data: dict) -> bool:
        return await self._send_template(
            "/whatsapp/appointment-completed", "cita_completada", phone_number, data
        )

    async def get_status(self) -> Optional[dict]:
        """Connection status reported by the gateway, None when unreachable"""
        return await self._get("/whatsapp/status")
