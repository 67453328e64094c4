"""
Base HTTP client for the external messaging gateways (WhatsApp, email)
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional

import httpx

from .. import config
from ..shared.retry import retry_message_send

logger = logging.getLogger(__name__)


class GatewayClient:
    """
    Thin wrapper over httpx.AsyncClient.

    Sends return True on a 2xx response and False otherwise; transport errors
    are retried with backoff and then logged, never raised to the caller.
    """

    name = "gateway"

    def __init__(
        self,
        base_url: str,
        api_key: Optional[str],
        enabled: bool,
        timeout: float = config.GATEWAY_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.enabled = enabled
        self.timeout = timeout
        self._transport = transport
        self._sleep = sleep

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["X-API-Key"] = self.api_key
        return headers

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            headers=self._headers(),
            transport=self._transport,
        )

    async def _request(self, method: str, path: str, payload: Optional[dict] = None) -> httpx.Response:
        async def call() -> httpx.Response:
            async with self._client() as client:
                return await client.request(method, path, json=payload)

        return await retry_message_send(call, sleep=self._sleep)

    async def _post(self, path: str, payload: dict) -> bool:
        if not self.enabled:
            logger.warning(f"⚠️ {self.name} gateway is disabled, skipping {path}")
            return False

        try:
            response = await self._request("POST", path, payload)
        except Exception as e:
            logger.error(f"❌ {self.name} gateway error on {path}: {e}")
            return False

        if not response.is_success:
            logger.warning(
                f"⚠️ {self.name} gateway returned {response.status_code} on {path}: {response.text}"
            )
            return False

        logger.info(f"✅ {self.name} gateway accepted {path}")
        return True

    async def _get(self, path: str) -> Optional[Any]:
        try:
            response = await self._request("GET", path)
        except Exception as e:
            logger.error(f"❌ {self.name} gateway error on {path}: {e}")
            return None

        if not response.is_success:
            logger.warning(f"⚠️ {self.name} gateway returned {response.status_code} on {path}")
            return None
        return response.json()
