"""
Real Paystack HTTP Client.

Used when INTEGRATIONS_MODE is real/live (the default).
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx

from src.error_handler import GatewayError
from src.integrations.contracts.payments import ChargeRequest

logger = logging.getLogger(__name__)


class PaystackClient:
    def __init__(
        self,
        secret_key: str,
        base_url: str = "https://api.paystack.co",
        timeout_seconds: Optional[float] = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.secret_key = secret_key
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self._transport = transport

    async def charge(self, request: ChargeRequest) -> Dict[str, Any]:
        return await self._request("POST", "/charge", json=request.to_payload())

    async def verify(self, reference: str) -> Dict[str, Any]:
        path = f"/transaction/verify/{quote(reference, safe='')}"
        return await self._request("GET", path)

    async def _request(self, method: str, path: str, json: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        if not self.secret_key:
            raise GatewayError("PAYSTACK_SECRET_KEY is not configured.")

        headers: Dict[str, str] = {"Authorization": f"Bearer {self.secret_key}"}
        if json is not None:
            headers["Content-Type"] = "application/json"

        url = f"{self.base_url}{path}"
        try:
            async with httpx.AsyncClient(timeout=self.timeout_seconds, transport=self._transport) as client:
                response = await client.request(method, url, json=json, headers=headers)
                response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise GatewayError(
                f"Gateway returned HTTP {exc.response.status_code}",
                details=_error_body(exc.response),
                status_code=exc.response.status_code,
            ) from exc
        except httpx.HTTPError as exc:
            raise GatewayError(str(exc) or type(exc).__name__) from exc

        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as exc:
            raise GatewayError("Gateway returned a non-JSON response", details=response.text) from exc


def _error_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
