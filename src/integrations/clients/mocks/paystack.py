"""
Paystack: MOCK client.

⚠️  Offline stand-in for the gateway, selected with INTEGRATIONS_MODE=mock.
    Does NOT make any network calls. Response bodies are shaped like the real
    gateway's ({status, message, data}) so the relay behaves the same.

Behavior:
- charge(...) returns a fresh reference with status "pending"
- verify(...) returns "success" for references it issued, otherwise raises
  GatewayError with a 404-style body, as the gateway does for unknown ones
"""

import logging
import uuid
from typing import Any, Dict

from src.error_handler import GatewayError
from src.integrations.contracts.payments import ChargeRequest

logger = logging.getLogger(__name__)


class MockPaystackClient:
    def __init__(self) -> None:
        self._charges: Dict[str, Dict[str, Any]] = {}

    async def charge(self, request: ChargeRequest) -> Dict[str, Any]:
        reference = f"mock_{uuid.uuid4().hex[:12]}"
        data = {
            "reference": reference,
            "status": "pending",
            "amount": request.amount_minor,
            "currency": request.currency,
            "display_text": "Please complete authorization process on your mobile number",
        }
        self._charges[reference] = data
        logger.info("[MOCK] Charge accepted: reference=%s amount=%s", reference, request.amount_minor)
        return {"status": True, "message": "Charge attempted", "data": data}

    async def verify(self, reference: str) -> Dict[str, Any]:
        charge = self._charges.get(reference)
        if charge is None:
            raise GatewayError(
                "Gateway returned HTTP 404",
                details={"status": False, "message": "Transaction reference not found"},
                status_code=404,
            )
        data = {**charge, "status": "success", "gateway_response": "Approved"}
        self._charges[reference] = data
        return {"status": True, "message": "Verification successful", "data": data}
