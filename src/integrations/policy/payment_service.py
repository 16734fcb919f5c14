"""
Payment Relay Service

Implements the four relay operations on top of a gateway client and the
shared PaymentStore:
- initiate_charge: normalize, forward the charge, record the reference
- verify_charge: ask the gateway for a reference's status, upsert it
- handle_webhook: authenticate a gateway callback, upsert its status
- lookup: return the last recorded status without calling the gateway
"""

import json
import logging
from typing import Any, Dict, Optional, Protocol

from src.database.payments import PaymentStore
from src.error_handler import GatewayError, SignatureError, UpstreamError, ValidationError
from src.integrations.contracts.payments import (
    DEFAULT_COUNTRY_CODE,
    STATUS_UNKNOWN,
    ChargeRequest,
    normalize_phone,
    to_minor_units,
)
from src.integrations.policy.response_wrappers import (
    IntegrationResponseError,
    normalize_charge_response,
    normalize_verify_response,
)
from src.utils.signature import verify_signature

logger = logging.getLogger(__name__)


class GatewayClient(Protocol):
    async def charge(self, request: ChargeRequest) -> Dict[str, Any]:
        ...

    async def verify(self, reference: str) -> Dict[str, Any]:
        ...


class PaymentRelayService:
    def __init__(
        self,
        gateway: GatewayClient,
        store: PaymentStore,
        webhook_secret: str,
        currency: str = "KES",
        provider: str = "mpesa",
        default_email: str = "customer@fastcv.app",
        country_code: str = DEFAULT_COUNTRY_CODE,
    ):
        self.gateway = gateway
        self.store = store
        self.webhook_secret = webhook_secret
        self.currency = currency
        self.provider = provider
        self.default_email = default_email
        self.country_code = country_code

    async def initiate_charge(self, phone: Optional[str], amount: Any, email: Optional[str] = None) -> Dict[str, Any]:
        if not phone or not amount:
            raise ValidationError("phone and amount required")
        try:
            amount_minor = to_minor_units(amount)
        except ValueError as e:
            raise ValidationError("amount must be a number", details=str(e)) from e

        request = ChargeRequest(
            phone_number=normalize_phone(phone, self.country_code),
            amount_minor=amount_minor,
            currency=self.currency,
            email=email or self.default_email,
            provider=self.provider,
        )

        try:
            raw = await self.gateway.charge(request)
            charge = normalize_charge_response(raw)
        except GatewayError as e:
            logger.error("Pay error: %s", e.details)
            raise UpstreamError("pay_failed", details=e.details) from e
        except IntegrationResponseError as e:
            logger.error("Pay error: %s", e)
            raise UpstreamError("pay_failed", details=e.payload or str(e)) from e

        self.store.create(charge.reference, charge.status)
        logger.info("Charge initiated: reference=%s status=%s", charge.reference, charge.status)
        return {"ok": True, "message": charge.message, "data": charge.data}

    async def verify_charge(self, reference: Optional[str]) -> Dict[str, Any]:
        if not reference:
            raise ValidationError("reference required")

        try:
            raw = await self.gateway.verify(reference)
            verified = normalize_verify_response(raw)
        except GatewayError as e:
            logger.error("Verify error: %s", e.details)
            raise UpstreamError("verify_failed", details=e.details) from e
        except IntegrationResponseError as e:
            logger.error("Verify error: %s", e)
            raise UpstreamError("verify_failed", details=e.payload or str(e)) from e

        self.store.upsert_status(reference, verified.status)
        logger.info("Charge verified: reference=%s status=%s", reference, verified.status)
        return {"ok": True, "data": verified.data}

    def handle_webhook(self, body: bytes, signature: Optional[str]) -> Dict[str, Any]:
        """
        Authenticate and apply a gateway callback.

        The signature is checked against the raw bytes as received, before any
        parsing, so sender-side key order and whitespace do not matter.
        """
        if not verify_signature(self.webhook_secret, body, signature):
            logger.warning("Rejected webhook: invalid signature (header present=%s)", bool(signature))
            raise SignatureError()

        try:
            event = json.loads(body)
        except ValueError:
            event = None
        if not isinstance(event, dict):
            logger.warning("Signed webhook body is not a JSON object; ignoring")
            return {"status": "ok"}

        data = event.get("data")
        reference = data.get("reference") if isinstance(data, dict) else None
        if reference:
            status = data.get("status") or STATUS_UNKNOWN
            self.store.upsert_status(str(reference), str(status))
            logger.info("Webhook %s: reference=%s status=%s", event.get("event"), reference, status)
        else:
            logger.info("Webhook %s carried no reference", event.get("event"))

        return {"status": "ok"}

    def lookup(self, reference: Optional[str]) -> Dict[str, Any]:
        if not reference:
            raise ValidationError("reference required")
        record = self.store.get(reference)
        if record is None:
            return {"found": False}
        return {"found": True, "record": record.to_dict()}
