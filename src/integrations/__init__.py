"""
Integrations layer.
This package contains all code used to communicate with the payment gateway:
- contracts: charge request and payment record shapes, phone/amount helpers
- clients: the real Paystack HTTP client and an offline mock
- policy: the relay service and gateway response normalization

Key rule:
- Endpoints MUST NOT call the gateway directly; they go through PaymentRelayService.

Switching implementations:
- The selection of mock vs real clients happens in ONE place (src/api/dependencies.py),
  driven by INTEGRATIONS_MODE.
"""

from .contracts.payments import (
    ChargeRequest,
    PaymentRecord,
    normalize_phone,
    to_minor_units,
)

__all__ = [
    "ChargeRequest", "PaymentRecord", "normalize_phone", "to_minor_units",
]
