"""
Payment contracts.

Defines the request/record structures shared by the relay endpoints, the
gateway clients and the record store:
- the charge request forwarded to the gateway
- the payment record kept per transaction reference

Both clients/mocks/paystack.py and clients/real_http/paystack.py accept
ChargeRequest, so responses stay consistent across environments.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Dict, Optional, Union

DEFAULT_COUNTRY_CODE = "254"

# Gateway statuses are an open set; these are just the ones the relay assigns itself.
STATUS_PENDING = "pending"
STATUS_UNKNOWN = "unknown"


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------


@dataclass
class ChargeRequest:
    """A mobile money charge, already normalized for the gateway."""
    phone_number: str
    amount_minor: int
    currency: str
    email: str
    provider: str
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "amount": self.amount_minor,
            "currency": self.currency,
            "email": self.email,
            "mobile_money": {
                "phone": self.phone_number,
                "provider": self.provider,
            },
        }
        if self.metadata:
            payload["metadata"] = self.metadata
        return payload


@dataclass(frozen=True)
class PaymentRecord:
    status: str
    created_at: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"status": self.status}
        if self.created_at is not None:
            body["createdAt"] = format_timestamp(self.created_at)
        return body


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(value: datetime) -> str:
    """ISO-8601 in UTC with millisecond precision, e.g. 2024-05-01T10:00:00.000Z"""
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def normalize_phone(phone: str, country_code: str = DEFAULT_COUNTRY_CODE) -> str:
    """
    Best-effort E.164 formatting for a local mobile number.

    "0712345678", "254712345678" and "712345678" all become "+254712345678";
    numbers already starting with "+" are returned trimmed but otherwise as is.
    No numbering-plan validation is done.
    """
    formatted = phone.strip()
    prefix = f"+{country_code}"
    if formatted.startswith("0"):
        return prefix + formatted[1:]
    if not formatted.startswith("+"):
        if formatted.startswith(country_code):
            return "+" + formatted
        return prefix + formatted
    return formatted


def to_minor_units(amount: Union[int, float, str, Decimal]) -> int:
    """
    Convert a decimal amount to the currency's smallest unit.

    Rounds half up on the decimal value, so 99.5 -> 9950 and 0.004 -> 0.

    Raises:
        ValueError: If the amount is not a finite number
    """
    try:
        value = Decimal(str(amount).strip())
    except InvalidOperation as exc:
        raise ValueError(f"Invalid amount: {amount!r}") from exc
    if not value.is_finite():
        raise ValueError(f"Invalid amount: {amount!r}")
    return int((value * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
