"""
Webhook signature helpers.

The gateway signs each callback with HMAC-SHA512 over the raw JSON body using
the account secret key, and sends the lowercase hex digest in the
``x-paystack-signature`` header.
"""

import hashlib
import hmac
from typing import Optional, Union

SIGNATURE_HEADER = "x-paystack-signature"


def compute_signature(secret: str, body: Union[bytes, str]) -> str:
    if isinstance(body, str):
        body = body.encode("utf-8")
    return hmac.new(secret.encode("utf-8"), body, hashlib.sha512).hexdigest()


def verify_signature(secret: str, body: bytes, signature: Optional[str]) -> bool:
    """
    Check a webhook signature against the exact bytes received.

    Returns False when the secret is not configured or the header is missing.
    """
    if not secret or not signature:
        return False
    expected = compute_signature(secret, body)
    return hmac.compare_digest(expected.encode("ascii"), signature.encode("utf-8"))
