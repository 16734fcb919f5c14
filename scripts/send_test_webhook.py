#!/usr/bin/env python3
"""
Sign and post a fake gateway webhook to a running relay, then read the status back.

Start the API first (in another terminal):
  python scripts/run_api.py

Then:
  python scripts/send_test_webhook.py --reference R1 --status success
  python scripts/send_test_webhook.py --reference R1 --bad-signature

The secret defaults to PAYSTACK_SECRET_KEY from the environment (or .env) and
must match the one the relay was started with.
"""

from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv

load_dotenv()

import httpx

from src.utils.signature import SIGNATURE_HEADER, compute_signature


def main() -> int:
    parser = argparse.ArgumentParser(description="Send a signed test webhook to the payment relay")
    parser.add_argument("--base-url", default="http://localhost:3000", help="Relay base URL")
    parser.add_argument("--reference", required=True, help="Transaction reference to update")
    parser.add_argument("--status", default="success", help="Status to report")
    parser.add_argument("--event", default="charge.success", help="Event name")
    parser.add_argument("--secret", default=None, help="Signing secret (default: PAYSTACK_SECRET_KEY)")
    parser.add_argument("--bad-signature", action="store_true", help="Send a wrong signature to test rejection")
    args = parser.parse_args()

    secret = args.secret or os.getenv("PAYSTACK_SECRET_KEY", "")
    if not secret:
        print("No secret: pass --secret or set PAYSTACK_SECRET_KEY")
        return 2

    base = args.base_url.rstrip("/")
    body = json.dumps({"event": args.event, "data": {"reference": args.reference, "status": args.status}}).encode("utf-8")
    signature = "0" * 128 if args.bad_signature else compute_signature(secret, body)

    try:
        r = httpx.post(
            f"{base}/webhook",
            content=body,
            headers={"Content-Type": "application/json", SIGNATURE_HEADER: signature},
            timeout=30,
        )
        print(f"POST /webhook -> {r.status_code} {r.text}")

        r = httpx.get(f"{base}/check", params={"reference": args.reference}, timeout=30)
        print(f"GET /check -> {r.status_code} {r.text}")
    except httpx.HTTPError as e:
        print(f"FAIL: {e}")
        print("→ Start the API first: python scripts/run_api.py")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
