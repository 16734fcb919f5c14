"""
Mock integration clients.

These clients return fake (but gateway-shaped) responses without calling any external API.
They are used when:
- no Paystack test key is at hand
- we want to exercise the relay end-to-end without network access

Important:
- Mock clients must follow the SAME interface as real HTTP clients (charge, verify).

Switching to real:
Set INTEGRATIONS_MODE=real (the default) and PAYSTACK_SECRET_KEY.
"""
