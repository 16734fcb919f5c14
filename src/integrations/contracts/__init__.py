"""
Contracts (data models).

This folder defines the request/record shapes for the gateway integration:
- the charge request sent to the gateway
- the payment record kept per transaction reference

Both mock and real HTTP clients use these contracts.
"""
