import logging
from typing import Optional

from fastapi import Request

from src.database.payments import PaymentStore
from src.integrations.clients.mocks.paystack import MockPaystackClient
from src.integrations.clients.real_http.paystack import PaystackClient
from src.integrations.policy.payment_service import GatewayClient, PaymentRelayService
from src.utils.config_loader import RelayConfig

logger = logging.getLogger(__name__)


def select_gateway_client(config: RelayConfig) -> GatewayClient:
    if config.use_mock_gateway:
        logger.info("INTEGRATIONS_MODE=%s: using mock Paystack client", config.integrations_mode)
        return MockPaystackClient()
    return PaystackClient(
        secret_key=config.paystack.secret_key,
        base_url=config.paystack.base_url,
        timeout_seconds=config.paystack.timeout_seconds,
    )


def build_payment_service(
    config: RelayConfig,
    store: Optional[PaymentStore] = None,
    gateway: Optional[GatewayClient] = None,
) -> PaymentRelayService:
    return PaymentRelayService(
        gateway=gateway or select_gateway_client(config),
        store=store if store is not None else PaymentStore(ttl_seconds=config.store.record_ttl_seconds),
        webhook_secret=config.paystack.secret_key,
        currency=config.paystack.currency,
        provider=config.paystack.provider,
        default_email=config.paystack.default_email,
        country_code=config.phone.country_code,
    )


def get_payment_service(request: Request) -> PaymentRelayService:
    return request.app.state.payment_service
