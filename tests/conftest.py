"""Pytest fixtures for the payment relay tests."""

import json

import httpx
import pytest
from fastapi.testclient import TestClient

from src.api.main import create_app
from src.database.payments import PaymentStore
from src.integrations.clients.real_http.paystack import PaystackClient
from src.utils.config_loader import RelayConfig

SECRET = "sk_test_relay_secret"


class FakePaystackAPI:
    """Stands in for api.paystack.co behind an httpx.MockTransport and records every request."""

    def __init__(self):
        self.requests = []
        self._routes = {}

    def reply(self, method: str, path: str, status_code: int = 200, body=None, text: str = None):
        self._routes[(method, path)] = (status_code, body, text)

    def fail_with(self, exc: Exception):
        self._routes["*"] = exc

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if "*" in self._routes:
            raise self._routes["*"]
        route = self._routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"status": False, "message": "Not found"})
        status_code, body, text = route
        if text is not None:
            return httpx.Response(status_code, text=text)
        return httpx.Response(status_code, json=body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def last_json(self):
        return json.loads(self.requests[-1].content)


@pytest.fixture
def fake_api():
    return FakePaystackAPI()


@pytest.fixture
def store():
    return PaymentStore()


@pytest.fixture
def config():
    return RelayConfig(paystack={"secret_key": SECRET})


@pytest.fixture
def paystack_client(fake_api):
    return PaystackClient(secret_key=SECRET, transport=fake_api.transport)


@pytest.fixture
def client(config, store, paystack_client):
    app = create_app(config=config, store=store, gateway=paystack_client)
    return TestClient(app)
