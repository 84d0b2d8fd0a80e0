import json
from urllib.parse import urlsplit

import pytest

from storefront.app import create_app
from storefront.common.api_client import ApiClient
from storefront.config import StorefrontConfig
from storefront.services import PersistentStore


BACKEND_URL = "http://backend.test"


class FakeResponse:
    def __init__(self, status_code=200, body=None, text=None):
        self.status_code = status_code
        if body is not None:
            self.content = json.dumps(body).encode("utf-8")
        elif text is not None:
            self.content = text.encode("utf-8")
        else:
            self.content = b""
        self.text = self.content.decode("utf-8")

    def json(self):
        return json.loads(self.content)


class FakeSession:
    """Stands in for requests.Session; routes are keyed by (method, path)."""

    def __init__(self):
        self.headers = {}
        self.calls = []
        self.routes = {}
        self.closed = False

    def add(self, method, path, response):
        self.routes[(method, path)] = response

    def request(self, method, url, params=None, json=None, timeout=None):
        self.calls.append({"method": method, "url": url, "params": params, "json": json, "timeout": timeout})
        route = self.routes.get((method, urlsplit(url).path))
        if route is None:
            return FakeResponse(404, {"error": "not found"})
        if isinstance(route, Exception):
            raise route
        if callable(route):
            return route(json)
        return route

    def close(self):
        self.closed = True


SESSION_BODY = {
    "token": "tok-123",
    "id": 7,
    "name": "Ana Test",
    "username": "ana",
    "email": "ana@example.com",
}


PRODUCT = {
    "id": 1,
    "name": "Lamp",
    "description": "Desk lamp",
    "price": 25.0,
    "amount": 10,
    "sold": 3,
    "imageUrl": "lamp.png",
    "categoryId": 2,
    "categoryName": "Home",
    "subcategoryId": 4,
    "subcategoryName": "Lighting",
    "supplierId": None,
    "supplierName": None,
}


ORDER = {
    "id": 11,
    "userId": 7,
    "totalPrice": 50.0,
    "orderDate": "2024-05-01",
    "shipAddress": "Main 1",
    "shipCity": "Split",
    "shipPostalCode": 21000,
    "status": "pending",
    "items": [{"productId": 1, "quantity": 2, "price": 25.0}],
}


@pytest.fixture
def fake_session():
    return FakeSession()


@pytest.fixture
def api_client(fake_session):
    return ApiClient(BACKEND_URL, timeout=1.0, session=fake_session)


@pytest.fixture
def storage(tmp_path):
    return PersistentStore(tmp_path / "profile")


@pytest.fixture
def config(tmp_path):
    return StorefrontConfig(
        secret_key="test-secret",
        api_base_url=BACKEND_URL,
        api_timeout=1.0,
        data_dir=tmp_path,
    )


@pytest.fixture
def app(config, fake_session):
    app = create_app(config, api_session=fake_session)
    app.config["TESTING"] = True
    yield app
    app.extensions["storefront"].dispose()


@pytest.fixture
def client(app):
    return app.test_client()


def log_events(captured_out):
    events = []
    for line in captured_out.splitlines():
        line = line.strip()
        if line.startswith("{"):
            events.append(json.loads(line))
    return events
