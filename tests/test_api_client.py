import pytest
import requests

from conftest import FakeResponse, FakeSession
from storefront.common.api_client import ApiClient, ApiError


def test_json_content_type_and_timeout(fake_session, api_client):
    fake_session.add("GET", "/products", FakeResponse(200, []))

    assert api_client.get("/products") == []

    assert fake_session.headers["Content-Type"] == "application/json"
    assert fake_session.calls[0]["timeout"] == 1.0
    assert fake_session.calls[0]["url"] == "http://backend.test/products"


def test_none_params_are_dropped(fake_session, api_client):
    fake_session.add("GET", "/products", FakeResponse(200, []))
    api_client.get("/products", params={"categoryId": 2, "supplierId": None})
    assert fake_session.calls[0]["params"] == {"categoryId": 2}


def test_trailing_slash_in_base_url():
    session = FakeSession()
    session.add("GET", "/categories", FakeResponse(200, []))
    client = ApiClient("http://backend.test/", session=session)
    client.get("categories")
    assert session.calls[0]["url"] == "http://backend.test/categories"


def test_error_status_raises_with_payload(fake_session, api_client):
    fake_session.add("DELETE", "/products/3", FakeResponse(409, {"message": "in use"}))

    with pytest.raises(ApiError) as info:
        api_client.delete("/products/3")

    assert info.value.status_code == 409
    assert info.value.payload == {"message": "in use"}


@pytest.mark.parametrize(
    "exc",
    [requests.exceptions.Timeout("slow"), requests.exceptions.ConnectionError("refused")],
)
def test_transport_failures_become_api_errors(fake_session, api_client, exc):
    fake_session.add("POST", "/auth/login", exc)
    with pytest.raises(ApiError) as info:
        api_client.post("/auth/login", {"email": "a", "password": "b"})
    assert info.value.status_code is None


def test_empty_and_text_bodies(fake_session, api_client):
    fake_session.add("PUT", "/categories/1", FakeResponse(204))
    fake_session.add("POST", "/categories", FakeResponse(200, text="created"))

    assert api_client.put("/categories/1", {"name": "x"}) is None
    assert api_client.post("/categories", {"name": "x"}) == "created"


def test_close_closes_session(fake_session, api_client):
    api_client.close()
    assert fake_session.closed
