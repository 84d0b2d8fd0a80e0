import pytest

from conftest import ORDER, PRODUCT, FakeResponse
from storefront.common.models.product import PLACEHOLDER_IMAGE
from storefront.common.services import catalog_service
from storefront.common.services.catalog_service import CatalogError, CatalogService


@pytest.fixture
def catalog(api_client):
    return CatalogService(api_client)


def test_list_products_validates_records(catalog, fake_session):
    fake_session.add("GET", "/products", FakeResponse(200, [PRODUCT]))

    products = catalog.list_products(category_id=2, product_name="")

    assert products[0].name == "Lamp"
    assert products[0].to_dict() == PRODUCT
    assert fake_session.calls[0]["params"] == {"categoryId": 2}


def test_list_products_is_cached_until_a_write(catalog, fake_session):
    fake_session.add("GET", "/products", FakeResponse(200, [PRODUCT]))
    fake_session.add("POST", "/products", FakeResponse(201, {"id": 2}))

    catalog.list_products()
    catalog.list_products()
    assert len(fake_session.calls) == 1

    catalog.create_product({**PRODUCT, "name": "Chair"})
    catalog.list_products()
    assert [c["method"] for c in fake_session.calls] == ["GET", "POST", "GET"]


def test_backend_failure_maps_to_user_message(catalog, fake_session):
    fake_session.add("GET", "/products", FakeResponse(500))

    with pytest.raises(CatalogError, match="Products fetch failed") as info:
        catalog.list_products()

    assert info.value.status_code == 500


def test_malformed_response_is_rejected(catalog, fake_session):
    fake_session.add("GET", "/categories", FakeResponse(200, {"not": "a list"}))
    with pytest.raises(CatalogError, match="Categories fetch failed"):
        catalog.list_categories()


def test_product_payload_is_validated_before_sending(catalog, fake_session):
    with pytest.raises(ValueError):
        catalog.create_product({"name": "No price"})
    assert fake_session.calls == []


def test_product_image_falls_back_to_placeholder(catalog, fake_session):
    fake_session.add("GET", "/products/1", FakeResponse(200, {**PRODUCT, "imageUrl": None}))
    product = catalog.get_product(1)
    assert product.image_src("http://backend.test/uploads") == PLACEHOLDER_IMAGE


def test_product_image_under_uploads(catalog, fake_session):
    fake_session.add("GET", "/products/1", FakeResponse(200, PRODUCT))
    product = catalog.get_product(1)
    assert product.image_src("http://backend.test/uploads") == "http://backend.test/uploads/lamp.png"


def test_subcategories_and_suppliers(catalog, fake_session):
    fake_session.add("GET", "/subcategories", FakeResponse(200, [{"id": 4, "name": "Lighting", "categoryId": 2}]))
    fake_session.add(
        "GET",
        "/suppliers/3",
        FakeResponse(200, {"id": 3, "name": "Acme", "phone": "1", "email": "a@b.c", "address": "x", "city": "y"}),
    )

    assert catalog.list_subcategories()[0].category_id == 2
    assert catalog.get_supplier(3).name == "Acme"


def test_supplier_payload_requires_all_fields(catalog):
    with pytest.raises(ValueError):
        catalog.create_supplier({"name": "Acme"})


def test_orders_parse_items(catalog, fake_session):
    fake_session.add("GET", "/orders/11", FakeResponse(200, ORDER))
    order = catalog.get_order(11)
    assert order.status == "pending"
    assert order.items[0].product_id == 1


def test_update_order_status(catalog, fake_session):
    fake_session.add("PUT", "/orders/11/status", FakeResponse(200))

    catalog.update_order_status(11, "shipped")

    assert fake_session.calls[0]["json"] == {"status": "shipped"}


def test_update_order_status_rejects_unknown_status(catalog, fake_session):
    with pytest.raises(ValueError):
        catalog.update_order_status(11, "lost")
    assert fake_session.calls == []


def test_expired_product_lists_are_evicted(catalog, fake_session, monkeypatch):
    clock = [1000.0]
    monkeypatch.setattr(catalog_service.time, "time", lambda: clock[0])
    fake_session.add("GET", "/products", FakeResponse(200, [PRODUCT]))

    catalog.list_products(product_name="lamp")
    clock[0] += 61
    catalog.list_products(product_name="chair")

    assert list(catalog._cache) == [(("productName", "chair"),)]
