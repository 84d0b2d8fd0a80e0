from typing import Any, Callable, Dict, List, Optional, Tuple
import time

from ..api_client import ApiClient, ApiError
from ..models.category import Category, Subcategory
from ..models.order import Order, validate_status
from ..models.product import Product
from ..models.supplier import Supplier
from ..utils.validators import optional_str, require_int, require_number, require_str
from .logging import log_event


class CatalogError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def product_payload(data: Any) -> Dict[str, Any]:
    """Validate a create/update product body and return the backend payload."""
    if not isinstance(data, dict):
        raise ValueError("product payload must be an object")
    supplier_id = data.get("supplierId")
    payload = {
        "name": require_str(data.get("name"), "name"),
        "description": require_str(data.get("description", ""), "description"),
        "price": require_number(data.get("price"), "price", minimum=0),
        "amount": require_int(data.get("amount"), "amount"),
        "categoryId": require_int(data.get("categoryId"), "categoryId"),
        "subcategoryId": require_int(data.get("subcategoryId"), "subcategoryId"),
        "supplierId": None if supplier_id is None else require_int(supplier_id, "supplierId"),
    }
    if data.get("sold") is not None:
        payload["sold"] = require_int(data.get("sold"), "sold")
    image_url = optional_str(data.get("imageUrl"), "imageUrl")
    if image_url:
        payload["imageUrl"] = image_url
    return payload


def category_payload(data: Any) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise ValueError("category payload must be an object")
    return {"name": require_str(data.get("name"), "name")}


def subcategory_payload(data: Any) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise ValueError("subcategory payload must be an object")
    return {
        "name": require_str(data.get("name"), "name"),
        "categoryId": require_int(data.get("categoryId"), "categoryId"),
    }


def supplier_payload(data: Any) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise ValueError("supplier payload must be an object")
    return {key: require_str(data.get(key), key) for key in ("name", "phone", "email", "address", "city")}


class CatalogService:
    """Catalog and back-office calls against the REST backend.

    Responsibilities:
    - List/get/create/update/delete products, categories, subcategories, suppliers
    - List/get orders and change an order's status
    - Validate every response into a typed record before it reaches a route
    """

    def __init__(self, client: ApiClient, cache_ttl_seconds: int = 60) -> None:
        self._client = client
        # product list cache: params key -> (ts, products)
        self._cache: Dict[Tuple, Tuple[float, List[Product]]] = {}
        self._cache_ttl_seconds = cache_ttl_seconds

    def _call(self, failure: str, fn: Callable[..., Any], *args: Any) -> Any:
        try:
            return fn(*args)
        except ApiError as exc:
            log_event("error", "catalog.request_failed", message=failure, error=str(exc), status=exc.status_code)
            raise CatalogError(failure, status_code=exc.status_code) from exc

    @staticmethod
    def _parse(failure: str, parser: Callable[[Any], Any], body: Any) -> Any:
        try:
            return parser(body)
        except ValueError as exc:
            log_event("error", "catalog.invalid_response", message=failure, error=str(exc))
            raise CatalogError(failure) from exc

    @staticmethod
    def _parse_list(parser: Callable[[Any], Any]) -> Callable[[Any], List[Any]]:
        def parse(body: Any) -> List[Any]:
            if not isinstance(body, list):
                raise ValueError("expected a list")
            return [parser(row) for row in body]

        return parse

    # ---- products ----

    def list_products(
        self,
        *,
        category_id: Optional[int] = None,
        subcategory_id: Optional[int] = None,
        supplier_id: Optional[int] = None,
        product_name: Optional[str] = None,
    ) -> List[Product]:
        params = {
            "categoryId": category_id,
            "subcategoryId": subcategory_id,
            "supplierId": supplier_id,
            "productName": product_name or None,
        }
        cache_key = tuple(sorted((k, v) for k, v in params.items() if v is not None))
        now = time.time()
        cached = self._cache.get(cache_key)
        if cached and now - cached[0] <= self._cache_ttl_seconds:
            return list(cached[1])

        failure = "Products fetch failed"
        body = self._call(failure, self._client.get, "/products", params)
        products = self._parse(failure, self._parse_list(Product.from_dict), body)
        self._prune_cache(now)
        self._cache[cache_key] = (now, products)
        return list(products)

    def get_product(self, product_id: int) -> Product:
        failure = "Product fetch failed"
        body = self._call(failure, self._client.get, f"/products/{product_id}")
        return self._parse(failure, Product.from_dict, body)

    def create_product(self, data: Dict[str, Any]) -> Any:
        self.invalidate_cache()
        return self._call("Product creation failed", self._client.post, "/products", product_payload(data))

    def update_product(self, product_id: int, data: Dict[str, Any]) -> Any:
        self.invalidate_cache()
        return self._call("Product update failed", self._client.put, f"/products/{product_id}", product_payload(data))

    def delete_product(self, product_id: int) -> Any:
        self.invalidate_cache()
        return self._call("Product deletion failed", self._client.delete, f"/products/{product_id}")

    def invalidate_cache(self) -> None:
        self._cache.clear()

    def _prune_cache(self, now: float) -> None:
        for key, (stamp, _) in list(self._cache.items()):
            if now - stamp > self._cache_ttl_seconds:
                self._cache.pop(key, None)

    # ---- categories ----

    def list_categories(self) -> List[Category]:
        failure = "Categories fetch failed"
        body = self._call(failure, self._client.get, "/categories")
        return self._parse(failure, self._parse_list(Category.from_dict), body)

    def get_category(self, category_id: int) -> Category:
        failure = "Category fetch failed"
        body = self._call(failure, self._client.get, f"/categories/{category_id}")
        return self._parse(failure, Category.from_dict, body)

    def create_category(self, data: Dict[str, Any]) -> Any:
        return self._call("Category creation failed", self._client.post, "/categories", category_payload(data))

    def update_category(self, category_id: int, data: Dict[str, Any]) -> Any:
        return self._call(
            "Category update failed", self._client.put, f"/categories/{category_id}", category_payload(data)
        )

    def delete_category(self, category_id: int) -> Any:
        return self._call("Category deletion failed", self._client.delete, f"/categories/{category_id}")

    # ---- subcategories ----

    def list_subcategories(self) -> List[Subcategory]:
        failure = "Subcategories fetch failed"
        body = self._call(failure, self._client.get, "/subcategories")
        return self._parse(failure, self._parse_list(Subcategory.from_dict), body)

    def get_subcategory(self, subcategory_id: int) -> Subcategory:
        failure = "Subcategory fetch failed"
        body = self._call(failure, self._client.get, f"/subcategories/{subcategory_id}")
        return self._parse(failure, Subcategory.from_dict, body)

    def create_subcategory(self, data: Dict[str, Any]) -> Any:
        return self._call(
            "Subcategory creation failed", self._client.post, "/subcategories", subcategory_payload(data)
        )

    def update_subcategory(self, subcategory_id: int, data: Dict[str, Any]) -> Any:
        return self._call(
            "Subcategory update failed",
            self._client.put,
            f"/subcategories/{subcategory_id}",
            subcategory_payload(data),
        )

    def delete_subcategory(self, subcategory_id: int) -> Any:
        return self._call("Subcategory deletion failed", self._client.delete, f"/subcategories/{subcategory_id}")

    # ---- suppliers ----

    def list_suppliers(self) -> List[Supplier]:
        failure = "Suppliers fetch failed"
        body = self._call(failure, self._client.get, "/suppliers")
        return self._parse(failure, self._parse_list(Supplier.from_dict), body)

    def get_supplier(self, supplier_id: int) -> Supplier:
        failure = "Supplier fetch failed"
        body = self._call(failure, self._client.get, f"/suppliers/{supplier_id}")
        return self._parse(failure, Supplier.from_dict, body)

    def create_supplier(self, data: Dict[str, Any]) -> Any:
        return self._call("Supplier creation failed", self._client.post, "/suppliers", supplier_payload(data))

    def update_supplier(self, supplier_id: int, data: Dict[str, Any]) -> Any:
        return self._call(
            "Supplier update failed", self._client.put, f"/suppliers/{supplier_id}", supplier_payload(data)
        )

    def delete_supplier(self, supplier_id: int) -> Any:
        return self._call("Supplier deletion failed", self._client.delete, f"/suppliers/{supplier_id}")

    # ---- orders ----

    def list_orders(self) -> List[Order]:
        failure = "Orders fetch failed"
        body = self._call(failure, self._client.get, "/orders")
        return self._parse(failure, self._parse_list(Order.from_dict), body)

    def get_order(self, order_id: int) -> Order:
        failure = "Order fetch failed"
        body = self._call(failure, self._client.get, f"/orders/{order_id}")
        return self._parse(failure, Order.from_dict, body)

    def update_order_status(self, order_id: int, status: str) -> Any:
        status = validate_status(status)
        return self._call(
            "Order status update failed", self._client.put, f"/orders/{order_id}/status", {"status": status}
        )
