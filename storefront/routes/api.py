"""提供前台使用的 JSON API 路由（購物車、收藏、登入、結帳、商品）。"""

from __future__ import annotations

from typing import Any, Dict

from flask import Blueprint, current_app, jsonify, request

from ..common.models.cart_item import CartItem
from ..common.models.wishlist_item import WishlistItem
from ..common.services.catalog_service import CatalogError
from ..common.utils.validators import require_int
from ..services import AuthError, CheckoutError, StoreContainer


api_bp = Blueprint("storefront_api", __name__, url_prefix="/api")


def _components() -> StoreContainer:
    return current_app.extensions["storefront"]


def _payload() -> Dict[str, Any]:
    payload = request.get_json(silent=True)
    return payload if isinstance(payload, dict) else {}


def _cart_state() -> Dict[str, Any]:
    cart = _components().cart
    return {
        "items": [it.to_dict() for it in cart.items],
        "item_count": cart.item_count,
        "subtotal": cart.subtotal,
    }


def _wishlist_state() -> Dict[str, Any]:
    wishlist = _components().wishlist
    return {"items": [it.to_dict() for it in wishlist.items], "count": len(wishlist)}


@api_bp.errorhandler(CatalogError)
def catalog_failed(exc: CatalogError):
    return jsonify({"error": str(exc), "description": "Please try again later."}), 502


# ---- cart ----


@api_bp.get("/cart")
def get_cart():
    return jsonify(_cart_state())


@api_bp.post("/cart")
def add_to_cart():
    payload = _payload()
    payload.setdefault("quantity", 1)
    try:
        item = CartItem.from_dict(payload)
    except ValueError as exc:
        return jsonify({"error": str(exc)}), 400
    _components().cart.add_to_cart(item)
    return jsonify(_cart_state())


@api_bp.put("/cart/<int:product_id>")
def update_cart_quantity(product_id: int):
    try:
        quantity = require_int(_payload().get("quantity"), "quantity")
    except ValueError as exc:
        return jsonify({"error": str(exc)}), 400
    if quantity <= 0:
        return jsonify({"error": "quantity must be >= 1"}), 400
    _components().cart.update_quantity(product_id, quantity)
    return jsonify(_cart_state())


@api_bp.delete("/cart/<int:product_id>")
def remove_from_cart(product_id: int):
    _components().cart.remove_from_cart(product_id)
    return jsonify(_cart_state())


@api_bp.delete("/cart")
def clear_cart():
    _components().cart.clear_cart()
    return jsonify(_cart_state())


# ---- wishlist ----


@api_bp.get("/wishlist")
def get_wishlist():
    return jsonify(_wishlist_state())


@api_bp.get("/wishlist/<int:product_id>")
def wishlist_membership(product_id: int):
    return jsonify({"id": product_id, "in_wishlist": _components().wishlist.is_in_wishlist(product_id)})


@api_bp.post("/wishlist")
def add_to_wishlist():
    try:
        item = WishlistItem.from_dict(_payload())
    except ValueError as exc:
        return jsonify({"error": str(exc)}), 400
    _components().wishlist.add_to_wishlist(item)
    return jsonify(_wishlist_state())


@api_bp.post("/wishlist/toggle")
def toggle_wishlist():
    try:
        item = WishlistItem.from_dict(_payload())
    except ValueError as exc:
        return jsonify({"error": str(exc)}), 400
    in_wishlist = _components().wishlist.toggle_wishlist(item)
    return jsonify({"id": item.id, "in_wishlist": in_wishlist, **_wishlist_state()})


@api_bp.delete("/wishlist/<int:product_id>")
def remove_from_wishlist(product_id: int):
    _components().wishlist.remove_from_wishlist(product_id)
    return jsonify(_wishlist_state())


@api_bp.delete("/wishlist")
def clear_wishlist():
    _components().wishlist.clear_wishlist()
    return jsonify(_wishlist_state())


# ---- auth ----


@api_bp.get("/auth/me")
def current_user():
    auth = _components().auth
    return jsonify(
        {
            "authenticated": auth.is_authenticated,
            "is_loading": auth.is_loading,
            "user": auth.user,
        }
    )


@api_bp.post("/auth/login")
def login():
    payload = _payload()
    email = str(payload.get("email", "")).strip()
    password = str(payload.get("password", ""))
    if not email or not password:
        return jsonify({"error": "Email and password are required"}), 400
    components = _components()
    try:
        components.auth.login(email, password)
    except AuthError as exc:
        # 失敗時 session 已清除，同時移除此瀏覽器的 cookie
        response = jsonify({"error": str(exc), "description": "Please check your credentials."})
        response.status_code = 401
        return components.cookie.write_to(response)
    return components.cookie.write_to(jsonify({"status": "ok", "user": components.auth.user}))


@api_bp.post("/auth/register")
def register():
    payload = _payload()
    name = str(payload.get("name", "")).strip()
    email = str(payload.get("email", "")).strip()
    password = str(payload.get("password", ""))
    username = str(payload.get("username", "")).strip() or None
    if not name or not email or not password:
        return jsonify({"error": "Name, email and password are required"}), 400
    try:
        _components().auth.register(name, email, password, username=username)
    except AuthError as exc:
        return jsonify({"error": str(exc), "description": "Please try again later."}), 400
    return jsonify({"status": "ok"}), 201


@api_bp.post("/auth/logout")
def logout():
    components = _components()
    components.auth.logout()
    return components.cookie.write_to(jsonify({"status": "ok"}))


# ---- checkout ----


@api_bp.get("/checkout/summary")
def checkout_summary():
    return jsonify(_components().checkout.summary().to_dict())


@api_bp.post("/checkout")
def checkout():
    try:
        order = _components().checkout.place_order(_payload())
    except CheckoutError as exc:
        return jsonify({"error": str(exc)}), 400
    return jsonify(order), 201


# ---- catalog (read-only) ----


def _optional_int_arg(name: str):
    return request.args.get(name, type=int)


@api_bp.get("/products")
def list_products():
    components = _components()
    products = components.catalog.list_products(
        category_id=_optional_int_arg("categoryId"),
        subcategory_id=_optional_int_arg("subcategoryId"),
        supplier_id=_optional_int_arg("supplierId"),
        product_name=request.args.get("productName") or None,
    )
    uploads_url = components.config.uploads_url
    wishlist = components.wishlist
    data = []
    for product in products:
        item = product.to_dict()
        item["image_src"] = product.image_src(uploads_url)
        item["in_wishlist"] = wishlist.is_in_wishlist(product.id)
        data.append(item)
    return jsonify({"products": data})


@api_bp.get("/products/<int:product_id>")
def get_product(product_id: int):
    components = _components()
    product = components.catalog.get_product(product_id)
    item = product.to_dict()
    item["image_src"] = product.image_src(components.config.uploads_url)
    item["in_wishlist"] = components.wishlist.is_in_wishlist(product.id)
    return jsonify(item)


@api_bp.get("/categories")
def list_categories():
    categories = _components().catalog.list_categories()
    return jsonify({"categories": [c.to_dict() for c in categories]})
