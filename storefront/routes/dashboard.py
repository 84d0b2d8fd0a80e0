"""管理後台路由：商品、分類、子分類、供應商與訂單。"""

from __future__ import annotations

from typing import Any, Callable, Dict

from flask import Blueprint, current_app, jsonify, redirect, request, url_for

from ..common.services.catalog_service import CatalogError


dashboard_bp = Blueprint("storefront_dashboard", __name__, url_prefix="/dashboard")


def _components():
    return current_app.extensions["storefront"]


def _catalog():
    return _components().catalog


def _payload() -> Dict[str, Any]:
    payload = request.get_json(silent=True)
    return payload if isinstance(payload, dict) else {}


@dashboard_bp.before_request
def guard_private_routes():
    # 只檢查請求帶來的 cookie，與 store 狀態無關
    if not request.cookies.get(_components().cookie.name):
        return redirect(url_for("storefront_user.login"))
    return None


@dashboard_bp.errorhandler(CatalogError)
def catalog_failed(exc: CatalogError):
    return jsonify({"error": str(exc), "description": "Please try again later."}), 502


@dashboard_bp.errorhandler(ValueError)
def invalid_payload(exc: ValueError):
    return jsonify({"error": str(exc)}), 400


@dashboard_bp.get("/")
def overview():
    catalog = _catalog()
    products = catalog.list_products()
    orders = catalog.list_orders()
    recent = sorted(orders, key=lambda o: o.order_date, reverse=True)[:5]
    top = sorted(products, key=lambda p: p.sold, reverse=True)[:5]
    return jsonify(
        {
            "total_products": len(products),
            "total_orders": len(orders),
            "revenue": round(sum(o.total_price for o in orders if o.status != "cancelled"), 2),
            "pending_orders": sum(1 for o in orders if o.status == "pending"),
            "recent_orders": [o.to_dict() for o in recent],
            "top_products": [p.to_dict() for p in top],
        }
    )


def _register_resource(
    name: str,
    *,
    list_fn: Callable[[], list],
    get_fn: Callable[[int], Any],
    create_fn: Callable[[Dict[str, Any]], Any],
    update_fn: Callable[[int, Dict[str, Any]], Any],
    delete_fn: Callable[[int], Any],
) -> None:
    """為單一資源註冊列表 / 取得 / 新增 / 更新 / 刪除路由。"""

    def list_view():
        return jsonify({name: [row.to_dict() for row in list_fn()]})

    def get_view(item_id: int):
        return jsonify(get_fn(item_id).to_dict())

    def create_view():
        return jsonify({"status": "ok", "result": create_fn(_payload())}), 201

    def update_view(item_id: int):
        return jsonify({"status": "ok", "result": update_fn(item_id, _payload())})

    def delete_view(item_id: int):
        delete_fn(item_id)
        return jsonify({"status": "ok"})

    dashboard_bp.add_url_rule(f"/{name}", f"{name}_list", list_view, methods=["GET"])
    dashboard_bp.add_url_rule(f"/{name}", f"{name}_create", create_view, methods=["POST"])
    dashboard_bp.add_url_rule(f"/{name}/<int:item_id>", f"{name}_get", get_view, methods=["GET"])
    dashboard_bp.add_url_rule(f"/{name}/<int:item_id>", f"{name}_update", update_view, methods=["PUT"])
    dashboard_bp.add_url_rule(f"/{name}/<int:item_id>", f"{name}_delete", delete_view, methods=["DELETE"])


_register_resource(
    "products",
    list_fn=lambda: _catalog().list_products(
        category_id=request.args.get("categoryId", type=int),
        subcategory_id=request.args.get("subcategoryId", type=int),
        supplier_id=request.args.get("supplierId", type=int),
        product_name=request.args.get("productName") or None,
    ),
    get_fn=lambda item_id: _catalog().get_product(item_id),
    create_fn=lambda data: _catalog().create_product(data),
    update_fn=lambda item_id, data: _catalog().update_product(item_id, data),
    delete_fn=lambda item_id: _catalog().delete_product(item_id),
)
_register_resource(
    "categories",
    list_fn=lambda: _catalog().list_categories(),
    get_fn=lambda item_id: _catalog().get_category(item_id),
    create_fn=lambda data: _catalog().create_category(data),
    update_fn=lambda item_id, data: _catalog().update_category(item_id, data),
    delete_fn=lambda item_id: _catalog().delete_category(item_id),
)
_register_resource(
    "subcategories",
    list_fn=lambda: _catalog().list_subcategories(),
    get_fn=lambda item_id: _catalog().get_subcategory(item_id),
    create_fn=lambda data: _catalog().create_subcategory(data),
    update_fn=lambda item_id, data: _catalog().update_subcategory(item_id, data),
    delete_fn=lambda item_id: _catalog().delete_subcategory(item_id),
)
_register_resource(
    "suppliers",
    list_fn=lambda: _catalog().list_suppliers(),
    get_fn=lambda item_id: _catalog().get_supplier(item_id),
    create_fn=lambda data: _catalog().create_supplier(data),
    update_fn=lambda item_id, data: _catalog().update_supplier(item_id, data),
    delete_fn=lambda item_id: _catalog().delete_supplier(item_id),
)


@dashboard_bp.get("/orders")
def list_orders():
    return jsonify({"orders": [o.to_dict() for o in _catalog().list_orders()]})


@dashboard_bp.get("/orders/<int:order_id>")
def get_order(order_id: int):
    return jsonify(_catalog().get_order(order_id).to_dict())


@dashboard_bp.put("/orders/<int:order_id>/status")
def update_order_status(order_id: int):
    status = _payload().get("status")
    _catalog().update_order_status(order_id, status)
    return jsonify({"status": "ok", "order_status": status})
