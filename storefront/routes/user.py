"""使用者前台入口路由。"""

from __future__ import annotations

from flask import Blueprint, current_app, jsonify


user_bp = Blueprint("storefront_user", __name__)


def _components():
    return current_app.extensions["storefront"]


@user_bp.get("/")
def store_home():
    components = _components()
    return jsonify(
        {
            "cart_count": components.cart.item_count,
            "wishlist_count": len(components.wishlist),
            "authenticated": components.auth.is_authenticated,
            "user": components.auth.user,
        }
    )


@user_bp.get("/login")
def login():
    auth = _components().auth
    if auth.is_authenticated:
        return jsonify({"status": "authenticated", "user": auth.user})
    return jsonify({"status": "login_required"}), 401
