"""商店前台狀態服務模組入口。"""

from .auth_store import AuthError, AuthStore
from .cart_store import CartStore
from .checkout_service import CheckoutError, CheckoutService
from .cookie_mirror import CookieMirror
from .persistent_store import PersistentStore
from .store_container import StoreContainer
from .wishlist_store import WishlistStore

__all__ = [
    "AuthError",
    "AuthStore",
    "CartStore",
    "CheckoutError",
    "CheckoutService",
    "CookieMirror",
    "PersistentStore",
    "StoreContainer",
    "WishlistStore",
]
