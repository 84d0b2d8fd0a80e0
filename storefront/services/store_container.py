"""應用層級的元件容器：啟動時建立一次，注入到 Flask app。"""

from __future__ import annotations

from typing import Optional

import requests

from ..common.api_client import ApiClient
from ..common.services.catalog_service import CatalogService
from ..config import StorefrontConfig
from .auth_store import AuthStore
from .cart_store import CartStore
from .checkout_service import CheckoutService
from .cookie_mirror import CookieMirror
from .persistent_store import PersistentStore
from .wishlist_store import WishlistStore


class StoreContainer:
    """集中管理 store 的生命週期（init / dispose）。"""

    def __init__(self, config: StorefrontConfig, api_session: Optional[requests.Session] = None) -> None:
        self.config = config
        self.storage = PersistentStore(config.profile_dir)
        self.client = ApiClient(config.api_base_url, timeout=config.api_timeout, session=api_session)
        self.cookie = CookieMirror()
        self.cart = CartStore(self.storage)
        self.wishlist = WishlistStore(self.storage)
        self.auth = AuthStore(self.storage, self.client, self.cookie)
        self.checkout = CheckoutService(self.cart)
        self.catalog = CatalogService(self.client)
        self._initialized = False

    @property
    def initialized(self) -> bool:
        return self._initialized

    def init(self) -> "StoreContainer":
        if self._initialized:
            return self
        # 第一個請求之前同步載入
        self.auth.init()
        self.cart.init()
        self.wishlist.init()
        self._initialized = True
        return self

    def dispose(self) -> None:
        if not self._initialized:
            return
        for store in (self.cart, self.wishlist, self.auth):
            store.dispose()
        self.client.close()
        self._initialized = False
