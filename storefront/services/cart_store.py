"""購物車狀態容器。"""

from __future__ import annotations

from dataclasses import replace
from typing import List, Optional

from ..common.models.cart_item import CartItem
from ..common.services.logging import log_event
from .observable import ObservableStore
from .persistent_store import PersistentStore

CART_KEY = "cart"


class CartStore(ObservableStore):
    """依商品 id 合併的購物車，每次變更後同步寫回持久化儲存。"""

    def __init__(self, storage: PersistentStore) -> None:
        super().__init__()
        self._storage = storage
        self._items: List[CartItem] = []

    def init(self) -> None:
        """從持久化儲存載入購物車；資料異常時以空購物車開始。"""
        raw = self._storage.load(CART_KEY)
        items: List[CartItem] = []
        if raw is not None:
            try:
                if not isinstance(raw, list):
                    raise ValueError("expected a list")
                for row in raw:
                    items = _merged(items, CartItem.from_dict(row, stored=True))
            except ValueError as exc:
                log_event("warning", "storage.schema_mismatch", key=CART_KEY, error=str(exc))
                items = []
        with self._lock:
            self._items = items
        self._notify()

    @property
    def items(self) -> List[CartItem]:
        with self._lock:
            return [replace(it) for it in self._items]

    @property
    def item_count(self) -> int:
        with self._lock:
            return sum(it.quantity for it in self._items)

    @property
    def subtotal(self) -> float:
        with self._lock:
            return sum(it.line_total for it in self._items)

    def get(self, product_id: int) -> Optional[CartItem]:
        with self._lock:
            for it in self._items:
                if it.id == product_id:
                    return replace(it)
        return None

    def add_to_cart(self, item: CartItem) -> None:
        """加入商品；已存在相同 id 時累加數量而不新增列。"""
        with self._lock:
            self._items = _merged(self._items, replace(item))
            self._persist()
        self._notify()

    def update_quantity(self, product_id: int, quantity: int) -> None:
        # 數量原樣寫入，是否為正數由呼叫端負責
        with self._lock:
            self._items = [
                replace(it, quantity=quantity) if it.id == product_id else it for it in self._items
            ]
            self._persist()
        self._notify()

    def remove_from_cart(self, product_id: int) -> None:
        with self._lock:
            self._items = [it for it in self._items if it.id != product_id]
            self._persist()
        self._notify()

    def clear_cart(self) -> None:
        with self._lock:
            self._items = []
            self._persist()
        self._notify()

    def take_all(self) -> List[CartItem]:
        """回傳目前內容並清空購物車（同一把鎖內完成）。"""
        with self._lock:
            items = self._items
            self._items = []
            self._persist()
        self._notify()
        return [replace(it) for it in items]

    def _persist(self) -> None:
        self._storage.save(CART_KEY, [it.to_dict() for it in self._items])


def _merged(items: List[CartItem], item: CartItem) -> List[CartItem]:
    for index, existing in enumerate(items):
        if existing.id == item.id:
            updated = list(items)
            updated[index] = replace(existing, quantity=existing.quantity + item.quantity)
            return updated
    return [*items, item]
