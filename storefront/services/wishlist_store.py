"""收藏清單狀態容器。"""

from __future__ import annotations

from dataclasses import replace
from typing import List

from ..common.models.wishlist_item import WishlistItem
from ..common.services.logging import log_event
from .observable import ObservableStore
from .persistent_store import PersistentStore

WISHLIST_KEY = "wishlist"


class WishlistStore(ObservableStore):
    """以商品 id 為唯一鍵的收藏清單。"""

    def __init__(self, storage: PersistentStore) -> None:
        super().__init__()
        self._storage = storage
        self._items: List[WishlistItem] = []

    def init(self) -> None:
        raw = self._storage.load(WISHLIST_KEY)
        items: List[WishlistItem] = []
        if raw is not None:
            try:
                if not isinstance(raw, list):
                    raise ValueError("expected a list")
                seen = set()
                for row in raw:
                    item = WishlistItem.from_dict(row)
                    if item.id in seen:
                        continue
                    seen.add(item.id)
                    items.append(item)
            except ValueError as exc:
                log_event("warning", "storage.schema_mismatch", key=WISHLIST_KEY, error=str(exc))
                items = []
        with self._lock:
            self._items = items
        self._notify()

    @property
    def items(self) -> List[WishlistItem]:
        with self._lock:
            return [replace(it) for it in self._items]

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def is_in_wishlist(self, product_id: int) -> bool:
        with self._lock:
            return any(it.id == product_id for it in self._items)

    def add_to_wishlist(self, item: WishlistItem) -> None:
        with self._lock:
            if self.is_in_wishlist(item.id):
                return
            self._items = [*self._items, replace(item)]
            self._persist()
        self._notify()

    def remove_from_wishlist(self, product_id: int) -> None:
        with self._lock:
            self._items = [it for it in self._items if it.id != product_id]
            self._persist()
        self._notify()

    def clear_wishlist(self) -> None:
        with self._lock:
            self._items = []
            self._persist()
        self._notify()

    def toggle_wishlist(self, item: WishlistItem) -> bool:
        """切換收藏狀態，回傳切換後是否在清單內。"""
        # 判斷與寫入在同一把鎖內完成，通知在鎖外
        with self._lock:
            present = any(it.id == item.id for it in self._items)
            if present:
                self._items = [it for it in self._items if it.id != item.id]
            else:
                self._items = [*self._items, replace(item)]
            self._persist()
        self._notify()
        return not present

    def _persist(self) -> None:
        self._storage.save(WISHLIST_KEY, [it.to_dict() for it in self._items])
