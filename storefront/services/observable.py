"""狀態容器共用的訂閱與鎖定機制。"""

from __future__ import annotations

import threading
from typing import Callable, List


class ObservableStore:
    """提供 subscribe / 通知 / 釋放的基底類別。

    每個操作都在 self._lock 內執行，確保同一個 store 的變更依序發生。
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._listeners: List[Callable[["ObservableStore"], None]] = []

    def subscribe(self, listener: Callable[["ObservableStore"], None]) -> Callable[[], None]:
        """註冊狀態變更通知，回傳取消訂閱函式。"""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            listener(self)

    def dispose(self) -> None:
        with self._lock:
            self._listeners.clear()
