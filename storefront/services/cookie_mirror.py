"""登入狀態的 cookie 鏡像，供 /dashboard 路由守衛讀取。"""

from __future__ import annotations

import threading
from typing import Optional

from flask import Response

COOKIE_NAME = "user"
COOKIE_MAX_AGE = 7 * 24 * 60 * 60
COOKIE_PATH = "/"
COOKIE_SAMESITE = "Lax"


class CookieMirror:
    """保存目前 session 對應的 cookie 值。

    只有登入、登出的回應會呼叫 write_to()，其他請求不會收到這個 cookie。
    """

    def __init__(self, name: str = COOKIE_NAME, max_age: int = COOKIE_MAX_AGE) -> None:
        self.name = name
        self.max_age = max_age
        self._value: Optional[str] = None
        self._lock = threading.Lock()

    @property
    def value(self) -> Optional[str]:
        with self._lock:
            return self._value

    def set(self, value: str) -> None:
        with self._lock:
            self._value = value

    def clear(self) -> None:
        with self._lock:
            self._value = None

    def write_to(self, response: Response) -> Response:
        """把目前的值寫入回應；沒有 session 時刪除 cookie。"""
        value = self.value
        if value is None:
            response.delete_cookie(self.name, path=COOKIE_PATH, samesite=COOKIE_SAMESITE)
        else:
            response.set_cookie(
                self.name,
                value,
                max_age=self.max_age,
                path=COOKIE_PATH,
                samesite=COOKIE_SAMESITE,
            )
        return response
