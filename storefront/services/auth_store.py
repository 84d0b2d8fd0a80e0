"""登入狀態容器：保存目前使用者與 token，並鏡像到 cookie。"""

from __future__ import annotations

import json
from typing import Any, Dict, Optional

from ..common.api_client import ApiClient, ApiError
from ..common.models.user_session import UserSession
from ..common.services.logging import log_event
from .cookie_mirror import CookieMirror
from .observable import ObservableStore
from .persistent_store import PersistentStore

USER_KEY = "user"


class AuthError(Exception):
    """登入或註冊失敗；訊息刻意保持籠統，後端細節只寫入記錄。"""


class AuthStore(ObservableStore):
    """Anonymous 與 Authenticated 兩種狀態的切換。

    is_loading 在初始化載入以及 login/register 請求進行中為 True。
    網路請求期間不持有鎖，其他 store 的操作不受影響。
    """

    def __init__(self, storage: PersistentStore, client: ApiClient, cookie: CookieMirror) -> None:
        super().__init__()
        self._storage = storage
        self._client = client
        self._cookie = cookie
        self._session: Optional[UserSession] = None
        self._loading = True
        self._pending = 0

    def init(self) -> None:
        raw = self._storage.load(USER_KEY)
        session: Optional[UserSession] = None
        if raw is not None:
            try:
                session = UserSession.from_dict(raw)
            except ValueError as exc:
                log_event("warning", "storage.schema_mismatch", key=USER_KEY, error=str(exc))
                self._storage.remove(USER_KEY)
        with self._lock:
            self._session = session
            self._mirror_cookie()
            self._loading = False
        self._notify()

    @property
    def session(self) -> Optional[UserSession]:
        with self._lock:
            return self._session

    @property
    def user(self) -> Optional[Dict[str, Any]]:
        session = self.session
        return session.public_dict() if session else None

    @property
    def is_authenticated(self) -> bool:
        return self.session is not None

    @property
    def is_loading(self) -> bool:
        with self._lock:
            return self._loading

    def login(self, email: str, password: str) -> UserSession:
        """呼叫 /auth/login，成功後建立並保存 session。

        任何失敗都會清除既有 session 並拋出 AuthError("Login failed")。
        """
        self._begin_request()
        try:
            try:
                body = self._client.post("/auth/login", {"email": email, "password": password})
                if not body:
                    raise ValueError("User data is null")
                session = UserSession.from_dict(body)
            except (ApiError, ValueError) as exc:
                log_event(
                    "error",
                    "auth.login_failed",
                    email=email,
                    error=str(exc),
                    status=getattr(exc, "status_code", None),
                )
                self._set_session(None)
                raise AuthError("Login failed") from exc
            self._set_session(session)
            log_event("info", "auth.login", user_id=session.id)
            return session
        finally:
            self._end_request()

    def register(self, name: str, email: str, password: str, username: Optional[str] = None) -> Any:
        """呼叫 /auth/register；成功後不會自動登入。"""
        payload: Dict[str, Any] = {"name": name, "email": email, "password": password}
        if username:
            payload["username"] = username
        self._begin_request()
        try:
            try:
                body = self._client.post("/auth/register", payload)
            except ApiError as exc:
                log_event("error", "auth.register_failed", email=email, error=str(exc), status=exc.status_code)
                raise AuthError("Registration failed") from exc
            log_event("info", "auth.register", email=email)
            return body
        finally:
            self._end_request()

    def logout(self) -> None:
        # 只清除本機狀態，不呼叫後端撤銷 token
        user_id = self.session.id if self.session else None
        self._set_session(None)
        log_event("info", "auth.logout", user_id=user_id)

    def _set_session(self, session: Optional[UserSession]) -> None:
        with self._lock:
            self._session = session
            if session is None:
                self._storage.remove(USER_KEY)
            else:
                self._storage.save(USER_KEY, session.to_dict())
            self._mirror_cookie()
        self._notify()

    def _mirror_cookie(self) -> None:
        if self._session is None:
            self._cookie.clear()
        else:
            self._cookie.set(json.dumps(self._session.to_dict(), separators=(",", ":")))

    def _begin_request(self) -> None:
        with self._lock:
            self._pending += 1
            self._loading = True
        self._notify()

    def _end_request(self) -> None:
        with self._lock:
            self._pending -= 1
            self._loading = self._pending > 0
        self._notify()
