"""商店前台應用設定模組。"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .common.api_client import DEFAULT_BASE_URL, DEFAULT_TIMEOUT


def validate_currency(value: Optional[str]) -> str:
    v = (value or "USD").strip().upper()
    if len(v) != 3:
        raise ValueError("Invalid currency code: expected ISO4217 length 3")
    return v


def _get_float(key: str, default: float) -> float:
    raw = os.environ.get(key)
    if raw is None or not raw.strip():
        return default
    value = float(raw)
    if value <= 0:
        raise ValueError(f"{key} must be > 0")
    return value


@dataclass
class StorefrontConfig:
    """封裝商店前台的設定值。"""

    secret_key: str
    api_base_url: str
    api_timeout: float
    data_dir: Path
    log_level: str = "INFO"
    currency: str = "USD"

    @property
    def uploads_url(self) -> str:
        return f"{self.api_base_url.rstrip('/')}/uploads"

    @property
    def profile_dir(self) -> Path:
        # 等同瀏覽器設定檔：cart / wishlist / user 各存一個檔案
        return self.data_dir / "profile"

    @classmethod
    def load(cls, env_file: Optional[Path] = None) -> "StorefrontConfig":
        """從環境變數（與 .env）建構設定，並確保資料目錄存在。"""

        app_root = Path(__file__).resolve().parent
        load_dotenv(dotenv_path=env_file or app_root.parent / ".env")

        data_dir = Path(os.environ.get("STOREFRONT_DATA_DIR") or app_root.parent / "data")
        config = cls(
            secret_key=os.environ.get("STOREFRONT_SECRET_KEY", "storefront-dev-secret"),
            api_base_url=(os.environ.get("STOREFRONT_API_BASE_URL") or DEFAULT_BASE_URL).rstrip("/"),
            api_timeout=_get_float("STOREFRONT_API_TIMEOUT", DEFAULT_TIMEOUT),
            data_dir=data_dir,
            log_level=os.environ.get("STOREFRONT_LOG_LEVEL", "INFO").upper(),
            currency=validate_currency(os.environ.get("STOREFRONT_CURRENCY")),
        )

        config.data_dir.mkdir(parents=True, exist_ok=True)
        config.profile_dir.mkdir(parents=True, exist_ok=True)
        return config
