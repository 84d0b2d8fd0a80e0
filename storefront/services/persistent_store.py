"""以資料夾為單位的本機持久化儲存（每個 key 一個 JSON 檔）。"""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any, Optional

from ..common.services.logging import log_event

_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


class PersistentStore:
    """讀寫設定檔資料夾內的具名集合。

    讀取失敗一律回傳 None 並記錄，寫入失敗只記錄不拋出。
    不做跨行程的一致性控制：最後寫入者覆蓋先前內容。
    """

    def __init__(self, profile_dir: Path) -> None:
        self._profile_dir = Path(profile_dir)
        self._profile_dir.mkdir(parents=True, exist_ok=True)

    @property
    def profile_dir(self) -> Path:
        return self._profile_dir

    def path_for(self, key: str) -> Path:
        if not _KEY_PATTERN.match(key or ""):
            raise ValueError(f"invalid storage key: {key!r}")
        return self._profile_dir / f"{key}.json"

    def load(self, key: str) -> Optional[Any]:
        """讀取指定 key；不存在或內容無法解析時回傳 None。"""
        path = self.path_for(key)
        if not path.exists():
            return None
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            log_event("warning", "storage.parse_failed", key=key, error=str(exc))
            return None

    def save(self, key: str, value: Any) -> None:
        path = self.path_for(key)
        try:
            path.write_text(json.dumps(value, ensure_ascii=False), encoding="utf-8")
        except OSError as exc:
            log_event("error", "storage.save_failed", key=key, error=str(exc))

    def remove(self, key: str) -> None:
        path = self.path_for(key)
        try:
            path.unlink()
        except FileNotFoundError:
            return
        except OSError as exc:
            log_event("error", "storage.remove_failed", key=key, error=str(exc))
