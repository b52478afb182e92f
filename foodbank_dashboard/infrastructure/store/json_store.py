from __future__ import annotations

import json
import logging
import threading
from pathlib import Path

from foodbank_dashboard.application.ports.key_value_store import KeyValueStorePort


class JsonKeyValueStore(KeyValueStorePort):
    """String key-value pairs in a single JSON file, rewritten atomically on every set."""

    def __init__(self, path: str = "./data/version_store.json") -> None:
        self._path = Path(path)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()
        self._logger = logging.getLogger(__name__)

    def _load(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            # A corrupted file counts as empty; the next set() rewrites it.
            self._logger.warning("Key-value store unreadable, starting empty", extra={"reason": str(e)})
            return {}
        if not isinstance(data, dict):
            return {}
        return {str(k): str(v) for k, v in data.items() if v is not None}

    def _save(self, data: dict[str, str]) -> None:
        temp_path = self._path.with_suffix(".json.tmp")
        try:
            with open(temp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            temp_path.replace(self._path)
        except Exception:
            if temp_path.exists():
                temp_path.unlink()
            raise

    def get(self, key: str) -> str | None:
        with self._lock:
            return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            data = self._load()
            data[key] = value
            self._save(data)
