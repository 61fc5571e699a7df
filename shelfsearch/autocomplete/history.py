"""Key-value stores for the recent-search history.

A store only needs whole-value ``get``/``set``/``delete``; the autocomplete
session owns the JSON encoding and the dedupe/cap rules.
"""
from __future__ import annotations

import json
import logging
import os
import threading
from pathlib import Path
from typing import Any, Dict, Optional, Protocol

import redis

from ..config import HistorySettings, history_settings
from ..safe_json import safe_json_loads

logger = logging.getLogger(__name__)


class HistoryStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class InMemoryHistoryStore:
    """Process-local store; useful for tests and single-process hosts."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


class JsonFileHistoryStore:
    """All keys kept in one JSON object on disk, rewritten atomically."""

    def __init__(self, path: str | os.PathLike[str]):
        self.path = Path(path)
        self._lock = threading.Lock()

    def _read(self) -> Dict[str, str]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        data = safe_json_loads(raw)
        if not isinstance(data, dict):
            logger.warning("Ignoring unreadable history file %s", self.path)
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _write(self, data: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
        os.replace(tmp, self.path)

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            data = self._read()
            data[key] = value
            self._write(data)

    def delete(self, key: str) -> None:
        with self._lock:
            data = self._read()
            if data.pop(key, None) is not None:
                self._write(data)


class RedisHistoryStore:
    """Redis-backed store.

    Connection errors degrade to an empty history rather than failing the
    search box.
    """

    def __init__(
        self,
        settings: HistorySettings = history_settings,
        *,
        client: Any = None,
    ):
        self.settings = settings
        self._client = client

    def _get_client(self):
        """Lazy load Redis client."""
        if self._client is None:
            self._client = redis.Redis(
                host=self.settings.redis_host,
                port=self.settings.redis_port,
                db=self.settings.redis_db,
                password=self.settings.redis_password,
                decode_responses=True,
            )
        return self._client

    def _key(self, key: str) -> str:
        return f"{self.settings.redis_key_prefix}:history:{key}"

    def get(self, key: str) -> Optional[str]:
        try:
            value = self._get_client().get(self._key(key))
        except redis.RedisError as exc:
            logger.warning("Recent searches unavailable: %s", exc)
            return None
        if isinstance(value, bytes):
            value = value.decode("utf-8", errors="replace")
        return value

    def set(self, key: str, value: str) -> None:
        try:
            self._get_client().set(self._key(key), value)
        except redis.RedisError as exc:
            logger.warning("Could not persist recent searches: %s", exc)

    def delete(self, key: str) -> None:
        try:
            self._get_client().delete(self._key(key))
        except redis.RedisError as exc:
            logger.warning("Could not clear recent searches: %s", exc)

    def close(self) -> None:
        """Close Redis connection."""
        if self._client is not None:
            self._client.close()
            self._client = None


def create_history_store(settings: HistorySettings = history_settings) -> HistoryStore:
    backend = (settings.history_backend or "memory").strip().lower()
    if backend == "file":
        return JsonFileHistoryStore(settings.history_path)
    if backend == "redis":
        return RedisHistoryStore(settings)
    if backend != "memory":
        raise ValueError(f"Unknown history backend '{settings.history_backend}'")
    return InMemoryHistoryStore()
