"""Key-value storage backends holding opaque blobs under fixed keys."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from redis.exceptions import RedisError

from herodex.settings import AppSettings

if TYPE_CHECKING:
    from redis import Redis

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Raised when a backend cannot read or write a value."""


class CorruptDocumentError(StorageError):
    """Raised when the file backing a store does not hold a JSON object."""


class KeyValueStore(Protocol):
    """Minimal surface the favorites store relies on."""

    def get(self, key: str) -> bytes | None: ...

    def set(self, key: str, value: bytes) -> None: ...


class MemoryStore:
    """In-process store; contents vanish with the process."""

    def __init__(self, initial: dict[str, bytes] | None = None) -> None:
        self._values: dict[str, bytes] = dict(initial or {})

    def get(self, key: str) -> bytes | None:
        return self._values.get(key)

    def set(self, key: str, value: bytes) -> None:
        self._values[key] = value


class JsonFileStore:
    """Single JSON object file mapping keys to UTF-8 text values.

    Every :meth:`set` rewrites the whole file through a temporary sibling and
    ``os.replace`` so readers only ever observe a complete document.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def get(self, key: str) -> bytes | None:
        value = self._read_all().get(key)
        if value is None:
            return None
        return value.encode("utf-8")

    def set(self, key: str, value: bytes) -> None:
        try:
            text = value.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise StorageError(f"Value for {key!r} is not valid UTF-8") from exc

        try:
            values = self._read_all()
        except CorruptDocumentError as exc:
            logger.warning(
                "Discarding unreadable store %s before writing %r: %s", self.path, key, exc
            )
            values = {}
        values[key] = text
        self._write_all(values)

    def _read_all(self) -> dict[str, str]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as exc:
            raise StorageError(f"Unable to read {self.path}: {exc}") from exc

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise CorruptDocumentError(f"{self.path} is not valid JSON: {exc}") from exc
        if not isinstance(data, dict):
            raise CorruptDocumentError(f"{self.path} does not contain a JSON object")
        return {str(key): str(value) for key, value in data.items()}

    def _write_all(self, values: dict[str, str]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    json.dump(values, handle, ensure_ascii=False, indent=2)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise StorageError(f"Unable to write {self.path}: {exc}") from exc


class RedisStore:
    """Synchronous Redis wrapper translating client failures into ``StorageError``."""

    def __init__(self, client: Redis) -> None:
        self._redis = client

    @classmethod
    def from_url(cls, url: str) -> RedisStore:
        from redis import Redis

        return cls(Redis.from_url(url))

    def get(self, key: str) -> bytes | None:
        try:
            payload = self._redis.get(key)
        except RedisError as exc:
            raise StorageError(f"Redis get failed for key {key}: {exc}") from exc
        if payload is None:
            return None
        if isinstance(payload, str):
            return payload.encode("utf-8")
        return payload

    def set(self, key: str, value: bytes) -> None:
        try:
            self._redis.set(key, value)
        except RedisError as exc:
            raise StorageError(f"Redis set failed for key {key}: {exc}") from exc


def create_store(active_settings: AppSettings) -> KeyValueStore:
    """Build the backend selected by ``HERODEX_STORAGE_BACKEND``."""

    backend = active_settings.storage_backend
    if backend == "memory":
        return MemoryStore()
    if backend == "redis":
        logger.info("Persisting favorites to Redis at %s", active_settings.redis_url)
        return RedisStore.from_url(active_settings.redis_url)

    path = active_settings.resolved_favorites_path
    logger.debug("Persisting favorites to %s", path)
    return JsonFileStore(path)


__all__ = [
    "CorruptDocumentError",
    "JsonFileStore",
    "KeyValueStore",
    "MemoryStore",
    "RedisStore",
    "StorageError",
    "create_store",
]
