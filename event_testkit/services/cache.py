"""Key-value caches that carry harness state across processes.

The file and Redis backends are visible to subprocesses spawned during a test
run; the in-memory backend is for single-process unit tests.
"""

from __future__ import annotations

import os
import re
import tempfile
from dataclasses import dataclass
from pathlib import Path
from threading import RLock
from typing import Dict, Optional, Protocol, Sequence, cast

import httpx

from event_testkit.core.config import TestkitSettings, get_settings


class KeyValueCache(Protocol):
    """Contract for the caches backing process-wide harness state."""

    identifier: str

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...

    def remove(self, key: str) -> None:
        ...

    def flush(self) -> None:
        ...

    def setup(self) -> None:
        ...


@dataclass
class InMemoryCache(KeyValueCache):
    """Thread-safe in-memory cache, private to the current process."""

    identifier: str = "memory"

    def __post_init__(self) -> None:
        self._store: Dict[str, str] = {}
        self._lock = RLock()

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._store.get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._store[key] = value

    def remove(self, key: str) -> None:
        with self._lock:
            self._store.pop(key, None)

    def flush(self) -> None:
        with self._lock:
            self._store.clear()

    def setup(self) -> None:
        pass


class FileCache(KeyValueCache):
    """One file per key below ``directory/namespace``."""

    _UNSAFE_CHARACTERS = re.compile(r"[^A-Za-z0-9_.-]")

    def __init__(self, *, directory: str, namespace: str) -> None:
        self.identifier = namespace
        self._path = Path(directory).expanduser().resolve() / namespace

    def get(self, key: str) -> Optional[str]:
        try:
            return self._entry(key).read_text(encoding="utf-8")
        except FileNotFoundError:
            return None

    def set(self, key: str, value: str) -> None:
        self.setup()
        # Write then rename so readers in other processes never see partial content.
        fd, tmp_name = tempfile.mkstemp(dir=self._path, prefix=".tmp-")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(value)
            os.replace(tmp_name, self._entry(key))
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def remove(self, key: str) -> None:
        self._entry(key).unlink(missing_ok=True)

    def flush(self) -> None:
        if not self._path.is_dir():
            return
        for entry in self._path.iterdir():
            if entry.is_file():
                entry.unlink(missing_ok=True)

    def setup(self) -> None:
        self._path.mkdir(parents=True, exist_ok=True)

    def _entry(self, key: str) -> Path:
        return self._path / self._UNSAFE_CHARACTERS.sub("_", key)


class RedisCache(KeyValueCache):
    """Redis-backed cache using the Upstash REST API."""

    def __init__(
        self,
        *,
        url: str,
        token: str,
        prefix: str,
        namespace: str,
        ttl_seconds: int,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.identifier = namespace
        self._client = httpx.Client(
            base_url=url.rstrip("/"),
            headers={"Authorization": f"Bearer {token}"},
            timeout=5.0,
            transport=transport,
        )
        # 0 or less stores keys without expiry
        self._ttl_seconds = ttl_seconds
        self._prefix = f"{prefix}:{namespace}"

    def get(self, key: str) -> Optional[str]:
        result = self._execute("GET", self._key(key))
        if result is None:
            return None
        return str(result)

    def set(self, key: str, value: str) -> None:
        if self._ttl_seconds > 0:
            self._execute("SET", self._key(key), value, "EX", str(self._ttl_seconds))
        else:
            self._execute("SET", self._key(key), value)

    def remove(self, key: str) -> None:
        self._execute("DEL", self._key(key))

    def flush(self) -> None:
        keys = list(cast(Sequence[str], self._execute("KEYS", f"{self._prefix}:*") or []))
        if keys:
            self._execute("DEL", *keys)

    def setup(self) -> None:
        self._execute("PING")

    def close(self) -> None:
        self._client.close()

    def _key(self, key: str) -> str:
        return f"{self._prefix}:{key}"

    def _execute(self, *command: str) -> Optional[object]:
        response = self._client.post("/", json=list(command))
        response.raise_for_status()
        payload = response.json()
        return payload.get("result")


def build_cache(settings: TestkitSettings) -> KeyValueCache:
    """Create the cache backend selected by ``settings.cache_backend``."""

    if settings.cache_backend == "redis":
        if not (settings.redis_url and settings.redis_token):
            raise ValueError("cache_backend 'redis' requires redis_url and redis_token")
        return RedisCache(
            url=settings.redis_url,
            token=settings.redis_token,
            prefix=settings.redis_cache_prefix,
            namespace=settings.cache_namespace,
            ttl_seconds=settings.redis_cache_ttl,
        )
    if settings.cache_backend == "file":
        return FileCache(directory=settings.cache_directory, namespace=settings.cache_namespace)
    return InMemoryCache()


_shared_cache: Optional[KeyValueCache] = None


def get_cache() -> KeyValueCache:
    """Return the process-wide cache instance."""

    global _shared_cache
    if _shared_cache is None:
        _shared_cache = build_cache(get_settings())
    return _shared_cache


def set_cache(cache: Optional[KeyValueCache]) -> None:
    """Override the shared cache (primarily for tests)."""

    global _shared_cache
    _shared_cache = cache
