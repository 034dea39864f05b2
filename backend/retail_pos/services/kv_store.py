"""Small persisted key/value store for per-terminal state.

Holds the last-sale timestamp and the language preference. Callers receive
the store as a dependency so tests can swap in ``InMemoryKeyValueStore``.
"""

from typing import Protocol

from redis import asyncio as aioredis

from retail_pos.core.config import settings


class KeyValueStore(Protocol):
    async def get(self, key: str) -> str | None: ...

    async def set(self, key: str, value: str) -> None: ...

    async def set_if_absent(self, key: str, value: str, ttl_seconds: int | None = None) -> bool:
        """Atomically store ``value`` only when ``key`` is unset; True when stored."""
        ...


class InMemoryKeyValueStore:
    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> str | None:
        return self._data.get(key)

    async def set(self, key: str, value: str) -> None:
        self._data[key] = value

    async def set_if_absent(self, key: str, value: str, ttl_seconds: int | None = None) -> bool:
        # Check and write happen without yielding to the event loop
        if key in self._data:
            return False
        self._data[key] = value
        return True


class RedisKeyValueStore:
    def __init__(self, client: aioredis.Redis, prefix: str = "retail_pos:"):
        self._client = client
        self._prefix = prefix

    @classmethod
    def from_url(cls, url: str) -> "RedisKeyValueStore":
        return cls(aioredis.from_url(url, decode_responses=True))

    async def get(self, key: str) -> str | None:
        return await self._client.get(self._prefix + key)

    async def set(self, key: str, value: str) -> None:
        await self._client.set(self._prefix + key, value)

    async def set_if_absent(self, key: str, value: str, ttl_seconds: int | None = None) -> bool:
        return bool(await self._client.set(self._prefix + key, value, nx=True, ex=ttl_seconds))


_store: KeyValueStore | None = None


def get_kv_store() -> KeyValueStore:
    """Return the process-wide store selected by ``KV_BACKEND``."""
    global _store
    if _store is None:
        if settings.KV_BACKEND == "memory":
            _store = InMemoryKeyValueStore()
        else:
            _store = RedisKeyValueStore.from_url(settings.REDIS_URL)
    return _store
