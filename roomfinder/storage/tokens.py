from __future__ import annotations

from typing import Protocol

ACCESS_TOKEN_KEY = "accessToken"


class KeyValueStore(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class InMemoryStore:
    """Process-local ``KeyValueStore``."""

    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


class TokenStore:
    """The bearer token issued by the backend, kept in an injected store."""

    def __init__(self, store: KeyValueStore | None = None) -> None:
        self._store = store if store is not None else InMemoryStore()

    def get_access_token(self) -> str | None:
        return self._store.get(ACCESS_TOKEN_KEY)

    def save_access_token(self, access_token: str) -> None:
        self._store.set(ACCESS_TOKEN_KEY, access_token)

    def clear(self) -> None:
        self._store.delete(ACCESS_TOKEN_KEY)
