"""Client-local durable key-value storage port."""

from typing import Protocol


class KeyValueStore(Protocol):
    """Port for small persisted client settings."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...
