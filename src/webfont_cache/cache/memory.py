"""In-process memory tier shared by the resolution caches."""

import logging
from typing import Any

logger = logging.getLogger(__name__)


class MemoryStore:
    """Namespaced key-value store living as long as its owner.

    Writers are serialized per key by the dedup executor, so no lock is held here.
    """

    def __init__(self):
        self._data: dict[str, dict[str, Any]] = {}

    def get(self, namespace: str, key: str) -> Any | None:
        return self._data.get(namespace, {}).get(key)

    def set(self, namespace: str, key: str, value: Any) -> None:
        self._data.setdefault(namespace, {})[key] = value

    def delete(self, namespace: str, key: str) -> bool:
        """Remove one entry, returning whether it existed."""
        return self._data.get(namespace, {}).pop(key, None) is not None

    def clear(self, namespace: str | None = None) -> None:
        if namespace is None:
            self._data.clear()
        else:
            self._data.pop(namespace, None)
        logger.debug(f"Memory store cleared (namespace={namespace})")

    def keys(self, namespace: str) -> list[str]:
        return list(self._data.get(namespace, {}))

    def __len__(self) -> int:
        return sum(len(entries) for entries in self._data.values())
