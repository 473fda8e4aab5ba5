"""
In-memory Storage Backend for GridGraph.

Nothing survives the process; used for throwaway sessions and tests.
"""

from typing import Dict, List, Optional


class MemoryBackend:
    """Dict-backed KeyValueStore."""

    def __init__(self, items: Optional[Dict[str, str]] = None):
        self._items: Dict[str, str] = dict(items or {})

    @property
    def backend_type(self) -> str:
        return "memory"

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> bool:
        return self._items.pop(key, None) is not None

    def clear(self) -> None:
        self._items.clear()

    def keys(self) -> List[str]:
        return list(self._items)
