"""
KeyValueStore Protocol Definition.

This module defines the interface of the persistent text store the editor
saves into. It behaves like a browser's localStorage: string keys, string
values, no structure. Both FileBackend and MemoryBackend conform to it.
"""

from typing import List, Optional, Protocol, runtime_checkable


@runtime_checkable
class KeyValueStore(Protocol):
    """
    Abstract protocol for key-value backends.
    """

    @property
    def backend_type(self) -> str:
        """Return the backend type identifier ('file' or 'memory')."""
        ...

    def get_item(self, key: str) -> Optional[str]:
        """
        Read a value.

        Returns:
            The stored string, or None if the key is absent
        """
        ...

    def set_item(self, key: str, value: str) -> None:
        """Store a string value under key, replacing any previous value."""
        ...

    def remove_item(self, key: str) -> bool:
        """
        Remove a key.

        Returns:
            True if the key existed
        """
        ...

    def clear(self) -> None:
        """Remove every key."""
        ...

    def keys(self) -> List[str]:
        """List stored keys."""
        ...
