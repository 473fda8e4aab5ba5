"""
Backend Factory for GridGraph.

Creates the key-value backend named by the 'storage_backend' setting.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union, TYPE_CHECKING

from gridgraph.paths import get_default_state_path
from gridgraph.storage.file_backend import FileBackend
from gridgraph.storage.memory_backend import MemoryBackend

if TYPE_CHECKING:
    from gridgraph.storage.protocol import KeyValueStore

logger = logging.getLogger(__name__)

# Default backend type
DEFAULT_BACKEND = "file"

BACKEND_TYPES = ("file", "memory")


def get_backend_type(config: Optional[Dict[str, Any]] = None) -> str:
    """
    Get the storage backend type from a settings dict.

    Returns:
        'file' or 'memory'
    """
    backend_type = (config or {}).get("storage_backend") or DEFAULT_BACKEND
    if backend_type not in BACKEND_TYPES:
        logger.warning(f"Unknown storage backend '{backend_type}', falling back to '{DEFAULT_BACKEND}'")
        return DEFAULT_BACKEND
    return backend_type


def create_backend(
    config: Optional[Dict[str, Any]] = None,
    force_backend: Optional[str] = None,
    path: Optional[Union[str, Path]] = None,
) -> "KeyValueStore":
    """
    Create a key-value backend instance.

    Args:
        config: Settings dict (see gridgraph.config.get_settings)
        force_backend: Override the configured backend type
        path: Override the file location of the file backend

    Returns:
        KeyValueStore instance (FileBackend or MemoryBackend)
    """
    config = config or {}
    backend_type = force_backend or get_backend_type(config)

    if backend_type == "memory":
        return MemoryBackend()

    store_path = path or config.get("storage_path") or get_default_state_path()
    logger.info(f"Using file store at {store_path}")
    return FileBackend(store_path)
