"""
Storage backend abstraction for GridGraph.

Supports multiple key-value backends:
- FileBackend: Local JSON file (default)
- MemoryBackend: Process memory only
"""

from gridgraph.storage.protocol import KeyValueStore
from gridgraph.storage.file_backend import FileBackend
from gridgraph.storage.memory_backend import MemoryBackend
from gridgraph.storage.factory import create_backend, get_backend_type

__all__ = [
    'KeyValueStore',
    'FileBackend',
    'MemoryBackend',
    'create_backend',
    'get_backend_type',
]
