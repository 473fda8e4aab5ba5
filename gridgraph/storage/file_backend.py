"""
File-based Storage Backend for GridGraph.

Implements the KeyValueStore protocol with a single JSON file holding
an object of string values, e.g.:

{
  "nodes": "{\"0\": {...}}",
  "edges": "{\"0:1\": {...}}"
}

This is the default backend.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, List, Optional, Union

logger = logging.getLogger(__name__)


class FileBackend:
    """
    Local file storage.

    The file is read once on construction; every change rewrites it through
    a temporary file so a crash never leaves a half-written store behind.
    An unreadable or malformed file is logged and treated as empty.
    """

    def __init__(self, path: Union[str, Path]):
        """
        Initialize FileBackend.

        Args:
            path: Location of the JSON file (created on first write)
        """
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._items: Dict[str, str] = self._read()

    @property
    def backend_type(self) -> str:
        return "file"

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (ValueError, OSError) as e:
            # ValueError covers both bad JSON and bad UTF-8
            logger.warning(f"Failed to read store file {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Store file {self.path} does not hold a JSON object, ignoring it")
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _write(self) -> None:
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(self._items, f, indent=2, ensure_ascii=False)
            os.replace(tmp_name, self.path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value
        self._write()

    def remove_item(self, key: str) -> bool:
        if key not in self._items:
            return False
        del self._items[key]
        self._write()
        return True

    def clear(self) -> None:
        self._items = {}
        if self.path.exists():
            self.path.unlink()
        logger.info(f"Cleared store file {self.path}")

    def keys(self) -> List[str]:
        return list(self._items)
