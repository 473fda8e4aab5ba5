"""
Where GridGraph keeps its files on disk.

Everything hangs off one application directory: the project checkout when
running from source, or the folder holding the executable in a frozen
(PyInstaller) build. The saved graph lives under db/, settings in config.json.
"""

import sys
from pathlib import Path


def get_app_dir() -> Path:
    """Project root from source, executable folder when frozen."""
    if getattr(sys, 'frozen', False):
        return Path(sys.executable).parent
    else:
        return Path(__file__).parent.parent


def get_db_dir() -> Path:
    return get_app_dir() / "db"


def get_config_path() -> Path:
    return get_app_dir() / "config.json"


def get_default_state_path() -> Path:
    """File used by the file storage backend when storage_path is not set."""
    return get_db_dir() / "state.json"


def ensure_db_dir() -> Path:
    """Create db/ if missing and return it."""
    db_dir = get_db_dir()
    db_dir.mkdir(parents=True, exist_ok=True)
    return db_dir
