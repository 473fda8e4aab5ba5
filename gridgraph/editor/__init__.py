"""
Interaction layer for the GridGraph canvas.

- EditorController: pointer/wheel/keyboard state and the frame loop
- setup_editor_handlers: NiceGUI event plumbing for app.py

Usage:
    from gridgraph.editor import EditorController
    from gridgraph.editor.handlers import setup_editor_handlers
"""

from gridgraph.editor.constants import (
    PRIMARY_BUTTON,
    SECONDARY_BUTTON,
    SAVE_INTERVAL_TICKS,
)
from gridgraph.editor.controller import EditorController, EditorStats, PointerState

__all__ = [
    'EditorController',
    'EditorStats',
    'PointerState',
    'PRIMARY_BUTTON',
    'SECONDARY_BUTTON',
    'SAVE_INTERVAL_TICKS',
]
