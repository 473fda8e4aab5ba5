"""
Editor Handlers - NiceGUI event handlers for the canvas page.

This module keeps the event plumbing out of app.py so the page function
stays focused on layout.
"""

from nicegui import ui
from typing import Any, Callable, Dict

from gridgraph.editor.constants import CLEAR_KEY, JITTER_KEY, PRIMARY_BUTTON
from gridgraph.editor.controller import EditorController


def setup_editor_handlers(
    controller: EditorController,
    refresh_canvas: Callable[[], None],
) -> Dict[str, Callable]:
    """
    Build the event handlers for the canvas page.

    Args:
        controller: EditorController owning the graph
        refresh_canvas: Function that redraws the canvas content

    Returns:
        Dict with handler functions for binding to UI events
    """

    def handle_mouse(e):
        """interactive_image mouse events (mousedown / mousemove / mouseup)."""
        x, y = e.image_x, e.image_y
        if e.type == 'mousedown':
            controller.pointer_down(x, y, getattr(e, 'button', PRIMARY_BUTTON))
        elif e.type == 'mousemove':
            controller.pointer_move(x, y)
        elif e.type == 'mouseup':
            controller.pointer_up()
        else:
            return
        refresh_canvas()

    def handle_wheel(e):
        """DOM wheel event; args carry offsetX, offsetY and deltaY."""
        raw: Any = e.args if hasattr(e, 'args') else e
        if not isinstance(raw, dict):
            return
        controller.wheel(raw.get('offsetX', 0), raw.get('offsetY', 0), raw.get('deltaY', 0))
        refresh_canvas()

    def handle_key(e):
        """Space held = jitter, Backspace = wipe saved state."""
        if e.key == JITTER_KEY:
            if e.action.keydown:
                controller.set_jitter(True)
            elif e.action.keyup:
                controller.set_jitter(False)
        elif e.key == CLEAR_KEY and e.action.keydown and not e.action.repeat:
            controller.clear()
            ui.notify('Canvas cleared', position='bottom', timeout=1000, color='info')
            refresh_canvas()

    def handle_tick():
        """Frame timer callback."""
        controller.tick()
        refresh_canvas()

    return {
        'handle_mouse': handle_mouse,
        'handle_wheel': handle_wheel,
        'handle_key': handle_key,
        'handle_tick': handle_tick,
    }
