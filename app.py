"""
Main NiceGUI application for GridGraph.

Renders the graph on a ui.interactive_image canvas, routes pointer, wheel and
keyboard input to the EditorController and drives the frame loop with ui.timer.

Controls:
- Click empty space: place a node (connected to every existing node)
- Drag a node: move it along the grid
- Right click a node: delete it and its edges
- Scroll over a node: resize it
- Hold Space: jitter every node
- Backspace: wipe the saved graph and start over
"""

from nicegui import ui
import logging
import sys

from dotenv import load_dotenv
load_dotenv()

from gridgraph.config import get_settings
from gridgraph.paths import ensure_db_dir
from gridgraph.storage import create_backend
from gridgraph.persistence import GraphPersistence
from gridgraph.canvas import CanvasRenderer
from gridgraph.editor import EditorController
from gridgraph.editor.handlers import setup_editor_handlers

logging.basicConfig(level=logging.INFO, format='%(asctime)s %(levelname)s %(name)s: %(message)s')

settings = get_settings()

# Ensure required directories exist on startup
ensure_db_dir()

# Global Styles
ui.add_head_html('''
    <style>
        body { background: #000; overflow: hidden; }
        .gridgraph-canvas { touch-action: none; }
    </style>
''', shared=True)


@ui.page('/')
def main_page():
    persistence = GraphPersistence(create_backend(settings))
    store = persistence.load(
        grid=settings['grid_size'],
        monotonic_ids=settings['monotonic_ids'],
        min_radius=settings['min_radius'],
    )
    # a node saved mid-drag must not stay attached to the pointer
    store.release_all()

    controller = EditorController(
        store,
        persistence,
        save_interval_ticks=settings['save_interval_ticks'],
    )
    renderer = CanvasRenderer(settings['grid_size'], settings['canvas_width'], settings['canvas_height'])

    state = {'canvas': None}

    def refresh_canvas():
        state['canvas'].content = renderer.render(
            controller.store, controller.hovered_node_ids(), controller.stats())

    handlers = setup_editor_handlers(controller, refresh_canvas)

    state['canvas'] = ui.interactive_image(
        size=(settings['canvas_width'], settings['canvas_height']),
        on_mouse=handlers['handle_mouse'],
        events=['mousedown', 'mousemove', 'mouseup'],
        cross=False,
    ).classes('gridgraph-canvas')
    state['canvas'].on('wheel.prevent', handlers['handle_wheel'], ['offsetX', 'offsetY', 'deltaY'])
    # right click deletes nodes, so keep the browser menu away
    state['canvas'].on('contextmenu.prevent', lambda e: None)

    ui.keyboard(on_key=handlers['handle_key'])
    ui.timer(1.0 / max(1, settings['frame_rate']), handlers['handle_tick'])

    refresh_canvas()


if __name__ in {"__main__", "__mp_main__"}:
    ui.run(
        title='GridGraph',
        port=settings['port'],
        reload=not getattr(sys, 'frozen', False),
        dark=True,
    )
