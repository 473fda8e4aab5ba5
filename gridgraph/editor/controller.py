"""
Editor Controller - Single source of truth for interaction state.

Translates pointer, wheel and keyboard input into GraphStore mutations and
drives the per-frame work (jitter, periodic save). Knows nothing about
NiceGUI; handlers.py adapts UI events to these methods.
"""

import logging
import random
import time
from collections import deque
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple

from gridgraph.editor.constants import (
    FPS_WINDOW,
    PRIMARY_BUTTON,
    SAVE_INTERVAL_TICKS,
    SECONDARY_BUTTON,
)
from gridgraph.graph_store import GraphStore
from gridgraph.persistence import GraphPersistence

logger = logging.getLogger(__name__)


@dataclass
class PointerState:
    """Last known pointer position and button state."""
    x: float = 0
    y: float = 0
    pressed: bool = False
    button: Optional[int] = None


@dataclass
class EditorStats:
    fps: float = 0.0
    node_count: int = 0
    edge_count: int = 0
    # (node id, incident edge count, dragging)
    degrees: List[Tuple[str, int, bool]] = field(default_factory=list)


class EditorController:
    """Applies user input to a GraphStore and persists it on a tick cadence."""

    def __init__(self, store: GraphStore, persistence: Optional[GraphPersistence] = None,
                 save_interval_ticks: int = SAVE_INTERVAL_TICKS,
                 rng: Optional[random.Random] = None,
                 clock: Callable[[], float] = time.monotonic):
        self.store = store
        self.persistence = persistence
        self.save_interval_ticks = max(1, save_interval_ticks)
        self.pointer = PointerState()
        self.jitter_active = False
        self.tick_count = 0
        self._rng = rng or random.Random()
        self._clock = clock
        self._frame_times = deque(maxlen=FPS_WINDOW)

    # --- Pointer ---

    def pointer_down(self, x: float, y: float, button: int = PRIMARY_BUTTON) -> None:
        self.pointer = PointerState(x=x, y=y, pressed=True, button=button)
        node = self.store.find_node_at(x, y)

        if node is None:
            self.store.create_node(x, y)
        elif button == PRIMARY_BUTTON:
            self.store.set_dragging(node.id, True)
        elif button == SECONDARY_BUTTON:
            self.store.delete_node(node.id)

    def pointer_move(self, x: float, y: float) -> None:
        self.pointer = PointerState(x=x, y=y, pressed=self.pointer.pressed, button=self.pointer.button)
        if not self.pointer.pressed:
            return

        node = self.store.get_dragging_node()
        if node:
            self.store.move_node(node.id, x, y)
        else:
            # dragging over empty canvas keeps placing nodes
            self.store.create_node(x, y)

    def pointer_up(self) -> None:
        self.pointer = PointerState(x=self.pointer.x, y=self.pointer.y)
        node = self.store.get_dragging_node()
        if node:
            self.store.set_dragging(node.id, False)

    def wheel(self, x: float, y: float, delta: float) -> None:
        node = self.store.find_node_at(x, y)
        if node:
            self.store.resize_node(node.id, delta)

    # --- Keyboard ---

    def set_jitter(self, active: bool) -> None:
        self.jitter_active = active

    def clear(self) -> None:
        """Wipe persisted state and start over with an empty graph."""
        if self.persistence:
            self.persistence.clear()
        self.store.clear()
        self.pointer = PointerState(x=self.pointer.x, y=self.pointer.y)
        self.tick_count = 0

    # --- Frame loop ---

    def tick(self) -> bool:
        """
        Advance one frame.

        Returns:
            True if this tick wrote a snapshot to the backend
        """
        self.tick_count += 1
        self._frame_times.append(self._clock())

        if self.jitter_active:
            self.store.jitter(self._rng)

        if self.tick_count % self.save_interval_ticks == 0:
            return self.save()
        return False

    def save(self) -> bool:
        if not self.persistence:
            return False
        try:
            self.persistence.save(self.store)
        except OSError as e:
            logger.warning(f"Failed to save graph: {e}")
            return False
        return True

    # --- Queries ---

    def fps(self) -> float:
        if len(self._frame_times) < 2:
            return 0.0
        elapsed = self._frame_times[-1] - self._frame_times[0]
        if elapsed <= 0:
            return 0.0
        return (len(self._frame_times) - 1) / elapsed

    def hovered_node_ids(self) -> List[str]:
        return [node.id for node in self.store.nodes.values()
                if node.contains(self.pointer.x, self.pointer.y)]

    def stats(self) -> EditorStats:
        return EditorStats(
            fps=self.fps(),
            node_count=len(self.store.nodes),
            edge_count=len(self.store.edges),
            degrees=[
                (node.id, len(self.store.edges_incident_to(node.id)), node.dragging)
                for node in self.store.nodes.values()
            ],
        )
