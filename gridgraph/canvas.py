"""
Canvas renderer that produces the SVG overlay for the editor's interactive image.

The scene is drawn in layers:
- black background with a faint grid every G pixels
- white node circles
- edges dimmed by default, highlighted while an endpoint is dragged or hovered
- a text overlay with fps, node/edge counts and each node's edge count

Graph structure is read through GraphStore.to_networkx() so the renderer works
on the same attributes the store exposes.
"""

from typing import Collection, Iterable, List, Optional

import networkx as nx

from gridgraph.editor.controller import EditorStats
from gridgraph.graph_store import GraphStore

BACKGROUND = "#000000"
FOREGROUND = "#ffffff"
DRAGGING_TEXT = "#ff0000"

GRID_OPACITY = 50 / 255
EDGE_DIM_OPACITY = 50 / 255
EDGE_DIM_WIDTH = 2
EDGE_HIGHLIGHT_WIDTH = 4
NODE_STROKE_WIDTH = 2

TEXT_X = 10
TEXT_FIRST_LINE = 20
TEXT_LINE_HEIGHT = 20


class CanvasRenderer:
    """
    Build the SVG content (without the outer <svg> element) for one frame.
    """

    def __init__(self, grid: int, width: int, height: int):
        self.grid = grid
        self.width = width
        self.height = height

    def render(self, store: GraphStore, hovered: Collection[str] = (),
               stats: Optional[EditorStats] = None) -> str:
        """
        Render one frame.

        Args:
            store: graph to draw
            hovered: ids of the nodes under the pointer
            stats: overlay figures; the overlay is skipped when None
        """
        G = store.to_networkx()
        parts = [f'<rect x="0" y="0" width="{self.width}" height="{self.height}" fill="{BACKGROUND}" />']
        parts.extend(self._grid_lines())
        parts.extend(self._nodes(G))
        parts.extend(self._edges(G, hovered))
        if stats is not None:
            parts.extend(self._overlay(stats))
        return "\n".join(parts)

    def _grid_lines(self) -> Iterable[str]:
        style = f'stroke="{FOREGROUND}" stroke-opacity="{GRID_OPACITY:.3f}" stroke-width="1"'
        for x in range(0, self.width, self.grid):
            yield f'<line x1="{x}" y1="0" x2="{x}" y2="{self.height}" {style} />'
        for y in range(0, self.height, self.grid):
            yield f'<line x1="0" y1="{y}" x2="{self.width}" y2="{y}" {style} />'

    def _nodes(self, G: nx.Graph) -> Iterable[str]:
        for _, attrs in G.nodes(data=True):
            yield (
                f'<circle cx="{attrs["x"]}" cy="{attrs["y"]}" r="{max(attrs["radius"], 0)}" '
                f'fill="{FOREGROUND}" stroke="{FOREGROUND}" stroke-width="{NODE_STROKE_WIDTH}" />'
            )

    @staticmethod
    def is_highlighted(G: nx.Graph, u: str, v: str, hovered: Collection[str]) -> bool:
        """An edge lights up while either endpoint is dragged or under the pointer."""
        return any(G.nodes[node_id]["dragging"] or node_id in hovered for node_id in (u, v))

    def _edges(self, G: nx.Graph, hovered: Collection[str]) -> Iterable[str]:
        for u, v in G.edges():
            a, b = G.nodes[u], G.nodes[v]
            if self.is_highlighted(G, u, v, hovered):
                style = f'stroke="{FOREGROUND}" stroke-width="{EDGE_HIGHLIGHT_WIDTH}"'
            else:
                style = f'stroke="{FOREGROUND}" stroke-opacity="{EDGE_DIM_OPACITY:.3f}" stroke-width="{EDGE_DIM_WIDTH}"'
            yield f'<line x1="{a["x"]}" y1="{a["y"]}" x2="{b["x"]}" y2="{b["y"]}" {style} />'

    def _overlay(self, stats: EditorStats) -> List[str]:
        lines = [
            (f"{stats.fps:.2f} fps", FOREGROUND),
            (f"Nodes: {stats.node_count}", FOREGROUND),
            (f"Edges: {stats.edge_count}", FOREGROUND),
        ]
        for node_id, degree, dragging in stats.degrees:
            lines.append((f"{node_id}: {degree}", DRAGGING_TEXT if dragging else FOREGROUND))

        texts = []
        for i, (text, color) in enumerate(lines):
            y = TEXT_FIRST_LINE + i * TEXT_LINE_HEIGHT
            texts.append(f'<text x="{TEXT_X}" y="{y}" fill="{color}" font-size="12">{_escape(text)}</text>')
        return texts


def _escape(text: str) -> str:
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")
