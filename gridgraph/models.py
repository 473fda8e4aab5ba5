"""
Plain data types for the graph: Node, Edge and the grid helpers.

Edges hold endpoint ids only; node lifetime belongs to GraphStore.
"""

import math
from dataclasses import dataclass
from typing import Any, Dict

DEFAULT_GRID = 48

# Separator used when deriving an edge id from its two endpoint ids
EDGE_ID_SEPARATOR = ":"


def quantize(value: float, grid: int = DEFAULT_GRID) -> int:
    """
    Snap a raw coordinate to the nearest multiple of grid.

    Halves round up (towards +inf), so -24 -> 0 and 24 -> 48 with grid=48.
    """
    return int(math.floor(value / grid + 0.5)) * grid


def derive_edge_id(node1_id: str, node2_id: str) -> str:
    """Edge id: both endpoint ids sorted as strings and joined ("10" sorts before "9")."""
    return EDGE_ID_SEPARATOR.join(sorted([node1_id, node2_id]))


@dataclass
class Node:
    id: str
    x: int
    y: int
    radius: float
    dragging: bool = False

    def distance_to(self, x: float, y: float) -> float:
        return math.hypot(self.x - x, self.y - y)

    def contains(self, x: float, y: float, tolerance: float = 0.0) -> bool:
        """True if (x, y) lies strictly inside the node circle."""
        return self.distance_to(x, y) < self.radius + tolerance

    def to_record(self) -> Dict[str, Any]:
        """Persisted form: {id, x, y, r, dragging}."""
        return {
            "id": self.id,
            "x": self.x,
            "y": self.y,
            "r": self.radius,
            "dragging": self.dragging,
        }


@dataclass
class Edge:
    id: str
    node1: str
    node2: str

    def touches(self, node_id: str) -> bool:
        return self.node1 == node_id or self.node2 == node_id

    def endpoints(self) -> frozenset:
        return frozenset((self.node1, self.node2))
