"""
GraphStore - the authoritative set of nodes and edges.

Structure:
- nodes: id -> Node, in insertion order
- edges: id -> Edge, in insertion order

Every node created through create_node() is connected to every node that
existed before it, so a run of creations without deletions yields a
complete graph. Deleting a node first deletes its incident edges.
"""

import logging
import random
from typing import Any, Dict, List, Mapping, Optional, Tuple

import networkx as nx

from gridgraph.errors import DanglingReferenceError, InvalidEdgeError
from gridgraph.models import DEFAULT_GRID, Edge, Node, derive_edge_id, quantize

logger = logging.getLogger(__name__)

DEFAULT_MIN_RADIUS = 1.0


class GraphStore:
    """
    Owns both collections and enforces the auto-connect and cascading-delete rules.

    Id policy:
    - monotonic_ids=True: ids come from a counter that never goes back, so a
      freshly created id can never collide with a live node.
    - monotonic_ids=False: id is the current node count, which can repeat an
      id still in use after deletions. The stale node is then evicted.
    """

    def __init__(self, grid: int = DEFAULT_GRID, monotonic_ids: bool = True,
                 min_radius: float = DEFAULT_MIN_RADIUS):
        if grid <= 0:
            raise ValueError(f"Grid unit must be positive, got {grid}")
        self.grid = grid
        self.monotonic_ids = monotonic_ids
        self.min_radius = min_radius
        self.nodes: Dict[str, Node] = {}
        self.edges: Dict[str, Edge] = {}
        self._next_id = 0

    def __len__(self) -> int:
        return len(self.nodes)

    # --- Identity ---

    def _assign_id(self) -> str:
        if not self.monotonic_ids:
            return str(len(self.nodes))
        while str(self._next_id) in self.nodes:
            self._next_id += 1
        node_id = str(self._next_id)
        self._next_id += 1
        return node_id

    def _advance_counter(self) -> None:
        """Move the counter past every numeric id currently stored."""
        numeric = [int(nid) for nid in self.nodes if nid.isdecimal()]
        self._next_id = max([len(self.nodes)] + [n + 1 for n in numeric])

    def quantize(self, value: float) -> int:
        return quantize(value, self.grid)

    # --- Node Operations ---

    def create_node(self, raw_x: float, raw_y: float) -> Node:
        """
        Place a node at the grid point nearest to (raw_x, raw_y) and connect
        it to every existing node.
        """
        node_id = self._assign_id()
        node = Node(
            id=node_id,
            x=self.quantize(raw_x),
            y=self.quantize(raw_y),
            radius=self.grid / 3,
        )

        if node_id in self.nodes:
            logger.warning(f"Node id '{node_id}' already in use, evicting the existing node")
            self.delete_node(node_id)

        existing = list(self.nodes)
        self.nodes[node_id] = node
        for other_id in existing:
            self.add_edge(node_id, other_id)

        logger.debug(f"Created node {node_id} at ({node.x}, {node.y}) with {len(existing)} edges")
        return node

    def get_node(self, node_id: str) -> Optional[Node]:
        return self.nodes.get(node_id)

    def delete_node(self, node_id: str) -> bool:
        """Delete a node and every edge touching it. Unknown ids are ignored."""
        if node_id not in self.nodes:
            return False
        for edge in self.edges_incident_to(node_id):
            del self.edges[edge.id]
        del self.nodes[node_id]
        return True

    def find_node_at(self, x: float, y: float, tolerance: float = 0.0) -> Optional[Node]:
        """First node (insertion order) whose circle strictly contains (x, y)."""
        for node in self.nodes.values():
            if node.contains(x, y, tolerance):
                return node
        return None

    def get_dragging_node(self) -> Optional[Node]:
        for node in self.nodes.values():
            if node.dragging:
                return node
        return None

    def set_dragging(self, node_id: str, dragging: bool) -> None:
        node = self.nodes.get(node_id)
        if node:
            node.dragging = dragging

    def release_all(self) -> None:
        for node in self.nodes.values():
            node.dragging = False

    def move_node(self, node_id: str, raw_x: float, raw_y: float) -> Optional[Node]:
        node = self.nodes.get(node_id)
        if node:
            node.x = self.quantize(raw_x)
            node.y = self.quantize(raw_y)
        return node

    def resize_node(self, node_id: str, delta: float) -> Optional[Node]:
        """Grow or shrink a node's radius; never below min_radius."""
        node = self.nodes.get(node_id)
        if node:
            node.radius = max(self.min_radius, node.radius + delta)
        return node

    def jitter(self, rng: Optional[random.Random] = None) -> None:
        """Nudge every node by up to one grid unit per axis, then snap back to the grid."""
        rng = rng or random.Random()
        for node in self.nodes.values():
            node.x = self.quantize(node.x + rng.uniform(-self.grid, self.grid))
            node.y = self.quantize(node.y + rng.uniform(-self.grid, self.grid))

    # --- Edge Operations ---

    def add_edge(self, node1_id: str, node2_id: str, edge_id: Optional[str] = None) -> Edge:
        """
        Connect two existing nodes.

        The id is derived from the endpoints unless given explicitly; an edge
        with the same id replaces the stored one.

        Raises:
            InvalidEdgeError: an endpoint is missing or both endpoints are the same node
        """
        missing = [nid for nid in (node1_id, node2_id) if nid not in self.nodes]
        if missing:
            raise InvalidEdgeError(
                f"Edge must have two existing nodes, missing: {', '.join(map(str, missing))}",
                node1_id, node2_id,
            )
        if node1_id == node2_id:
            raise InvalidEdgeError(
                f"Edge cannot connect node '{node1_id}' to itself",
                node1_id, node2_id, reason="self_loop",
            )
        edge = Edge(id=edge_id or derive_edge_id(node1_id, node2_id), node1=node1_id, node2=node2_id)
        self.edges[edge.id] = edge
        return edge

    def delete_edge(self, edge_id: str) -> bool:
        return self.edges.pop(edge_id, None) is not None

    def edges_incident_to(self, node_id: str) -> List[Edge]:
        return [edge for edge in self.edges.values() if edge.touches(node_id)]

    # --- Snapshot / Restore ---

    def snapshot(self) -> Tuple[Mapping[str, Node], Mapping[str, Edge]]:
        """Read-only view of the current state, valid until the next mutation."""
        return self.nodes, self.edges

    def clear(self) -> None:
        self.nodes = {}
        self.edges = {}
        self._next_id = 0

    def restore(self, nodes_data: Mapping[str, Mapping[str, Any]],
                edges_data: Mapping[str, Mapping[str, Any]],
                strict: bool = False) -> int:
        """
        Rebuild the store from persisted records, replacing the current state.

        Nodes keep their stored ids, coordinates, radius and dragging flag and
        are not auto-connected. Edges keep their stored ids and are resolved
        against the restored nodes.

        Args:
            nodes_data: node id -> {id, x, y, r, dragging}
            edges_data: edge id -> {id, node1, node2}; endpoints are ids or
                objects carrying an 'id'
            strict: raise on the first rejected edge instead of skipping it;
                the store is left untouched

        Returns:
            Number of edges skipped because an endpoint was missing.

        Raises:
            DanglingReferenceError: strict mode and an edge names an unknown node
            InvalidEdgeError: strict mode and an edge connects a node to itself
        """
        nodes: Dict[str, Node] = {}
        for key, record in nodes_data.items():
            node_id = str(record.get("id", key))
            nodes[node_id] = Node(
                id=node_id,
                x=record["x"],
                y=record["y"],
                radius=record.get("r", self.grid / 3),
                dragging=bool(record.get("dragging", False)),
            )

        edges: Dict[str, Edge] = {}
        skipped = 0
        for key, record in edges_data.items():
            edge_id = str(record.get("id") or key)
            try:
                edges[edge_id] = self._restore_edge(nodes, edge_id, record)
            except DanglingReferenceError as e:
                if strict:
                    raise
                skipped += 1
                logger.warning(f"Skipping edge during restore: {e}")
            except InvalidEdgeError as e:
                if strict:
                    raise
                skipped += 1
                logger.warning(f"Skipping invalid edge '{edge_id}' during restore: {e}")

        # nothing is replaced until every record has been accepted
        self.nodes = nodes
        self.edges = edges
        self._advance_counter()

        logger.info(f"Restored {len(self.nodes)} nodes and {len(self.edges)} edges")
        return skipped

    @staticmethod
    def _restore_edge(nodes: Mapping[str, Node], edge_id: str, record: Mapping[str, Any]) -> Edge:
        node1_id, node2_id = [_endpoint_id(record.get(field)) for field in ("node1", "node2")]
        for node_id in (node1_id, node2_id):
            if node_id is None or node_id not in nodes:
                raise DanglingReferenceError(edge_id, node_id)
        if node1_id == node2_id:
            raise InvalidEdgeError(
                f"Edge cannot connect node '{node1_id}' to itself",
                node1_id, node2_id, reason="self_loop",
            )
        return Edge(id=edge_id, node1=node1_id, node2=node2_id)

    # --- Views ---

    def to_networkx(self) -> nx.Graph:
        """Undirected networkx view with node positions and radii as attributes."""
        G = nx.Graph()
        for node in self.nodes.values():
            G.add_node(node.id, x=node.x, y=node.y, radius=node.radius, dragging=node.dragging)
        G.add_edges_from((edge.node1, edge.node2, {"id": edge.id}) for edge in self.edges.values())
        return G


def _endpoint_id(value: Any) -> Optional[str]:
    if isinstance(value, Mapping):
        value = value.get("id")
    if value is None:
        return None
    return str(value)
