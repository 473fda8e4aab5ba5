"""
Graph integrity errors for GridGraph.
"""

from typing import Optional


class GraphError(Exception):
    """Base class for graph integrity violations."""


class InvalidEdgeError(GraphError):
    """Raised when an edge would reference a missing node or loop onto itself."""
    def __init__(self, message: str, node1: Optional[str] = None, node2: Optional[str] = None,
                 reason: str = "missing_endpoint"):
        self.node1 = node1
        self.node2 = node2
        self.reason = reason
        super().__init__(message)


class DanglingReferenceError(GraphError):
    """Raised when a restored edge names a node that is not part of the restored nodes."""
    def __init__(self, edge_id: str, node_id: Optional[str]):
        self.edge_id = edge_id
        self.node_id = node_id
        super().__init__(f"Edge '{edge_id}' references unknown node '{node_id}'")
