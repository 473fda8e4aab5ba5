"""
PersistenceCodec - JSON round-trip of a GraphStore snapshot.

Two independent documents are produced, one per mapping:

nodes:
{
  "0": {"id": "0", "x": 0, "y": 0, "r": 16.0, "dragging": false},
  "1": {"id": "1", "x": 48, "y": 48, "r": 16.0, "dragging": false}
}

edges (endpoint snapshots are embedded; only their ids are read back):
{
  "0:1": {"id": "0:1",
          "node1": {"id": "1", "x": 48, ...},
          "node2": {"id": "0", "x": 0, ...}}
}

Decoding never raises: absent or malformed input yields an empty graph.
"""

import json
import logging
import math
import numbers
from typing import Any, Dict, Mapping, Optional, Tuple

from gridgraph.graph_store import GraphStore
from gridgraph.models import Edge, Node

logger = logging.getLogger(__name__)

NodeRecords = Dict[str, Dict[str, Any]]
EdgeRecords = Dict[str, Dict[str, Any]]


class CorruptRecordError(ValueError):
    """A persisted document parsed as JSON but does not have the expected shape."""


def _is_number(value: Any) -> bool:
    """Finite int or float; bools, NaN, infinities and ints too large for a float are rejected."""
    if not isinstance(value, numbers.Real) or isinstance(value, bool):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        return False


class PersistenceCodec:
    """Serializes node/edge mappings to text and parses them back into records."""

    def __init__(self, indent: Optional[int] = None):
        self.indent = indent

    def encode(self, nodes: Mapping[str, Node], edges: Mapping[str, Edge]) -> Tuple[str, str]:
        node_doc = {node_id: node.to_record() for node_id, node in nodes.items()}
        edge_doc = {}
        for edge_id, edge in edges.items():
            edge_doc[edge_id] = {
                "id": edge.id,
                "node1": node_doc.get(edge.node1, {"id": edge.node1}),
                "node2": node_doc.get(edge.node2, {"id": edge.node2}),
            }
        return (
            json.dumps(node_doc, indent=self.indent),
            json.dumps(edge_doc, indent=self.indent),
        )

    def decode(self, nodes_text: Optional[str], edges_text: Optional[str]) -> Tuple[NodeRecords, EdgeRecords]:
        """
        Parse both documents into normalised records.

        Returns:
            (node_records, edge_records), or ({}, {}) if either document is
            absent, not JSON, or not shaped as expected
        """
        if not nodes_text or not edges_text:
            return {}, {}
        try:
            node_doc = json.loads(nodes_text)
            edge_doc = json.loads(edges_text)
            nodes = self._parse_nodes(node_doc)
            edges = self._parse_edges(edge_doc)
        except (ValueError, RecursionError) as e:
            # CorruptRecordError and JSONDecodeError are both ValueErrors
            logger.warning(f"Discarding persisted graph: {e}")
            return {}, {}
        return nodes, edges

    def load(self, nodes_text: Optional[str], edges_text: Optional[str], **store_options: Any) -> GraphStore:
        """Decode both documents and restore them into a fresh GraphStore."""
        nodes, edges = self.decode(nodes_text, edges_text)
        store = GraphStore(**store_options)
        store.restore(nodes, edges)
        return store

    def _parse_nodes(self, doc: Any) -> NodeRecords:
        if not isinstance(doc, dict):
            raise CorruptRecordError("nodes document is not an object")
        records = {}
        for key, entry in doc.items():
            if not isinstance(entry, dict):
                raise CorruptRecordError(f"node entry '{key}' is not an object")
            node_id = entry.get("id", key)
            if not isinstance(node_id, (str, int)) or isinstance(node_id, bool):
                raise CorruptRecordError(f"node entry '{key}' has an invalid id")
            for field in ("x", "y"):
                if not _is_number(entry.get(field)):
                    raise CorruptRecordError(f"node '{node_id}' has a non-numeric '{field}'")
            dragging = entry.get("dragging", False)
            if not isinstance(dragging, bool):
                raise CorruptRecordError(f"node '{node_id}' has a non-boolean dragging flag")
            radius = entry.get("r")
            if radius is not None and not _is_number(radius):
                raise CorruptRecordError(f"node '{node_id}' has a non-numeric radius")
            node_id = str(node_id)
            record = {
                "id": node_id,
                "x": entry["x"],
                "y": entry["y"],
                "dragging": dragging,
            }
            # legacy saves may lack a radius; restore() falls back to G/3
            if radius is not None:
                record["r"] = radius
            records[node_id] = record
        return records

    def _parse_edges(self, doc: Any) -> EdgeRecords:
        if not isinstance(doc, dict):
            raise CorruptRecordError("edges document is not an object")
        records = {}
        for key, entry in doc.items():
            if not isinstance(entry, dict):
                raise CorruptRecordError(f"edge entry '{key}' is not an object")
            edge_id = str(entry.get("id") or key)
            endpoints = []
            for field in ("node1", "node2"):
                endpoint = entry.get(field)
                if isinstance(endpoint, dict):
                    endpoint = endpoint.get("id")
                if not isinstance(endpoint, (str, int)) or isinstance(endpoint, bool):
                    raise CorruptRecordError(f"edge '{edge_id}' has no valid '{field}' id")
                endpoints.append(str(endpoint))
            records[edge_id] = {"id": edge_id, "node1": endpoints[0], "node2": endpoints[1]}
        return records
